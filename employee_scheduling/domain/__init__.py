"""Domain models for the shift assignment problem."""

from .models import Employee, EmployeeSchedule, Shift

__all__ = [
    "Employee",
    "Shift",
    "EmployeeSchedule",
]
