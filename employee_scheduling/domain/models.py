"""Plain data models for employees, shifts and the schedule being optimized."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import TYPE_CHECKING, FrozenSet, Iterable, List, Optional

if TYPE_CHECKING:
    from employee_scheduling.scoring import HardSoftScore


def elapsed(start: datetime, end: datetime) -> timedelta:
    """Real time from ``start`` to ``end``.

    Aware datetimes are compared in UTC, so a day that loses or gains an hour
    to daylight saving is measured as 23 or 25 hours.
    """
    if start.tzinfo is not None and end.tzinfo is not None:
        return end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return end - start


@dataclass(frozen=True)
class Employee:
    """Employee fact with skills and date preferences.

    ``name`` is the identity key. The collections are copied into frozensets so
    an Employee never changes once built.
    """

    name: str
    skills: FrozenSet[str] = field(default_factory=frozenset)
    unavailable_dates: FrozenSet[date] = field(default_factory=frozenset)
    undesired_dates: FrozenSet[date] = field(default_factory=frozenset)
    desired_dates: FrozenSet[date] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Employee name must be a non-empty string")
        for attr in ("skills", "unavailable_dates", "undesired_dates", "desired_dates"):
            value = getattr(self, attr)
            object.__setattr__(self, attr, frozenset(value or ()))

    def __repr__(self) -> str:
        return f"<Employee(name='{self.name}', skills={sorted(self.skills)})>"


@dataclass
class Shift:
    """A shift to be worked at one location.

    ``employee`` is the assigned employee's name, or None while unassigned.
    It is the only field an optimizer rewrites.
    """

    id: str
    start: datetime
    end: datetime
    location: str
    required_skill: str
    employee: Optional[str] = None

    def __post_init__(self) -> None:
        if elapsed(self.start, self.end) <= timedelta(0):
            raise ValueError(
                f"Shift {self.id} must end after it starts: {self.start} - {self.end}"
            )

    @property
    def is_assigned(self) -> bool:
        return self.employee is not None

    @property
    def duration_minutes(self) -> int:
        return int(elapsed(self.start, self.end).total_seconds() // 60)

    def __repr__(self) -> str:
        return (
            f"<Shift(id={self.id}, {self.start:%Y-%m-%d %H:%M}-{self.end:%H:%M}, "
            f"location='{self.location}', skill='{self.required_skill}', employee={self.employee!r})>"
        )


@dataclass
class EmployeeSchedule:
    """The unit an optimizer works on: employee facts plus the shifts to fill."""

    employees: List[Employee] = field(default_factory=list)
    shifts: List[Shift] = field(default_factory=list)

    def get_employee(self, name: str) -> Optional[Employee]:
        """Get employee by name."""
        for employee in self.employees:
            if employee.name == name:
                return employee
        return None

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        """Get shift by id."""
        for shift in self.shifts:
            if shift.id == shift_id:
                return shift
        return None

    def employee_of(self, shift: Shift) -> Optional[Employee]:
        """Resolve the employee assigned to ``shift``.

        Raises:
            ValueError: If the shift points at a name that is not in ``employees``
        """
        if shift.employee is None:
            return None
        employee = self.get_employee(shift.employee)
        if employee is None:
            raise ValueError(f"Shift {shift.id} is assigned to unknown employee '{shift.employee}'")
        return employee

    def assigned_shifts(self) -> List[Shift]:
        return [shift for shift in self.shifts if shift.is_assigned]

    def shifts_of(self, name: str) -> List[Shift]:
        return [shift for shift in self.shifts if shift.employee == name]

    def assign(self, shift_id: str, employee_name: str) -> Shift:
        """Point a shift at an employee.

        Raises:
            ValueError: If the shift id or employee name is unknown
        """
        shift = self.get_shift(shift_id)
        if shift is None:
            raise ValueError(f"Unknown shift id '{shift_id}'")
        if self.get_employee(employee_name) is None:
            raise ValueError(f"Unknown employee '{employee_name}'")
        shift.employee = employee_name
        return shift

    def unassign(self, shift_id: str) -> Shift:
        """Clear a shift's assignment.

        Raises:
            ValueError: If the shift id is unknown
        """
        shift = self.get_shift(shift_id)
        if shift is None:
            raise ValueError(f"Unknown shift id '{shift_id}'")
        shift.employee = None
        return shift

    def validate(self) -> None:
        """
        Check referential integrity of the schedule.

        Raises:
            ValueError: On duplicate employee names, duplicate shift ids or a
                shift assigned to an employee that is not part of the schedule
        """
        names = [employee.name for employee in self.employees]
        duplicate_names = _duplicates(names)
        if duplicate_names:
            raise ValueError(f"Duplicate employee names: {duplicate_names}")

        duplicate_ids = _duplicates(shift.id for shift in self.shifts)
        if duplicate_ids:
            raise ValueError(f"Duplicate shift ids: {duplicate_ids}")

        known = set(names)
        dangling = [
            shift.id for shift in self.shifts
            if shift.employee is not None and shift.employee not in known
        ]
        if dangling:
            raise ValueError(f"Shifts reference unknown employees: {dangling}")

    @property
    def score(self) -> HardSoftScore:
        """Score of the current assignment, computed on every access."""
        from employee_scheduling.scoring import calculate_score

        return calculate_score(self)


def _duplicates(values: Iterable[str]) -> List[str]:
    seen = set()
    duplicates: List[str] = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates
