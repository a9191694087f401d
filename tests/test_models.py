"""Tests for the domain models."""

from datetime import date, datetime

import pytest

from employee_scheduling.domain.models import Employee, EmployeeSchedule, Shift


def _schedule():
    return EmployeeSchedule(
        employees=[Employee("Amy", skills={"Nurse"}), Employee("Beth")],
        shifts=[
            Shift("0", datetime(2021, 2, 1, 9), datetime(2021, 2, 1, 17), "Ward", "Nurse"),
            Shift("1", datetime(2021, 2, 1, 13), datetime(2021, 2, 1, 21), "Ward", "Nurse", employee="Beth"),
        ],
    )


def test_shift_must_end_after_start():
    with pytest.raises(ValueError, match="must end after it starts"):
        Shift("0", datetime(2021, 2, 1, 17), datetime(2021, 2, 1, 9), "Ward", "Nurse")
    with pytest.raises(ValueError):
        Shift("0", datetime(2021, 2, 1, 9), datetime(2021, 2, 1, 9), "Ward", "Nurse")


def test_shift_defaults_to_unassigned():
    shift = Shift("0", datetime(2021, 2, 1, 22), datetime(2021, 2, 2, 6), "Ward", "Nurse")
    assert shift.employee is None
    assert not shift.is_assigned
    assert shift.duration_minutes == 480


def test_employee_is_immutable_and_hashable():
    employee = Employee("Amy", skills=["Nurse", "Nurse"], desired_dates=[date(2021, 2, 1)])
    assert employee.skills == frozenset({"Nurse"})
    assert isinstance(employee.desired_dates, frozenset)
    assert employee.unavailable_dates == frozenset()
    assert hash(employee) == hash(Employee("Amy", skills={"Nurse"}, desired_dates={date(2021, 2, 1)}))
    with pytest.raises(AttributeError):
        employee.name = "Beth"


def test_employee_requires_name():
    with pytest.raises(ValueError):
        Employee("")


def test_lookup_and_assignment():
    schedule = _schedule()
    assert schedule.get_employee("Amy").skills == {"Nurse"}
    assert schedule.get_employee("Zed") is None
    assert schedule.get_shift("1").employee == "Beth"
    assert schedule.get_shift("9") is None

    shift = schedule.assign("0", "Amy")
    assert shift.employee == "Amy"
    assert schedule.employee_of(shift).name == "Amy"
    assert [s.id for s in schedule.assigned_shifts()] == ["0", "1"]
    assert [s.id for s in schedule.shifts_of("Amy")] == ["0"]

    schedule.unassign("0")
    assert schedule.employee_of(schedule.get_shift("0")) is None


def test_assign_rejects_unknown_ids():
    schedule = _schedule()
    with pytest.raises(ValueError, match="Unknown shift"):
        schedule.assign("42", "Amy")
    with pytest.raises(ValueError, match="Unknown employee"):
        schedule.assign("0", "Zed")
    with pytest.raises(ValueError, match="Unknown shift"):
        schedule.unassign("42")


def test_validate_detects_dangling_employee_link():
    schedule = _schedule()
    schedule.shifts[0].employee = "Zed"
    with pytest.raises(ValueError, match="unknown employees"):
        schedule.validate()
    with pytest.raises(ValueError, match="unknown employee 'Zed'"):
        schedule.employee_of(schedule.shifts[0])


def test_validate_detects_duplicates():
    schedule = _schedule()
    schedule.employees.append(Employee("Amy"))
    with pytest.raises(ValueError, match="Duplicate employee names"):
        schedule.validate()

    schedule = _schedule()
    schedule.shifts.append(
        Shift("1", datetime(2021, 2, 2, 9), datetime(2021, 2, 2, 17), "Ward", "Nurse")
    )
    with pytest.raises(ValueError, match="Duplicate shift ids"):
        schedule.validate()


def test_score_is_computed_on_access():
    schedule = _schedule()
    # Beth lacks the Nurse skill
    assert schedule.score.hard == -1
    schedule.unassign("1")
    assert schedule.score.hard == 0
