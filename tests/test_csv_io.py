"""Tests for CSV import/export functionality."""

from datetime import date, datetime

import pytest

from employee_scheduling.data_io import (
    EMPLOYEE_COLUMNS,
    SHIFT_COLUMNS,
    employees_to_frame,
    read_employees,
    read_schedule,
    read_shifts,
    shifts_to_frame,
    write_schedule,
)
from employee_scheduling.domain.models import Employee, EmployeeSchedule, Shift


def test_write_and_read_demo_schedule(demo_schedule, tmp_path):
    """Test that a generated instance survives a trip through CSV."""
    out = write_schedule(demo_schedule, tmp_path / "demo")
    assert (out / "employees.csv").exists()
    assert (out / "shifts.csv").exists()

    loaded = read_schedule(out)
    assert loaded.employees == demo_schedule.employees
    assert loaded.shifts == demo_schedule.shifts


def test_frames_use_fixed_columns():
    employee = Employee(
        "Amy",
        skills={"Nurse", "Cardiology"},
        unavailable_dates={date(2021, 2, 2), date(2021, 2, 1)},
    )
    df = employees_to_frame([employee])
    assert list(df.columns) == EMPLOYEE_COLUMNS
    row = df.iloc[0]
    assert row["skills"] == "Cardiology;Nurse"
    assert row["unavailable_dates"] == "2021-02-01;2021-02-02"
    assert row["desired_dates"] == ""

    shift = Shift("7", datetime(2021, 2, 1, 22), datetime(2021, 2, 2, 6), "Ward", "Nurse")
    df = shifts_to_frame([shift])
    assert list(df.columns) == SHIFT_COLUMNS
    assert df.iloc[0]["start"] == "2021-02-01T22:00:00"
    assert df.iloc[0]["employee"] == ""


def test_read_employees_normalizes_columns(tmp_path):
    """Test importing employees with messy headers."""
    csv_content = """ Name ,SKILLS,Unavailable_Dates,undesired_dates,desired_dates
Amy,Nurse;Cardiology,2021-02-01,,2021-02-03;2021-02-04
Beth,,,,
"""
    csv_file = tmp_path / "employees.csv"
    csv_file.write_text(csv_content)

    amy, beth = read_employees(csv_file)
    assert amy.name == "Amy"
    assert amy.skills == {"Nurse", "Cardiology"}
    assert amy.unavailable_dates == {date(2021, 2, 1)}
    assert amy.undesired_dates == frozenset()
    assert amy.desired_dates == {date(2021, 2, 3), date(2021, 2, 4)}
    assert beth.skills == frozenset()


def test_read_shifts_blank_employee_is_unassigned(tmp_path):
    csv_content = """id,start,end,location,required_skill,employee
0,2021-02-01T09:00:00,2021-02-01T17:00:00,Ward,Nurse,Amy
1,2021-02-01T22:00:00,2021-02-02T06:00:00,Ward,Doctor,
"""
    csv_file = tmp_path / "shifts.csv"
    csv_file.write_text(csv_content)

    first, second = read_shifts(csv_file)
    assert first.employee == "Amy"
    assert first.start == datetime(2021, 2, 1, 9)
    assert second.employee is None
    assert second.end == datetime(2021, 2, 2, 6)


def test_read_shifts_without_employee_column(tmp_path):
    csv_file = tmp_path / "shifts.csv"
    csv_file.write_text(
        "id,start,end,location,required_skill\n"
        "0,2021-02-01T09:00:00,2021-02-01T17:00:00,Ward,Nurse\n"
    )
    (shift,) = read_shifts(csv_file)
    assert shift.employee is None


def test_missing_columns(tmp_path):
    csv_file = tmp_path / "employees.csv"
    csv_file.write_text("name,skills\nAmy,Nurse\n")
    with pytest.raises(ValueError, match="missing columns"):
        read_employees(csv_file)


def test_malformed_shift_rejected(tmp_path):
    csv_file = tmp_path / "shifts.csv"
    csv_file.write_text(
        "id,start,end,location,required_skill,employee\n"
        "0,2021-02-01T17:00:00,2021-02-01T09:00:00,Ward,Nurse,\n"
    )
    with pytest.raises(ValueError, match="must end after it starts"):
        read_shifts(csv_file)


def test_read_schedule_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="employees.csv"):
        read_schedule(tmp_path)


def test_read_schedule_rejects_dangling_employee(tmp_path):
    schedule = EmployeeSchedule(
        employees=[Employee("Amy", skills={"Nurse"})],
        shifts=[Shift("0", datetime(2021, 2, 1, 9), datetime(2021, 2, 1, 17), "Ward", "Nurse", "Amy")],
    )
    write_schedule(schedule, tmp_path)
    shifts_file = tmp_path / "shifts.csv"
    shifts_file.write_text(shifts_file.read_text().replace(",Amy", ",Zed"))

    with pytest.raises(ValueError, match="unknown employees"):
        read_schedule(tmp_path)
