from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import FrozenSet, List

import pandas as pd

from employee_scheduling.domain.models import Employee, EmployeeSchedule, Shift

logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = ["name", "skills", "unavailable_dates", "undesired_dates", "desired_dates"]
SHIFT_COLUMNS = ["id", "start", "end", "location", "required_skill", "employee"]

EMPLOYEES_FILE = "employees.csv"
SHIFTS_FILE = "shifts.csv"

_SEPARATOR = ";"


def _join(values) -> str:
    return _SEPARATOR.join(str(v) for v in sorted(values))


def _split(cell) -> List[str]:
    if pd.isna(cell) or str(cell).strip() == "":
        return []
    return [part.strip() for part in str(cell).split(_SEPARATOR) if part.strip()]


def _dates(cell) -> FrozenSet[date]:
    return frozenset(date.fromisoformat(part) for part in _split(cell))


def employees_to_frame(employees: List[Employee]) -> pd.DataFrame:
    rows = [
        {
            "name": e.name,
            "skills": _join(e.skills),
            "unavailable_dates": _join(d.isoformat() for d in e.unavailable_dates),
            "undesired_dates": _join(d.isoformat() for d in e.undesired_dates),
            "desired_dates": _join(d.isoformat() for d in e.desired_dates),
        }
        for e in employees
    ]
    return pd.DataFrame(rows, columns=EMPLOYEE_COLUMNS)


def shifts_to_frame(shifts: List[Shift]) -> pd.DataFrame:
    rows = [
        {
            "id": s.id,
            "start": s.start.isoformat(),
            "end": s.end.isoformat(),
            "location": s.location,
            "required_skill": s.required_skill,
            "employee": s.employee or "",
        }
        for s in shifts
    ]
    return pd.DataFrame(rows, columns=SHIFT_COLUMNS)


def write_schedule(schedule: EmployeeSchedule, out_dir: str | Path) -> Path:
    """Write employees.csv and shifts.csv into ``out_dir`` (created if missing)."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    employees_to_frame(schedule.employees).to_csv(out_dir / EMPLOYEES_FILE, index=False)
    shifts_to_frame(schedule.shifts).to_csv(out_dir / SHIFTS_FILE, index=False)
    logger.info(
        "Wrote %d employees and %d shifts to %s",
        len(schedule.employees), len(schedule.shifts), out_dir,
    )
    return out_dir


def read_employees(path: str | Path) -> List[Employee]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    missing = [c for c in EMPLOYEE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing columns: {missing}")

    employees = []
    for _, row in df.iterrows():
        employees.append(
            Employee(
                name=str(row["name"]).strip(),
                skills=frozenset(_split(row["skills"])),
                unavailable_dates=_dates(row["unavailable_dates"]),
                undesired_dates=_dates(row["undesired_dates"]),
                desired_dates=_dates(row["desired_dates"]),
            )
        )
    logger.debug("Read %d employees from %s", len(employees), path)
    return employees


def read_shifts(path: str | Path) -> List[Shift]:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.lower().str.strip()
    missing = [c for c in SHIFT_COLUMNS if c not in df.columns and c != "employee"]
    if missing:
        raise ValueError(f"{path} is missing columns: {missing}")

    shifts = []
    for _, row in df.iterrows():
        employee = str(row.get("employee", "")).strip()
        shifts.append(
            Shift(
                id=str(row["id"]).strip(),
                start=pd.Timestamp(row["start"]).to_pydatetime(),
                end=pd.Timestamp(row["end"]).to_pydatetime(),
                location=str(row["location"]),
                required_skill=str(row["required_skill"]),
                employee=employee or None,
            )
        )
    logger.debug("Read %d shifts from %s", len(shifts), path)
    return shifts


def read_schedule(data_dir: str | Path) -> EmployeeSchedule:
    """Load a schedule written by ``write_schedule``.

    Raises:
        FileNotFoundError: If either CSV is missing
        ValueError: On malformed rows or broken employee links
    """
    data_dir = Path(data_dir)
    for name in (EMPLOYEES_FILE, SHIFTS_FILE):
        if not (data_dir / name).exists():
            raise FileNotFoundError(f"Missing {name} in {data_dir}")
    schedule = EmployeeSchedule(
        employees=read_employees(data_dir / EMPLOYEES_FILE),
        shifts=read_shifts(data_dir / SHIFTS_FILE),
    )
    schedule.validate()
    return schedule
