from __future__ import annotations

import pandas as pd

from employee_scheduling.data_io import shifts_to_frame
from employee_scheduling.domain.models import EmployeeSchedule
from employee_scheduling.scoring import calculate_score, constraint_totals


def validate_schedule(schedule: EmployeeSchedule) -> None:
    # Referential integrity
    schedule.validate()

    blank = [shift.id for shift in schedule.shifts if not str(shift.required_skill).strip()]
    if blank:
        raise ValueError(f"Shifts without a required skill: {blank}")


def summarize_schedule(schedule: EmployeeSchedule) -> str:
    validate_schedule(schedule)
    if not schedule.shifts:
        return "No shifts."

    ts = shifts_to_frame(schedule.shifts)
    # local calendar day of the start, real elapsed minutes
    ts["date"] = [shift.start.date().isoformat() for shift in schedule.shifts]
    ts["minutes"] = [shift.duration_minutes for shift in schedule.shifts]

    coverage = ts.groupby(["date", "location"]).size().unstack(fill_value=0)
    assigned = ts[ts["employee"] != ""]
    unassigned_count = len(ts) - len(assigned)

    lines = ["Shifts per day per location:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append(f"Unassigned shifts: {unassigned_count} of {len(ts)}")
    if not assigned.empty:
        minutes = assigned.groupby("employee")["minutes"].sum().sort_values(ascending=False)
        lines.append("")
        lines.append("Assigned minutes per employee:")
        lines.append(minutes.to_string())
    lines.append("")
    lines.append("Constraint totals:")
    totals = pd.Series(constraint_totals(schedule), name="impact")
    lines.append(totals.to_string())
    lines.append("")
    lines.append(f"Score: {calculate_score(schedule)}")
    return "\n".join(lines)
