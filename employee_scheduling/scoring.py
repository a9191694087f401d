"""Aggregate rule matches into a hard/soft score and explain where it comes from."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from employee_scheduling.constraints import Constraint, ConstraintLevel, registry
from employee_scheduling.domain.models import EmployeeSchedule, Shift

EXPLANATION_COLUMNS = ["constraint", "level", "shift_ids", "employee", "impact"]

_SCORE_PATTERN = re.compile(r"^\s*(-?\d+)hard/(-?\d+)soft\s*$")


@dataclass(frozen=True, order=True)
class HardSoftScore:
    """Two-level score; the schedule is feasible only while the hard part is 0."""

    hard: int = 0
    soft: int = 0

    @property
    def is_feasible(self) -> bool:
        return self.hard == 0

    def __add__(self, other: HardSoftScore) -> HardSoftScore:
        return HardSoftScore(self.hard + other.hard, self.soft + other.soft)

    def __str__(self) -> str:
        return f"{self.hard}hard/{self.soft}soft"

    @classmethod
    def parse(cls, text: str) -> HardSoftScore:
        match = _SCORE_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Cannot parse score '{text}', expected e.g. '0hard/-480soft'")
        return cls(int(match.group(1)), int(match.group(2)))


HardSoftScore.ZERO = HardSoftScore()


@dataclass(frozen=True)
class ConstraintMatch:
    constraint: str
    level: ConstraintLevel
    shift_ids: Tuple[str, ...]
    employee: str
    impact: int


def _shifts_by_employee(schedule: EmployeeSchedule) -> Dict[str, List[Shift]]:
    grouped: Dict[str, List[Shift]] = defaultdict(list)
    for shift in schedule.shifts:
        if shift.employee is not None:
            grouped[shift.employee].append(shift)
    return grouped


def iter_matches(
    schedule: EmployeeSchedule,
    constraints: Optional[Iterable[Constraint]] = None,
) -> Iterator[ConstraintMatch]:
    """
    Evaluate every rule against the current assignment.

    Args:
        schedule: Schedule to score (not modified)
        constraints: Rules to evaluate (default: the full registry)

    Yields:
        One ConstraintMatch per non-zero rule hit, ordered by rule, then shift order

    Raises:
        ValueError: If the schedule fails referential integrity checks
    """
    schedule.validate()
    employees = {employee.name: employee for employee in schedule.employees}
    by_employee = _shifts_by_employee(schedule)

    for constraint in (registry if constraints is None else constraints):
        if constraint.pairwise:
            for name, shifts in by_employee.items():
                for first, second in combinations(shifts, 2):
                    weight = constraint.match_weight(first, second)
                    if weight:
                        yield ConstraintMatch(
                            constraint.name,
                            constraint.level,
                            (first.id, second.id),
                            name,
                            constraint.impact(weight),
                        )
        else:
            for shift in schedule.shifts:
                if shift.employee is None:
                    continue
                weight = constraint.match_weight(shift, employees[shift.employee])
                if weight:
                    yield ConstraintMatch(
                        constraint.name,
                        constraint.level,
                        (shift.id,),
                        shift.employee,
                        constraint.impact(weight),
                    )


def calculate_score(
    schedule: EmployeeSchedule,
    constraints: Optional[Iterable[Constraint]] = None,
) -> HardSoftScore:
    hard = 0
    soft = 0
    for match in iter_matches(schedule, constraints):
        if match.level is ConstraintLevel.HARD:
            hard += match.impact
        else:
            soft += match.impact
    return HardSoftScore(hard, soft)


def constraint_totals(schedule: EmployeeSchedule) -> Dict[str, int]:
    """Signed total per registered rule; rules without matches report 0."""
    totals = {name: 0 for name in registry.names()}
    for match in iter_matches(schedule):
        totals[match.constraint] += match.impact
    return totals


def explain_score(schedule: EmployeeSchedule) -> pd.DataFrame:
    """One row per rule match, for diagnostics."""
    rows = [
        {
            "constraint": match.constraint,
            "level": match.level.value,
            "shift_ids": ",".join(match.shift_ids),
            "employee": match.employee,
            "impact": match.impact,
        }
        for match in iter_matches(schedule)
    ]
    return pd.DataFrame(rows, columns=EXPLANATION_COLUMNS)
