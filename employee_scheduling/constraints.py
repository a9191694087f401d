"""
Registry of scoring rules for shift assignments.

Every rule is a pure function returning a non-negative match weight. The
registry entry decides whether that weight counts against the hard or soft
level and whether it is a penalty or a reward, so an optimizer can evaluate,
weight and explain rules one at a time.

Rule signatures:
    rule(shift, employee) -> int            single-shift rules
    rule(shift1, shift2) -> int             pairwise rules (pairwise=True)

Weights are minutes unless a rule says otherwise. Unassigned shifts never
match.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import AbstractSet, Callable, Dict, Iterator, List

from employee_scheduling.constants import MIN_REST_MINUTES
from employee_scheduling.domain.models import Employee, Shift, elapsed


class ConstraintLevel(str, Enum):
    HARD = "hard"
    SOFT = "soft"


@dataclass(frozen=True)
class Constraint:
    """A named rule plus how its match weight feeds the score."""

    name: str
    level: ConstraintLevel
    reward: bool
    pairwise: bool
    match_weight: Callable[..., int]

    def impact(self, weight: int) -> int:
        """Signed score contribution for a match weight."""
        return weight if self.reward else -weight


class ConstraintRegistry:
    def __init__(self):
        self._constraints: Dict[str, Constraint] = {}

    def penalize(self, name: str, level: ConstraintLevel, pairwise: bool = False):
        return self._register(name, level, reward=False, pairwise=pairwise)

    def reward(self, name: str, level: ConstraintLevel, pairwise: bool = False):
        return self._register(name, level, reward=True, pairwise=pairwise)

    def _register(self, name: str, level: ConstraintLevel, reward: bool, pairwise: bool):
        def decorator(fn):
            if name in self._constraints:
                raise ValueError(f"Constraint '{name}' is already registered")
            self._constraints[name] = Constraint(name, level, reward, pairwise, fn)
            return fn
        return decorator

    def __getitem__(self, name: str) -> Constraint:
        return self._constraints[name]

    def __iter__(self) -> Iterator[Constraint]:
        return iter(list(self._constraints.values()))

    def __len__(self) -> int:
        return len(self._constraints)

    def names(self) -> List[str]:
        return list(self._constraints)


registry = ConstraintRegistry()


# -----------------------------
# TIME ARITHMETIC
# -----------------------------

def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end`` (negative if end is earlier)."""
    return int(elapsed(start, end).total_seconds() / 60)


def overlap_minutes(start1: datetime, end1: datetime, start2: datetime, end2: datetime) -> int:
    """Length in minutes of the intersection of two half-open intervals."""
    # compare on the timeline, not the wall clock
    latest_start = start2 if elapsed(start1, start2) > timedelta(0) else start1
    earliest_end = end2 if elapsed(end1, end2) < timedelta(0) else end1
    return max(0, minutes_between(latest_start, earliest_end))


def day_overlap_minutes(shift: Shift, dates: AbstractSet[date]) -> int:
    """
    Minutes of ``shift`` falling on any of ``dates``.

    Each calendar day the shift touches is measured separately, so a night
    shift accrues minutes against both days when both are listed.
    """
    if not dates:
        return 0
    total = 0
    day = shift.start.date()
    tz = shift.start.tzinfo
    end = shift.end.astimezone(tz) if tz is not None and shift.end.tzinfo is not None else shift.end
    last_day = end.date()
    while day <= last_day:
        if day in dates:
            day_start = datetime.combine(day, time.min, tzinfo=tz)
            day_end = day_start + timedelta(days=1)
            total += overlap_minutes(shift.start, shift.end, day_start, day_end)
        day += timedelta(days=1)
    return total


def _assigned_to(shift: Shift, employee: Employee) -> bool:
    return shift.employee is not None and shift.employee == employee.name


def _same_employee(shift1: Shift, shift2: Shift) -> bool:
    return (
        shift1.employee is not None
        and shift1.employee == shift2.employee
        and shift1.id != shift2.id
    )


# -----------------------------
# HARD CONSTRAINTS
# -----------------------------

@registry.penalize("Missing required skill", ConstraintLevel.HARD)
def required_skill(shift: Shift, employee: Employee) -> int:
    """1 when the assigned employee lacks the shift's skill (count, not minutes)."""
    if not _assigned_to(shift, employee):
        return 0
    return 0 if shift.required_skill in employee.skills else 1


@registry.penalize("Overlapping shift", ConstraintLevel.HARD, pairwise=True)
def no_overlapping_shifts(shift1: Shift, shift2: Shift) -> int:
    """Minutes two shifts of the same employee run at the same time."""
    if not _same_employee(shift1, shift2):
        return 0
    return overlap_minutes(shift1.start, shift1.end, shift2.start, shift2.end)


@registry.penalize("At least 10 hours between 2 shifts", ConstraintLevel.HARD, pairwise=True)
def at_least_10_hours_between_two_shifts(shift1: Shift, shift2: Shift) -> int:
    """Minutes of rest missing between consecutive shifts of the same employee.

    The pair is measured once, from whichever shift ends first to the one that
    starts after it. Overlapping shifts are left to the overlap rule.
    """
    if not _same_employee(shift1, shift2):
        return 0
    if elapsed(shift1.end, shift2.start) >= timedelta(0):
        gap = minutes_between(shift1.end, shift2.start)
    elif elapsed(shift2.end, shift1.start) >= timedelta(0):
        gap = minutes_between(shift2.end, shift1.start)
    else:
        return 0
    return max(0, MIN_REST_MINUTES - gap)


@registry.penalize("Unavailable employee", ConstraintLevel.HARD)
def unavailable_employee(shift: Shift, employee: Employee) -> int:
    if not _assigned_to(shift, employee):
        return 0
    return day_overlap_minutes(shift, employee.unavailable_dates)


# -----------------------------
# SOFT CONSTRAINTS
# -----------------------------

@registry.penalize("Undesired day for employee", ConstraintLevel.SOFT)
def undesired_day_for_employee(shift: Shift, employee: Employee) -> int:
    if not _assigned_to(shift, employee):
        return 0
    return day_overlap_minutes(shift, employee.undesired_dates)


@registry.reward("Desired day for employee", ConstraintLevel.SOFT)
def desired_day_for_employee(shift: Shift, employee: Employee) -> int:
    if not _assigned_to(shift, employee):
        return 0
    return day_overlap_minutes(shift, employee.desired_dates)
