"""
Deterministic demo instance generator.

Draw order (fixed, it defines the instance for a given seed):
1. Shuffle the first x last name pool, take the first ``employee_count`` names
2. Per employee: optional skill subset, then one required skill
3. Per day: employees receiving a date marker, one marker kind per employee,
   then that day's shifts location by location, start time by start time
   (extra-shift draw, then pool draw and skill draw per shift)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple, TypeVar

from employee_scheduling import constants
from employee_scheduling.config import DemoDataConfig
from employee_scheduling.domain.models import Employee, EmployeeSchedule, Shift
from employee_scheduling.random_source import SeededSequence, make_sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNAVAILABLE, UNDESIRED, DESIRED = 0, 1, 2


class DemoData(Enum):
    SMALL = "small"
    LARGE = "large"


def config_for(demo: DemoData, base: Optional[DemoDataConfig] = None) -> DemoDataConfig:
    """Size preset applied on top of ``base``."""
    cfg = base or DemoDataConfig()
    if demo is DemoData.LARGE:
        return replace(
            cfg,
            roster_length_days=constants.LARGE_ROSTER_LENGTH_DAYS,
            employee_count=constants.LARGE_EMPLOYEE_COUNT,
        )
    return cfg


def next_monday(today: date) -> date:
    """The Monday on or after ``today``."""
    return today + timedelta(days=(7 - today.weekday()) % 7)


def join_all_combinations(*parts: Sequence[str]) -> List[str]:
    """Every combination of one item per part, joined by a space.

    The first part varies fastest: ("Amy Cole", "Beth Cole", ...).
    """
    size = 1
    for part in parts:
        size *= len(part)
    combinations = []
    for i in range(size):
        words = []
        stride = 1
        for part in parts:
            words.append(part[(i // stride) % len(part)])
            stride *= len(part)
        combinations.append(" ".join(words))
    return combinations


def pick_random(source: Sequence[T], rng: SeededSequence) -> T:
    return source[rng.next_int(len(source))]


def pick_subset(items: Sequence[T], weights: Sequence[int], rng: SeededSequence) -> List[T]:
    """
    Pick a random subset whose size follows ``weights``.

    ``weights[i]`` is the relative likelihood of picking ``i + 1`` items. The
    members are a uniform sample: a shuffled copy of ``items``, cut to size.

    Raises:
        ValueError: If weights is empty or holds a non-positive value
    """
    if not weights or any(w <= 0 for w in weights):
        raise ValueError(f"Subset weights must be positive integers, got {list(weights)}")
    choice = rng.next_int(sum(weights))
    index = 0
    while choice >= weights[index]:
        choice -= weights[index]
        index += 1
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled[:min(index + 1, len(shuffled))]


def _generate_shifts_for_timeslot(
    start: datetime,
    end: datetime,
    location: str,
    cfg: DemoDataConfig,
    rng: SeededSequence,
) -> List[Tuple[datetime, datetime, str, str]]:
    shift_count = 1
    if rng.next_double() > 1.0 - cfg.extra_shift_probability:
        shift_count += 1

    slots = []
    for _ in range(shift_count):
        if rng.next_boolean():
            required_skill = pick_random(cfg.required_skills, rng)
        else:
            required_skill = pick_random(cfg.optional_skills, rng)
        slots.append((start, end, location, required_skill))
    return slots


def _generate_shifts_for_day(
    day: date,
    start_times_by_location: Dict[str, tuple],
    cfg: DemoDataConfig,
    rng: SeededSequence,
) -> List[Tuple[datetime, datetime, str, str]]:
    slots = []
    for location in cfg.locations:
        for start_time in start_times_by_location[location]:
            start = datetime.combine(day, start_time)
            end = start + cfg.shift_length
            slots.extend(_generate_shifts_for_timeslot(start, end, location, cfg, rng))
    return slots


def generate_demo_data(
    demo: DemoData = DemoData.SMALL,
    config: Optional[DemoDataConfig] = None,
    seed: Optional[int] = None,
    today: Optional[date] = None,
    rng: Optional[SeededSequence] = None,
) -> EmployeeSchedule:
    """
    Generate a demo schedule with unassigned shifts.

    Args:
        demo: Size preset
        config: Reference data and tunables (default: built-in hospital data)
        seed: Overrides ``config.seed``
        today: Reference date; the roster starts the Monday on or after it
        rng: Explicit seeded sequence (overrides seed and ``config.random_sequence``)

    Returns:
        EmployeeSchedule with employees carrying date preferences and all
        shifts unassigned, ids "0", "1", ... in generation order

    Raises:
        ValueError: If the name pool cannot supply ``employee_count`` names
    """
    cfg = config_for(demo, config)
    if cfg.name_pool_size < cfg.employee_count:
        raise ValueError(
            f"Name pool of {cfg.name_pool_size} cannot supply {cfg.employee_count} employees"
        )
    if rng is None:
        rng = make_sequence(cfg.random_sequence, cfg.seed if seed is None else seed)

    start_date = next_monday(today or date.today())

    start_times_by_location: Dict[str, tuple] = {}
    template_index = 0
    for location in cfg.locations:
        start_times_by_location[location] = tuple(cfg.shift_start_time_combos[template_index])
        template_index = (template_index + 1) % len(cfg.shift_start_time_combos)

    names = join_all_combinations(cfg.first_names, cfg.last_names)
    rng.shuffle(names)

    names = names[:cfg.employee_count]
    skills: Dict[str, Set[str]] = {}
    for name in names:
        employee_skills = set(pick_subset(cfg.optional_skills, cfg.skill_weights, rng))
        employee_skills.add(pick_random(cfg.required_skills, rng))
        skills[name] = employee_skills

    marked_dates: Dict[str, Tuple[Set[date], Set[date], Set[date]]] = {
        name: (set(), set(), set()) for name in names
    }
    slots: List[Tuple[datetime, datetime, str, str]] = []
    for offset in range(cfg.roster_length_days):
        day = start_date + timedelta(days=offset)
        for name in pick_subset(names, cfg.availability_weights, rng):
            marked_dates[name][rng.next_int(3)].add(day)
        slots.extend(_generate_shifts_for_day(day, start_times_by_location, cfg, rng))

    employees = [
        Employee(
            name=name,
            skills=skills[name],
            unavailable_dates=marked_dates[name][UNAVAILABLE],
            undesired_dates=marked_dates[name][UNDESIRED],
            desired_dates=marked_dates[name][DESIRED],
        )
        for name in names
    ]
    shifts = [
        Shift(id=str(i), start=start, end=end, location=location, required_skill=skill)
        for i, (start, end, location, skill) in enumerate(slots)
    ]
    logger.info(
        "Generated %s demo data: %d employees, %d shifts from %s",
        demo.value, len(employees), len(shifts), start_date,
    )
    return EmployeeSchedule(employees=employees, shifts=shifts)
