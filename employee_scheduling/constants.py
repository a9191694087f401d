"""Fixed reference data and tunables for the demo instance and the rules."""

from __future__ import annotations

from datetime import time, timedelta

# Name pools (cross product gives 100 distinct employee names)
FIRST_NAMES = ("Amy", "Beth", "Chad", "Dan", "Elsa", "Flo", "Gus", "Hugo", "Ivy", "Jay")
LAST_NAMES = ("Cole", "Fox", "Green", "Jones", "King", "Li", "Poe", "Rye", "Smith", "Watt")

# Skill pools
REQUIRED_SKILLS = ("Doctor", "Nurse")
OPTIONAL_SKILLS = ("Anaesthetics", "Cardiology")

LOCATIONS = ("Ambulatory care", "Critical care", "Pediatric care")

# Shift timing
SHIFT_LENGTH = timedelta(hours=8)
MORNING_SHIFT_START_TIME = time(6, 0)
DAY_SHIFT_START_TIME = time(9, 0)
AFTERNOON_SHIFT_START_TIME = time(14, 0)
NIGHT_SHIFT_START_TIME = time(22, 0)

SHIFT_START_TIME_COMBOS = (
    (MORNING_SHIFT_START_TIME, AFTERNOON_SHIFT_START_TIME),
    (MORNING_SHIFT_START_TIME, AFTERNOON_SHIFT_START_TIME, NIGHT_SHIFT_START_TIME),
    (
        MORNING_SHIFT_START_TIME,
        DAY_SHIFT_START_TIME,
        AFTERNOON_SHIFT_START_TIME,
        NIGHT_SHIFT_START_TIME,
    ),
)

# Instance size
ROSTER_LENGTH_DAYS = 14
EMPLOYEE_COUNT = 15
LARGE_ROSTER_LENGTH_DAYS = 28
LARGE_EMPLOYEE_COUNT = 50

# Random draws
DEFAULT_SEED = 0
EXTRA_SHIFT_PROBABILITY = 0.1
AVAILABILITY_WEIGHTS = (4, 3, 2, 1)  # how many employees get a date marker per day
SKILL_WEIGHTS = (3, 1)  # how many optional skills an employee holds

# Rules
MIN_REST_MINUTES = 600
