"""Load and validate demo data configuration (YAML or JSON)."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields, replace
from datetime import time, timedelta
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from employee_scheduling import constants
from employee_scheduling.random_source import available_sequences

logger = logging.getLogger(__name__)

_LIST_SETTINGS = ("first_names", "last_names", "required_skills", "optional_skills", "locations")
_INT_SETTINGS = ("roster_length_days", "employee_count", "seed")


@dataclass(frozen=True)
class DemoDataConfig:
    """Static reference data injected into the demo data generator."""

    first_names: Tuple[str, ...] = constants.FIRST_NAMES
    last_names: Tuple[str, ...] = constants.LAST_NAMES
    required_skills: Tuple[str, ...] = constants.REQUIRED_SKILLS
    optional_skills: Tuple[str, ...] = constants.OPTIONAL_SKILLS
    locations: Tuple[str, ...] = constants.LOCATIONS
    shift_start_time_combos: Tuple[Tuple[time, ...], ...] = constants.SHIFT_START_TIME_COMBOS
    shift_length: timedelta = constants.SHIFT_LENGTH
    roster_length_days: int = constants.ROSTER_LENGTH_DAYS
    employee_count: int = constants.EMPLOYEE_COUNT
    extra_shift_probability: float = constants.EXTRA_SHIFT_PROBABILITY
    availability_weights: Tuple[int, ...] = constants.AVAILABILITY_WEIGHTS
    skill_weights: Tuple[int, ...] = constants.SKILL_WEIGHTS
    seed: int = constants.DEFAULT_SEED
    random_sequence: str = "lcg48"

    def __post_init__(self) -> None:
        for name in _LIST_SETTINGS:
            value = getattr(self, name)
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ValueError(f"{name} must be a list, got {value!r}")
            if not value:
                raise ValueError(f"{name} must not be empty")
        if not self.shift_start_time_combos or not all(self.shift_start_time_combos):
            raise ValueError("shift_start_time_combos must hold at least one non-empty template")
        if not isinstance(self.shift_length, timedelta) or self.shift_length <= timedelta(0):
            raise ValueError(f"shift_length must be positive, got {self.shift_length!r}")
        # type checks come first so bad values never reach a comparison
        for name in _INT_SETTINGS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.roster_length_days < 1:
            raise ValueError(f"roster_length_days must be >= 1, got {self.roster_length_days}")
        if self.employee_count < 1:
            raise ValueError(f"employee_count must be >= 1, got {self.employee_count}")
        probability = self.extra_shift_probability
        if isinstance(probability, bool) or not isinstance(probability, (int, float)):
            raise ValueError(f"extra_shift_probability must be a number, got {probability!r}")
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"extra_shift_probability must be within [0, 1], got {probability}")
        for name in ("availability_weights", "skill_weights"):
            weights = getattr(self, name)
            if (
                not weights
                or any(isinstance(w, bool) or not isinstance(w, int) for w in weights)
                or any(w <= 0 for w in weights)
            ):
                raise ValueError(f"{name} must be non-empty positive integers, got {weights}")
        if (
            not isinstance(self.random_sequence, str)
            or self.random_sequence.lower() not in available_sequences()
        ):
            raise ValueError(
                f"Unknown random sequence {self.random_sequence!r}, "
                f"expected one of {available_sequences()}"
            )

    @property
    def name_pool_size(self) -> int:
        return len(self.first_names) * len(self.last_names)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: Optional[DemoDataConfig] = None) -> DemoDataConfig:
        """
        Build a config from plain values, on top of ``base`` (default: built-ins).

        Times may be given as "HH:MM" strings and ``shift_length`` as hours
        (``shift_length_hours``) or a timedelta. Numbers may be given as
        numeric strings.

        Raises:
            ValueError: On unknown keys or malformed values
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key == "shift_length_hours":
                values["shift_length"] = timedelta(hours=_as_number(key, raw, float))
                continue
            if key not in known:
                raise ValueError(f"Unknown demo data setting '{key}'")
            if key == "shift_start_time_combos":
                values[key] = tuple(
                    tuple(_parse_time(t) for t in _as_list(key, combo)) for combo in _as_list(key, raw)
                )
            elif key == "shift_length":
                if isinstance(raw, timedelta):
                    values[key] = raw
                else:
                    values[key] = timedelta(hours=_as_number(key, raw, float))
            elif key in ("availability_weights", "skill_weights"):
                values[key] = tuple(_as_number(key, w, int) for w in _as_list(key, raw))
            elif key in _LIST_SETTINGS:
                values[key] = tuple(str(item) for item in _as_list(key, raw))
            elif key in _INT_SETTINGS:
                values[key] = _as_number(key, raw, int)
            elif key == "extra_shift_probability":
                values[key] = _as_number(key, raw, float)
            else:
                values[key] = str(raw)
        return replace(base or cls(), **values)


def _as_list(key: str, value: Any) -> list:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ValueError(f"Setting '{key}' must be a list, got {value!r}")
    return list(value)


def _as_number(key: str, value: Any, kind: type) -> Any:
    expected = "a number" if kind is float else "an integer"
    if isinstance(value, bool):
        raise ValueError(f"Setting '{key}' must be {expected}, got {value!r}")
    try:
        number = float(value) if kind is float else int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError(f"Setting '{key}' must be {expected}, got {value!r}") from None
    if kind is float and not math.isfinite(number):
        raise ValueError(f"Setting '{key}' must be finite, got {value!r}")
    return number


def _parse_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    # YAML 1.1 reads unquoted 06:00 as sexagesimal minutes
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < 24 * 60:
            raise ValueError(f"Invalid time '{value}', expected HH:MM")
        return time(value // 60, value % 60)
    text = str(value).strip()
    try:
        hour, minute = [int(x) for x in text.split(":")]
        return time(hour, minute)
    except ValueError:
        raise ValueError(f"Invalid time '{value}', expected HH:MM") from None


def load_config(path: str | Path) -> DemoDataConfig:
    """
    Read a demo data config file.

    YAML (.yaml/.yml) and JSON (.json) are supported. Settings may sit at the
    top level or under a ``demo_data`` section.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: On an unsupported suffix or invalid settings
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            raw = yaml.safe_load(f) or {}
        elif suffix == ".json":
            raw = json.load(f)
        else:
            raise ValueError(f"Unsupported config format '{suffix}' for {path}")

    if not isinstance(raw, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    section = raw.get("demo_data", raw)
    cfg = DemoDataConfig.from_dict(section)
    logger.debug("Loaded demo data config from %s", path)
    return cfg
