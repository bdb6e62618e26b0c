"""Rate schedule loading.

Schedules are read from {year}.yaml, first in the configured schedules_dir
(settings.json), then in the packaged config/rate_schedules/ directory.
Each year is parsed and validated once per process and shared read-only.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import get_schedules_dir, get_setting
from .schemas import RateSchedules

logger = logging.getLogger(__name__)

PACKAGED_SCHEDULES_DIR = Path(__file__).resolve().parent.parent.parent / "config" / "rate_schedules"
DEFAULT_SCHEDULE_YEAR = 2025


class UnconfiguredScheduleError(Exception):
    """Raised when no valid rate schedule exists for the requested year."""
    pass


def _search_dirs(schedules_dir: Optional[Path] = None) -> List[Path]:
    dirs = []
    custom = schedules_dir or get_schedules_dir()
    if custom:
        dirs.append(Path(custom))
    dirs.append(PACKAGED_SCHEDULES_DIR)
    return dirs


def find_schedule_file(year: Union[int, str], schedules_dir: Optional[Path] = None) -> Path:
    """Locate the YAML file for a year.

    Raises:
        UnconfiguredScheduleError: If no directory holds {year}.yaml
    """
    searched = []
    for directory in _search_dirs(schedules_dir):
        candidate = directory / f"{year}.yaml"
        searched.append(str(candidate))
        if candidate.exists():
            return candidate

    raise UnconfiguredScheduleError(
        f"No rate schedule configured for {year}. Checked:\n"
        + "\n".join(f"  - {p}" for p in searched)
    )


def parse_rate_schedules(data: dict, source: str = "<dict>") -> RateSchedules:
    """Validate raw schedule data.

    Raises:
        UnconfiguredScheduleError: If the data fails validation
    """
    try:
        return RateSchedules.model_validate(data)
    except ValidationError as e:
        raise UnconfiguredScheduleError(f"Invalid rate schedule in {source}:\n{e}") from e


@lru_cache(maxsize=None)
def _load_cached(year: str, schedules_dir: Optional[str]) -> RateSchedules:
    path = find_schedule_file(year, Path(schedules_dir) if schedules_dir else None)
    logger.debug(f"loading rate schedules for {year} from {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise UnconfiguredScheduleError(f"Invalid rate schedule in {path}: expected a mapping")

    schedules = parse_rate_schedules(data, source=str(path))
    if str(schedules.year) != year:
        raise UnconfiguredScheduleError(
            f"{path} declares year {schedules.year}, expected {year}"
        )

    logger.debug(
        f"loaded {len(schedules.social_insurance.brackets)} social-insurance brackets for {year}"
    )
    return schedules


def load_rate_schedules(
    year: Optional[Union[int, str]] = None,
    schedules_dir: Optional[Path] = None,
) -> RateSchedules:
    """Load the rate schedules for a year (memoized).

    Args:
        year: Effective year. Defaults to settings.json 'schedule_year',
              then DEFAULT_SCHEDULE_YEAR.
        schedules_dir: Directory searched before the packaged schedules.
              Defaults to settings.json 'schedules_dir'.

    Raises:
        UnconfiguredScheduleError: If the year has no valid schedule file
    """
    if year is None:
        year = get_setting("schedule_year", DEFAULT_SCHEDULE_YEAR)
    custom = schedules_dir or get_schedules_dir()
    return _load_cached(str(year), str(custom) if custom else None)


def clear_schedule_cache() -> None:
    """Forget memoized schedules (e.g. after editing a custom schedule file)."""
    _load_cached.cache_clear()


def list_schedule_years(schedules_dir: Optional[Path] = None) -> List[int]:
    """List years with a schedule file in any search directory."""
    years = set()
    for directory in _search_dirs(schedules_dir):
        if not directory.is_dir():
            continue
        for path in directory.glob("*.yaml"):
            if path.stem.isdigit():
                years.add(int(path.stem))
    return sorted(years)
