"""Load episode and habit-log records from a JSON export."""

import json
import logging
import os
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path

from headache_insights.aggregation import round_half_up
from headache_insights.models import HabitLog, HeadacheEpisode, to_local_naive

logger = logging.getLogger("headache-insights")

# Default export location, overridable via HEADACHE_INSIGHTS_DATA
DEFAULT_DATA_PATH = Path(
    os.environ.get(
        "HEADACHE_INSIGHTS_DATA",
        str(Path.home() / ".headache-insights" / "data.json"),
    )
)

# Export field name -> HeadacheEpisode attribute
EPISODE_FIELDS = {
    "durationMin": "duration_min",
    "intensity": "intensity",
    "location": "location",
    "quality": "quality",
    "triggers": "triggers",
    "usedDevice": "used_device",
    "deviceMode": "device_mode",
    "deviceDuration": "device_duration",
    "deviceTemp": "device_temp",
    "devicePressure": "device_pressure",
    "devicePattern": "device_pattern",
    "deviceEffectiveness": "device_effectiveness",
    "deviceNotes": "device_notes",
    "barometricPressure": "barometric_pressure",
    "notes": "notes",
}

# Export field name -> HabitLog attribute
HABIT_FIELDS = {
    "sugar": "sugar",
    "starch": "starch",
    "dairy": "dairy",
    "caffeine": "caffeine",
    "hydration": "hydration",
    "skippedMeals": "skipped_meals",
    "sleepDuration": "sleep_duration",
    "sleepQuality": "sleep_quality",
    "stress": "stress",
    "exercise": "exercise",
    "exerciseIntensity": "exercise_intensity",
    "barometricPressure": "barometric_pressure",
    "weather": "weather",
    "menstruation": "menstruation",
    "menstruationPhase": "menstruation_phase",
    "notes": "notes",
}

_INT_FIELDS = {"duration_min", "intensity", "device_effectiveness", "stress"}
_TUPLE_FIELDS = {"location", "quality", "triggers", "weather"}


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp into naive local time.

    Offset-carrying values (the app writes UTC with a Z suffix) are converted
    to the local timezone; naive values are taken as local already.
    """
    return to_local_naive(datetime.fromisoformat(value.replace("Z", "+00:00")))


def _convert(raw: dict, mapping: dict) -> dict:
    kwargs = {}
    for key, attr in mapping.items():
        value = raw.get(key)
        if value is None:
            continue
        if attr in _INT_FIELDS:
            value = int(round_half_up(value))
        kwargs[attr] = value
    return kwargs


def parse_episode(raw: dict) -> HeadacheEpisode:
    """Build a validated HeadacheEpisode from an export entry.

    Raises:
        KeyError: if id or startTime is missing
        ValueError: if a field is out of range or malformed
    """
    return HeadacheEpisode(
        id=str(raw["id"]),
        start_time=parse_timestamp(raw["startTime"]),
        **_convert(raw, EPISODE_FIELDS),
    )


def parse_habit_log(raw: dict) -> HabitLog:
    """Build a validated HabitLog from an export entry.

    The date may be a plain YYYY-MM-DD or a full ISO timestamp.
    """
    return HabitLog(date=date.fromisoformat(raw["date"][:10]), **_convert(raw, HABIT_FIELDS))


def dedupe_habit_logs(logs: list[HabitLog]) -> list[HabitLog]:
    """Keep one log per date, later entries replacing earlier ones.

    Returns:
        Logs sorted by date, oldest first
    """
    by_date = {}
    for log in logs:
        if log.date in by_date:
            logger.debug(f"Replacing habit log for {log.date}")
        by_date[log.date] = log
    return [by_date[d] for d in sorted(by_date)]


def load_export(path: Path | str | None = None) -> tuple[list, list, dict]:
    """Read episodes and habit logs from a JSON export file.

    Malformed entries are logged and skipped.

    Args:
        path: Export file (default: DEFAULT_DATA_PATH)

    Returns:
        Tuple of (episodes, habit_logs, stats)
    """
    path = Path(path) if path else DEFAULT_DATA_PATH
    stats = {"path": str(path), "episodes": 0, "habit_logs": 0, "errors": 0}

    if not path.exists():
        logger.warning(f"Data file does not exist: {path}")
        return [], [], stats

    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    episodes = []
    for index, raw in enumerate(data.get("episodes", [])):
        try:
            episodes.append(parse_episode(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping episode #{index} in {path}: {e}")
            stats["errors"] += 1

    logs = []
    for index, raw in enumerate(data.get("habitLogs", [])):
        try:
            logs.append(parse_habit_log(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping habit log #{index} in {path}: {e}")
            stats["errors"] += 1

    habit_logs = dedupe_habit_logs(logs)
    stats["episodes"] = len(episodes)
    stats["habit_logs"] = len(habit_logs)
    return episodes, habit_logs, stats


def _to_export(record, mapping: dict) -> dict:
    values = asdict(record)
    entry = {}
    for key, attr in mapping.items():
        value = values[attr]
        if value is None:
            continue
        entry[key] = list(value) if attr in _TUPLE_FIELDS else value
    return entry


def write_export(
    path: Path | str,
    episodes: list[HeadacheEpisode],
    habit_logs: list[HabitLog],
) -> Path:
    """Write records in the export format read by load_export."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "episodes": [
            {"id": e.id, "startTime": e.start_time.isoformat(), **_to_export(e, EPISODE_FIELDS)}
            for e in episodes
        ],
        "habitLogs": [
            {"date": log.date.isoformat(), **_to_export(log, HABIT_FIELDS)} for log in habit_logs
        ],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Wrote {len(episodes)} episodes and {len(habit_logs)} habit logs to {path}")
    return path
