"""Pytest configuration and shared fixtures."""

import itertools
import json
import time
from datetime import datetime, timedelta

import pytest

from headache_insights.models import HabitLog, HeadacheEpisode

# Fixed evaluation instant so nothing depends on the real clock
NOW = datetime(2025, 6, 15, 12, 0)

_ids = itertools.count(1)


def make_episode(days_ago: float = 0, hour: int | None = None, **kwargs) -> HeadacheEpisode:
    """Build an episode relative to NOW.

    With hour set, the episode starts at that hour on the calendar day
    days_ago before NOW; otherwise exactly days_ago * 24h before NOW.
    """
    start = NOW - timedelta(days=days_ago)
    if hour is not None:
        start = start.replace(hour=hour, minute=0)
    kwargs.setdefault("intensity", 5)
    return HeadacheEpisode(id=kwargs.pop("id", f"ep-{next(_ids)}"), start_time=start, **kwargs)


def make_habit_log(days_ago: int = 0, **kwargs) -> HabitLog:
    """Build a habit log for the calendar day days_ago before NOW."""
    return HabitLog(date=(NOW - timedelta(days=days_ago)).date(), **kwargs)


@pytest.fixture
def now():
    """The fixed evaluation instant."""
    return NOW


@pytest.fixture
def local_tz(monkeypatch):
    """Set the process-local timezone for the duration of a test."""

    def _set(name: str):
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def habit_logs():
    """Five consecutive daily habit logs."""
    return [make_habit_log(days_ago=i, stress=3 + i) for i in range(5)]


@pytest.fixture
def sample_episodes():
    """A realistic two-week history.

    Contains:
    - 8 episodes in the last 7 days, 3 in the 7 days before
    - Stress on 5 recent episodes, Stress + Caffeine together 3 times
    - 4 episodes at 9am
    """
    return [
        make_episode(0.5, intensity=8, triggers=("Stress", "Caffeine"), barometric_pressure=1005),
        make_episode(1, hour=9, intensity=7, triggers=("Stress",), barometric_pressure=1008),
        make_episode(2, hour=9, intensity=6, triggers=("Caffeine", "Stress")),
        make_episode(
            3,
            hour=9,
            intensity=9,
            triggers=("Skipped meal",),
            used_device=True,
            device_effectiveness=7,
        ),
        make_episode(4, hour=15, intensity=4, triggers=("Stress", "Caffeine", "Sugar")),
        make_episode(5, hour=9, intensity=5, triggers=("Sleep loss",), barometric_pressure=1002),
        make_episode(6, hour=20, intensity=6, triggers=("Stress",)),
        make_episode(6.5, intensity=7, triggers=("Skipped meal", "Dehydration")),
        make_episode(9, hour=14, intensity=3, triggers=("Screen time",)),
        make_episode(11, hour=18, intensity=4, triggers=("Skipped meal",)),
        make_episode(13, hour=8, intensity=5),
    ]


@pytest.fixture
def export_file(tmp_path):
    """A JSON export in the mobile app's camelCase format."""
    data = {
        "episodes": [
            {
                "id": "a1",
                "startTime": "2025-06-14T09:30:00.000Z",
                "durationMin": 90,
                "intensity": 7,
                "location": ["Frontal", "Frontal"],
                "quality": ["Throbbing"],
                "triggers": ["Stress", "Caffeine"],
                "usedDevice": True,
                "deviceMode": "Migraine",
                "deviceDuration": 20,
                "deviceEffectiveness": 8,
                "barometricPressure": 1004.5,
                "notes": "After a long meeting",
                "timestamp": 1749893400000,
            },
            {
                "id": "a2",
                "startTime": "2025-06-12T18:00:00",
                "durationMin": 45,
                "intensity": 4,
                "location": [],
                "quality": [],
                "triggers": ["Skipped meal"],
                "usedDevice": False,
            },
            {"id": "bad", "startTime": "2025-06-12T18:00:00", "intensity": 14},
            {"startTime": "2025-06-12T18:00:00", "intensity": 3},
        ],
        "habitLogs": [
            {"date": "2025-06-13", "stress": 4, "skippedMeals": False, "weather": ["Dry"]},
            {"date": "2025-06-14T00:00:00.000Z", "stress": 6, "skippedMeals": True},
            {"date": "2025-06-13", "stress": 8, "sleepDuration": 5.5},
        ],
    }
    path = tmp_path / "data.json"
    path.write_text(json.dumps(data))
    return path
