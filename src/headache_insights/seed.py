"""Generate realistic demo records for previews and manual testing.

Pass a seeded random.Random for reproducible output.
"""

import random
from datetime import datetime, timedelta

from headache_insights.models import LOCATIONS, QUALITIES, HabitLog, HeadacheEpisode

DEVICE_MODES = ("Tension", "Migraine", "Sinus", "Cluster", "Custom")
DEVICE_PATTERNS = ("Wave", "Pulse", "Knead")
DEMO_TRIGGERS = (
    "Stress",
    "Sleep loss",
    "Caffeine",
    "Sugar",
    "Skipped meal",
    "Barometric",
    "Dehydration",
    "Screen time",
)
DEMO_DAYS = 14
CYCLE_DAYS = 28


def _pick_n(rng: random.Random, items, low: int, high: int) -> tuple:
    return tuple(rng.sample(items, rng.randint(low, high)))


def generate_demo_episodes(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[HeadacheEpisode]:
    """Generate 8-12 episodes over the last 14 days, newest first."""
    now = now or datetime.now()
    rng = rng or random.Random()

    episodes = []
    for i in range(rng.randint(8, 12)):
        start = (now - timedelta(days=rng.randint(0, DEMO_DAYS - 1))).replace(
            hour=rng.randint(6, 22), minute=rng.randint(0, 59), second=0, microsecond=0
        )
        used_device = rng.random() > 0.3
        device = {}
        if used_device:
            device = {
                "device_mode": rng.choice(DEVICE_MODES),
                "device_duration": rng.randint(10, 45),
                "device_temp": float(rng.randint(20, 38)),
                "device_pressure": rng.randint(3, 9),
                "device_pattern": rng.choice(DEVICE_PATTERNS),
                "device_effectiveness": rng.randint(4, 9),
            }

        episodes.append(
            HeadacheEpisode(
                id=f"demo-{i + 1}",
                start_time=start,
                duration_min=rng.randint(30, 360),
                intensity=rng.randint(3, 9),
                location=_pick_n(rng, LOCATIONS, 1, 2),
                quality=_pick_n(rng, QUALITIES, 1, 3),
                triggers=_pick_n(rng, DEMO_TRIGGERS, 1, 3),
                used_device=used_device,
                barometric_pressure=float(rng.randint(995, 1025)),
                notes="Sample episode from demo data" if rng.random() > 0.7 else None,
                **device,
            )
        )

    return sorted(episodes, key=lambda e: e.start_time, reverse=True)


def _menstruation_phase(day_index: int) -> str:
    position = day_index % CYCLE_DAYS
    if position < 5:
        return "On"
    if position < 12:
        return "Post"
    if position < 19:
        return "Off"
    return "Pre"


def generate_demo_habits(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[HabitLog]:
    """Generate one habit log per day for the last 14 days, newest first."""
    now = now or datetime.now()
    rng = rng or random.Random()

    logs = []
    for i in range(DEMO_DAYS):
        phase = _menstruation_phase(i)
        logs.append(
            HabitLog(
                date=(now - timedelta(days=i)).date(),
                sugar=rng.choice(("None", "Low", "Medium", "High")),
                starch=rng.random() > 0.5,
                dairy=rng.random() > 0.6,
                caffeine=rng.choice(("None", "1", "2", "3+")),
                hydration=rng.choice(("Poor", "OK", "Good")),
                skipped_meals=rng.random() > 0.8,
                sleep_duration=round(rng.uniform(5, 9), 1),
                sleep_quality=rng.choice(("Poor", "Fair", "Good")),
                stress=rng.randint(2, 8),
                exercise=rng.random() > 0.5,
                exercise_intensity=(
                    rng.choice(("Low", "Med", "High")) if rng.random() > 0.5 else None
                ),
                barometric_pressure=float(rng.randint(995, 1025)),
                weather=_pick_n(rng, ("Dry", "Humid", "Rain", "Windy"), 1, 2),
                menstruation=phase == "On",
                menstruation_phase=phase,
                notes="Demo habit log entry" if rng.random() > 0.8 else None,
            )
        )

    return logs
