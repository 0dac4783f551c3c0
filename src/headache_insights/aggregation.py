"""Day-level aggregation of headache episodes."""

import logging
import math
from collections import defaultdict
from datetime import datetime, timedelta

from headache_insights.models import DaySummary, HeadacheEpisode

logger = logging.getLogger("headache-insights")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward positive infinity (2.5 -> 3, -12.5 -> -12).

    The built-in round() uses banker's rounding, which would report 2.5 as 2.
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def mean(values: list[float]) -> float:
    """Arithmetic mean, 0 for an empty list."""
    return sum(values) / len(values) if values else 0.0


def newest_first(episodes: list[HeadacheEpisode]) -> list[HeadacheEpisode]:
    """Sort episodes by start time, most recent first (stable for ties)."""
    return sorted(episodes, key=lambda e: e.start_time, reverse=True)


def aggregate_days(
    episodes: list[HeadacheEpisode],
    window_days: int,
    now: datetime | None = None,
) -> list[DaySummary]:
    """Bucket episodes into calendar days for a trailing window.

    Args:
        episodes: Episodes in any order
        window_days: Number of days, today included
        now: Evaluation instant (default: current local time)

    Returns:
        Exactly window_days summaries ordered oldest to newest, including
        days without episodes
    """
    if window_days <= 0:
        raise ValueError(f"window_days must be > 0, got {window_days}")
    today = (now or datetime.now()).date()

    by_day: dict = defaultdict(list)
    for episode in episodes:
        by_day[episode.start_time.date()].append(episode)

    summaries = []
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_episodes = by_day.get(day, [])
        effectiveness = [
            e.device_effectiveness
            for e in day_episodes
            if e.used_device and e.device_effectiveness is not None
        ]
        summaries.append(
            DaySummary(
                day=window_days - offset,
                date=day,
                episode_count=len(day_episodes),
                avg_intensity=round_half_up(mean([e.intensity for e in day_episodes]), 1),
                avg_device_effectiveness=round_half_up(mean(effectiveness), 1),
            )
        )

    logger.debug(f"Aggregated {len(episodes)} episodes into {window_days} days ending {today}")
    return summaries
