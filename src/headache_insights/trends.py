"""Overall trajectory of a user's headaches."""

import logging

from headache_insights import config
from headache_insights.aggregation import mean, newest_first
from headache_insights.models import HeadacheEpisode

logger = logging.getLogger("headache-insights")


def classify_trend(episodes: list[HeadacheEpisode]) -> str:
    """Compare the recent half of the history with the older half.

    Episodes are sorted newest-first here, so caller order does not matter.
    Each half is assumed to span TREND_DAYS_PER_HALF days regardless of the
    real elapsed time between episodes.

    Returns:
        'improving', 'stable' or 'worsening'
    """
    if len(episodes) < config.TREND_MIN_EPISODES:
        return "stable"

    ordered = newest_first(episodes)
    midpoint = len(ordered) // 2
    recent, older = ordered[:midpoint], ordered[midpoint:]

    recent_intensity = mean([e.intensity for e in recent])
    older_intensity = mean([e.intensity for e in older])
    recent_freq = len(recent) / config.TREND_DAYS_PER_HALF
    older_freq = len(older) / config.TREND_DAYS_PER_HALF

    logger.debug(
        f"Trend halves: recent {recent_intensity:.2f} @ {recent_freq:.3f}/day, "
        f"older {older_intensity:.2f} @ {older_freq:.3f}/day"
    )

    improving = config.TREND_IMPROVING_RATIO
    worsening = config.TREND_WORSENING_RATIO
    if recent_intensity < older_intensity * improving and recent_freq < older_freq * improving:
        return "improving"
    if recent_intensity > older_intensity * worsening or recent_freq > older_freq * worsening:
        return "worsening"
    return "stable"
