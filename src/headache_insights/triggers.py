"""Trigger correlation: frequency, lift over baseline and a composite score."""

import logging

from headache_insights import config
from headache_insights.aggregation import mean, round_half_up
from headache_insights.models import HeadacheEpisode, TriggerStat

logger = logging.getLogger("headache-insights")


def composite_score(lift: float, avg_intensity: float) -> int:
    """Blend lift and severity into a 0-100 score.

    Lift is unbounded above (and negative for under-represented triggers),
    so the composite is clamped.
    """
    raw = int(round_half_up((lift + avg_intensity * 10) / 2))
    return max(0, min(100, raw))


def correlate_triggers(
    episodes: list[HeadacheEpisode],
    window_days: int = config.DEFAULT_WINDOW_DAYS,
) -> list[TriggerStat]:
    """Compute per-trigger statistics over a window.

    Args:
        episodes: Episodes in any order
        window_days: Days the episode set spans; must be positive

    Returns:
        TriggerStat list sorted by correlation score (desc), then name (asc)
    """
    if window_days <= 0:
        raise ValueError(f"window_days must be > 0, got {window_days}")

    by_trigger: dict[str, list[HeadacheEpisode]] = {}
    for episode in episodes:
        for trigger in episode.triggers:
            by_trigger.setdefault(trigger, []).append(episode)

    baseline = len(episodes) / window_days

    stats = []
    for trigger, tagged in by_trigger.items():
        frequency = len(tagged)
        probability = frequency / window_days
        # probability / baseline, computed without the shared window factor
        relative = frequency / len(episodes) if baseline > 0 else 0.0
        lift = (relative - 1) * 100 if baseline > 0 else 0
        percentage = relative * 100
        avg_intensity = mean([e.intensity for e in tagged])

        stats.append(
            TriggerStat(
                trigger=trigger,
                frequency=frequency,
                baseline=round_half_up(baseline, 2),
                probability=round_half_up(probability, 3),
                lift=int(round_half_up(lift)),
                percentage=int(round_half_up(percentage)),
                avg_intensity=round_half_up(avg_intensity, 1),
                correlation_score=composite_score(lift, avg_intensity),
            )
        )

    stats.sort(key=lambda s: (-s.correlation_score, s.trigger))
    logger.debug(f"Correlated {len(stats)} triggers across {len(episodes)} episodes")
    return stats
