"""Heuristic pattern detection over episodes and habit logs.

Four independent detectors, each with a minimum sample size:

- time: episodes cluster around one hour of the day
- trigger: two triggers keep showing up together
- weather: episodes coincide with low barometric pressure
- habit: episodes follow skipped meals

A detector that lacks data returns None rather than raising.
"""

import logging
from collections import Counter
from itertools import combinations

from headache_insights import config
from headache_insights.aggregation import newest_first, round_half_up
from headache_insights.models import HabitLog, HeadacheEpisode, Pattern

logger = logging.getLogger("headache-insights")


def _period_of(hour: int) -> str:
    if hour < config.AFTERNOON_START_HOUR:
        return "morning"
    if hour < config.EVENING_START_HOUR:
        return "afternoon"
    return "evening"


def _format_hour(hour: int) -> str:
    return f"{hour % 12 or 12}{'am' if hour < 12 else 'pm'}"


def detect_time_pattern(episodes: list[HeadacheEpisode]) -> Pattern | None:
    """Find the hour of day where episodes start most often."""
    if len(episodes) < config.TIME_MIN_EPISODES:
        logger.debug(f"Time pattern skipped: {len(episodes)} episodes")
        return None

    hour_counts = Counter(e.start_time.hour for e in episodes)
    # Ties resolve to the earliest hour
    peak_hour, peak_count = min(hour_counts.items(), key=lambda item: (-item[1], item[0]))
    if peak_count < config.TIME_MIN_PEAK_COUNT:
        return None

    period = _period_of(peak_hour)
    return Pattern(
        type="time",
        title=f"{period.capitalize()} Pattern",
        description=f"{peak_count} episodes occurred around {_format_hour(peak_hour)}",
        confidence="high" if peak_count >= config.TIME_HIGH_CONFIDENCE_COUNT else "medium",
        actionable=(
            f"Consider preventive measures in the {period}, "
            "such as staying hydrated and managing stress."
        ),
        metadata={"hour": peak_hour, "count": peak_count, "period": period},
    )


def detect_trigger_pattern(episodes: list[HeadacheEpisode]) -> Pattern | None:
    """Find the pair of triggers that most often co-occur in one episode."""
    if len(episodes) < config.PAIR_MIN_EPISODES:
        logger.debug(f"Trigger pattern skipped: {len(episodes)} episodes")
        return None

    multi_trigger = [
        e
        for e in newest_first(episodes)
        if len(e.triggers) >= config.PAIR_MIN_TRIGGERS_PER_EPISODE
    ]
    if len(multi_trigger) < config.PAIR_MIN_MULTI_TRIGGER_EPISODES:
        logger.debug(f"Trigger pattern skipped: {len(multi_trigger)} multi-trigger episodes")
        return None

    pairs: Counter = Counter()
    for episode in multi_trigger:
        # logged order decides which pair is seen first; the key itself is sorted
        for pair in combinations(episode.triggers, 2):
            pairs[" + ".join(sorted(pair))] += 1

    # most_common keeps first-encountered order among equal counts
    top_pair, count = pairs.most_common(1)[0]
    if count < config.PAIR_MIN_COUNT:
        return None

    return Pattern(
        type="trigger",
        title="Trigger Combination",
        description=f"{top_pair} appear together in {count} episodes",
        confidence="high" if count >= config.PAIR_HIGH_CONFIDENCE_COUNT else "medium",
        actionable=(
            "These triggers may have a synergistic effect. Try addressing both simultaneously."
        ),
        metadata={"pair": top_pair, "count": count},
    )


def detect_weather_pattern(episodes: list[HeadacheEpisode]) -> Pattern | None:
    """Check whether episodes cluster around low barometric pressure."""
    if len(episodes) < config.WEATHER_MIN_EPISODES:
        logger.debug(f"Weather pattern skipped: {len(episodes)} episodes")
        return None

    low_pressure = [
        e
        for e in episodes
        if e.barometric_pressure is not None
        and e.barometric_pressure < config.LOW_PRESSURE_HPA
    ]
    if len(low_pressure) < config.WEATHER_MIN_LOW_PRESSURE_EPISODES:
        return None

    percentage = int(round_half_up(len(low_pressure) / len(episodes) * 100))
    return Pattern(
        type="weather",
        title="Barometric Sensitivity",
        description=(
            f"{percentage}% of episodes occurred during low pressure "
            f"({len(low_pressure)}/{len(episodes)})"
        ),
        confidence="high" if percentage >= config.WEATHER_HIGH_CONFIDENCE_PCT else "medium",
        actionable=(
            "You may be sensitive to weather changes. Monitor forecasts and use "
            "preventive treatment before pressure drops."
        ),
        metadata={"count": len(low_pressure), "percentage": percentage},
    )


def detect_habit_pattern(
    episodes: list[HeadacheEpisode],
    habit_logs: list[HabitLog],
) -> Pattern | None:
    """Check whether episodes are linked to skipped meals."""
    if len(episodes) < config.HABIT_MIN_EPISODES or len(habit_logs) < config.HABIT_MIN_LOGS:
        logger.debug(
            f"Habit pattern skipped: {len(episodes)} episodes, {len(habit_logs)} habit logs"
        )
        return None

    skipped = [e for e in episodes if config.SKIPPED_MEAL_TRIGGER in e.triggers]
    if len(skipped) < config.HABIT_MIN_TAGGED_EPISODES:
        return None

    percentage = int(round_half_up(len(skipped) / len(episodes) * 100))
    return Pattern(
        type="habit",
        title="Meal Timing Impact",
        description=(
            f"{percentage}% of episodes linked to skipped meals "
            f"({len(skipped)}/{len(episodes)})"
        ),
        confidence="high" if percentage >= config.HABIT_HIGH_CONFIDENCE_PCT else "medium",
        actionable=(
            "Maintain regular meal times. Keep healthy snacks available and set meal reminders."
        ),
        metadata={"count": len(skipped), "percentage": percentage},
    )


def detect_patterns(
    episodes: list[HeadacheEpisode],
    habit_logs: list[HabitLog],
) -> list[Pattern]:
    """Run every detector and return the patterns that fired.

    Returns:
        0-4 patterns, always in the order time, trigger, weather, habit
    """
    candidates = [
        detect_time_pattern(episodes),
        detect_trigger_pattern(episodes),
        detect_weather_pattern(episodes),
        detect_habit_pattern(episodes, habit_logs),
    ]
    patterns = [p for p in candidates if p is not None]
    logger.debug(f"Detected {len(patterns)} patterns from {len(episodes)} episodes")
    return patterns
