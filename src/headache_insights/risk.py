"""Short-horizon headache risk prediction."""

import logging
from collections import Counter
from datetime import datetime

from headache_insights import config
from headache_insights.aggregation import mean, newest_first
from headache_insights.models import HabitLog, HeadacheEpisode, RiskAssessment

logger = logging.getLogger("headache-insights")

RECOMMENDATIONS = {
    "high": (
        "Consider consulting with your healthcare provider. Increase preventive "
        "measures and track patterns closely."
    ),
    "medium": (
        "Monitor your triggers carefully. Ensure you're following good habits "
        "(hydration, sleep, meals)."
    ),
    "low": (
        "Keep up your current management strategies. Continue logging to maintain awareness."
    ),
}

FALLBACK_FACTOR = "Based on historical patterns"


def days_since(start_time: datetime, now: datetime) -> float:
    """Elapsed days (fractional) between an episode start and now."""
    return (now - start_time).total_seconds() / 86400


def predict_risk(
    episodes: list[HeadacheEpisode],
    habit_logs: list[HabitLog],
    now: datetime | None = None,
) -> RiskAssessment | None:
    """Forecast headache risk for the next 24-48 hours.

    Compares the last 7 days with the 7 days before, then boosts the
    probability for recurring recent triggers and high recent intensity.

    Args:
        episodes: Episodes in any order
        habit_logs: Daily habit logs (not used by the current factors)
        now: Evaluation instant (default: current local time)

    Returns:
        RiskAssessment, or None with fewer than RISK_MIN_EPISODES episodes
    """
    if len(episodes) < config.RISK_MIN_EPISODES:
        return None
    now = now or datetime.now()

    last_week = []
    previous_week = []
    for episode in newest_first(episodes):
        elapsed = days_since(episode.start_time, now)
        if elapsed <= config.RISK_RECENT_DAYS:
            last_week.append(episode)
        elif elapsed <= config.RISK_PREVIOUS_DAYS:
            previous_week.append(episode)

    risk = "low"
    probability = config.RISK_BASE_PROBABILITY
    factors = []

    if len(last_week) > len(previous_week) * config.RISK_HIGH_MULTIPLIER:
        risk = "high"
        probability = config.RISK_HIGH_PROBABILITY
        factors.append("Increasing episode frequency")
    elif len(last_week) > len(previous_week):
        risk = "medium"
        probability = config.RISK_MEDIUM_PROBABILITY
        factors.append("Slight increase in episodes")

    trigger_counts = Counter(t for e in last_week for t in e.triggers)
    if trigger_counts:
        top_trigger, count = trigger_counts.most_common(1)[0]
        if count >= config.RISK_RECURRING_TRIGGER_COUNT:
            factors.append(f"Recurring trigger: {top_trigger}")
            probability += config.RISK_RECURRING_TRIGGER_BOOST

    if mean([e.intensity for e in last_week]) >= config.RISK_HIGH_INTENSITY:
        factors.append("High intensity episodes")
        probability += config.RISK_HIGH_INTENSITY_BOOST
        if risk == "low":
            risk = "medium"

    logger.debug(
        f"Risk: {len(last_week)} episodes last week vs {len(previous_week)} before -> {risk}"
    )
    return RiskAssessment(
        risk=risk,
        probability=min(config.RISK_MAX_PROBABILITY, probability),
        factors=factors or [FALLBACK_FACTOR],
        recommendation=RECOMMENDATIONS[risk],
    )
