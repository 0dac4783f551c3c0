"""Orchestration: run every analysis pass over one snapshot of records."""

import logging
from datetime import datetime, time

from headache_insights import config
from headache_insights.aggregation import aggregate_days, mean, round_half_up
from headache_insights.baro import is_pressure_change_suspicious, pressure_label, pressure_trend
from headache_insights.models import HabitLog, HeadacheEpisode, InsightReport
from headache_insights.patterns import detect_patterns
from headache_insights.risk import predict_risk
from headache_insights.trends import classify_trend
from headache_insights.triggers import correlate_triggers

logger = logging.getLogger("headache-insights")


def _pressure_readings(
    episodes: list[HeadacheEpisode],
    habit_logs: list[HabitLog],
) -> list[tuple[datetime, float]]:
    """All timestamped pressure readings, oldest first."""
    readings = [
        (e.start_time, e.barometric_pressure)
        for e in episodes
        if e.barometric_pressure is not None
    ]
    readings.extend(
        (datetime.combine(log.date, time.min), log.barometric_pressure)
        for log in habit_logs
        if log.barometric_pressure is not None
    )
    readings.sort(key=lambda r: r[0])
    return readings


def summarize(episodes: list[HeadacheEpisode], habit_logs: list[HabitLog]) -> dict:
    """Headline statistics for a record set.

    Returns:
        Dict with counts, mean intensity, device usage and the latest
        barometric reading (None when no readings exist)
    """
    device_uses = sum(1 for e in episodes if e.used_device)
    summary = {
        "episodes": len(episodes),
        "habit_logs": len(habit_logs),
        "avg_intensity": round_half_up(mean([e.intensity for e in episodes]), 1),
        "device_usage_pct": (
            int(round_half_up(device_uses / len(episodes) * 100)) if episodes else 0
        ),
        "pressure": None,
    }

    readings = _pressure_readings(episodes, habit_logs)
    if readings:
        latest_at, latest = readings[-1]
        pressure = {
            "hpa": latest,
            "label": pressure_label(latest),
            "recorded_at": latest_at.isoformat(),
            "trend": "steady",
            "suspicious_drop": False,
        }
        if len(readings) > 1:
            previous_at, previous = readings[-2]
            pressure["trend"] = pressure_trend(latest, previous)
            hours = (latest_at - previous_at).total_seconds() / 3600
            if hours > 0:
                pressure["suspicious_drop"] = is_pressure_change_suspicious(
                    latest, previous, hours
                )
        summary["pressure"] = pressure

    return summary


def analyze(
    episodes: list[HeadacheEpisode],
    habit_logs: list[HabitLog],
    now: datetime | None = None,
    window_days: int = config.DEFAULT_WINDOW_DAYS,
) -> InsightReport:
    """Run all analysis passes against the same snapshot.

    Args:
        episodes: Episodes in any order
        habit_logs: Habit logs, at most one per date
        now: Evaluation instant shared by every time-dependent pass
        window_days: Length of the monthly view and trigger window

    Returns:
        InsightReport combining day summaries, triggers, patterns, trend,
        prediction and overview statistics
    """
    if window_days <= 0:
        raise ValueError(f"window_days must be > 0, got {window_days}")
    now = now or datetime.now()

    report = InsightReport(
        generated_at=now,
        window_days=window_days,
        weekly=aggregate_days(episodes, config.WEEKLY_WINDOW_DAYS, now=now),
        monthly=aggregate_days(episodes, window_days, now=now),
        triggers=correlate_triggers(episodes, window_days),
        patterns=detect_patterns(episodes, habit_logs),
        trend=classify_trend(episodes),
        prediction=predict_risk(episodes, habit_logs, now=now),
        overview=summarize(episodes, habit_logs),
    )
    logger.info(
        f"Analyzed {len(episodes)} episodes and {len(habit_logs)} habit logs: "
        f"{len(report.triggers)} triggers, {len(report.patterns)} patterns, trend {report.trend}"
    )
    return report
