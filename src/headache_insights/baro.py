"""Barometric pressure helpers.

Rapid pressure drops are a common migraine trigger; these helpers label a
reading and flag suspicious changes between two readings.
"""

from headache_insights import config


def pressure_label(hpa: float) -> str:
    """Label a reading as Low, Neutral or High."""
    if hpa < config.PRESSURE_LOW_HPA:
        return "Low"
    if hpa > config.PRESSURE_HIGH_HPA:
        return "High"
    return "Neutral"


def pressure_trend(current: float, previous: float) -> str:
    """Direction of change between two readings: rising, falling or steady."""
    change = current - previous
    if change > config.PRESSURE_STEADY_BAND_HPA:
        return "rising"
    if change < -config.PRESSURE_STEADY_BAND_HPA:
        return "falling"
    return "steady"


def is_pressure_change_suspicious(current: float, previous: float, hours_elapsed: float) -> bool:
    """True when pressure dropped faster than SUSPICIOUS_DROP_HPA_PER_HOUR.

    Raises:
        ValueError: if hours_elapsed is not positive
    """
    if hours_elapsed <= 0:
        raise ValueError(f"hours_elapsed must be > 0, got {hours_elapsed}")
    drop_per_hour = (previous - current) / hours_elapsed
    return drop_per_hour > config.SUSPICIOUS_DROP_HPA_PER_HOUR
