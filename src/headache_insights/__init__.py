"""Headache Insights - trends, trigger correlations and risk from a headache log."""

from importlib.metadata import version

try:
    __version__ = version("headache-insights")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

# Re-export public API
from headache_insights.aggregation import aggregate_days
from headache_insights.engine import analyze, summarize
from headache_insights.models import (
    DaySummary,
    HabitLog,
    HeadacheEpisode,
    InsightReport,
    Pattern,
    RiskAssessment,
    TriggerStat,
)
from headache_insights.patterns import detect_patterns
from headache_insights.risk import predict_risk
from headache_insights.trends import classify_trend
from headache_insights.triggers import correlate_triggers

__all__ = [
    # Version
    "__version__",
    # Records and results
    "HeadacheEpisode",
    "HabitLog",
    "DaySummary",
    "TriggerStat",
    "Pattern",
    "RiskAssessment",
    "InsightReport",
    # Analysis passes
    "aggregate_days",
    "correlate_triggers",
    "detect_patterns",
    "classify_trend",
    "predict_risk",
    "analyze",
    "summarize",
]
