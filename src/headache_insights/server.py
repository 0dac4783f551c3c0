"""MCP Headache Insights Server.

Provides tools for querying a headache log:
- get_status: Data file summary
- get_day_summaries: Episodes per calendar day
- get_trigger_stats: Trigger frequency, lift and correlation score
- get_patterns: Time, trigger, weather and habit patterns
- get_trend: Improving / stable / worsening
- get_risk: 24-48h risk prediction
- get_insights: Everything above in one report
"""

import logging
import os
from pathlib import Path

from fastmcp import FastMCP

from headache_insights import __version__, config
from headache_insights.aggregation import aggregate_days
from headache_insights.engine import analyze, summarize
from headache_insights.ingest import load_export
from headache_insights.patterns import detect_patterns
from headache_insights.risk import predict_risk
from headache_insights.trends import classify_trend
from headache_insights.triggers import correlate_triggers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("headache-insights")
if os.environ.get("DEV_MODE"):
    logger.setLevel(logging.DEBUG)

# Initialize MCP server
mcp = FastMCP("headache-insights")


@mcp.resource("headache-insights://guide", description="Usage guide and metric definitions")
def usage_guide() -> str:
    """Return the usage guide from external markdown file."""
    guide_path = Path(__file__).parent / "guide.md"
    try:
        return guide_path.read_text()
    except FileNotFoundError:
        return "# Headache Insights Guide\n\nGuide file not found."


@mcp.tool()
def get_status(data_path: str | None = None) -> dict:
    """Get a summary of the loaded data file.

    Args:
        data_path: Optional JSON export path (default: HEADACHE_INSIGHTS_DATA)

    Returns:
        Record counts, skipped entries and headline statistics
    """
    episodes, habit_logs, stats = load_export(data_path)
    return {
        "status": "ok",
        "version": __version__,
        "data_path": stats["path"],
        "errors": stats["errors"],
        "overview": summarize(episodes, habit_logs),
    }


@mcp.tool()
def get_day_summaries(
    days: int = config.WEEKLY_WINDOW_DAYS,
    data_path: str | None = None,
) -> dict:
    """Get episode count, intensity and device effectiveness per day.

    Args:
        days: Number of trailing days including today (default: 7)
        data_path: Optional JSON export path

    Returns:
        Day summaries ordered oldest to newest
    """
    episodes, _, _ = load_export(data_path)
    return {
        "window_days": days,
        "days": [d.to_dict() for d in aggregate_days(episodes, days)],
    }


@mcp.tool()
def get_trigger_stats(
    window_days: int = config.DEFAULT_WINDOW_DAYS,
    limit: int = 5,
    data_path: str | None = None,
) -> dict:
    """Get triggers ranked by correlation score.

    Args:
        window_days: Days the history spans (default: 30)
        limit: Maximum triggers to return (default: 5, negative returns none)
        data_path: Optional JSON export path

    Returns:
        Trigger statistics, highest score first
    """
    episodes, _, _ = load_export(data_path)
    stats = correlate_triggers(episodes, window_days)
    limit = max(limit, 0)
    return {
        "window_days": window_days,
        "total_triggers": len(stats),
        "triggers": [s.to_dict() for s in stats[:limit]],
    }


@mcp.tool()
def get_patterns(data_path: str | None = None) -> dict:
    """Get detected time, trigger, weather and habit patterns.

    Args:
        data_path: Optional JSON export path

    Returns:
        Patterns that met their minimum sample size
    """
    episodes, habit_logs, _ = load_export(data_path)
    return {"patterns": [p.to_dict() for p in detect_patterns(episodes, habit_logs)]}


@mcp.tool()
def get_trend(data_path: str | None = None) -> dict:
    """Get the overall headache trend.

    Args:
        data_path: Optional JSON export path

    Returns:
        Trend label and the number of episodes considered
    """
    episodes, _, _ = load_export(data_path)
    return {"trend": classify_trend(episodes), "episodes": len(episodes)}


@mcp.tool()
def get_risk(data_path: str | None = None) -> dict:
    """Get the 24-48h headache risk prediction.

    Args:
        data_path: Optional JSON export path

    Returns:
        Prediction, or None when fewer than 5 episodes are logged
    """
    episodes, habit_logs, _ = load_export(data_path)
    prediction = predict_risk(episodes, habit_logs)
    return {"prediction": prediction.to_dict() if prediction else None}


@mcp.tool()
def get_insights(
    window_days: int = config.DEFAULT_WINDOW_DAYS,
    data_path: str | None = None,
) -> dict:
    """Run every analysis pass and return the combined report.

    Args:
        window_days: Length of the monthly view and trigger window (default: 30)
        data_path: Optional JSON export path

    Returns:
        Weekly and monthly day summaries, triggers, patterns, trend,
        prediction and overview
    """
    episodes, habit_logs, _ = load_export(data_path)
    return analyze(episodes, habit_logs, window_days=window_days).to_dict()


def create_app():
    """Create the ASGI app for uvicorn."""
    # stateless_http=True allows resilience to server restarts
    return mcp.http_app(stateless_http=True)


def main():
    """Run the MCP server."""
    import uvicorn

    port = int(os.environ.get("PORT", 8082))
    host = os.environ.get("HOST", "127.0.0.1")

    print(f"Starting Headache Insights on {host}:{port}")
    print(f"MCP endpoint: http://{host}:{port}/mcp")

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
