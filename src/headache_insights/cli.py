"""Command-line interface for headache insights."""

import argparse
import json
import random
from datetime import datetime

from headache_insights import config
from headache_insights.aggregation import aggregate_days
from headache_insights.engine import analyze, summarize
from headache_insights.ingest import DEFAULT_DATA_PATH, load_export, write_export
from headache_insights.patterns import detect_patterns
from headache_insights.risk import predict_risk
from headache_insights.seed import generate_demo_episodes, generate_demo_habits
from headache_insights.trends import classify_trend
from headache_insights.triggers import correlate_triggers

# Formatter registry: list of (predicate, formatter) tuples
# Each predicate checks if this formatter can handle the data
# Order matters - first match wins
_FORMATTERS: list[tuple[callable, callable]] = []

TREND_ARROWS = {"improving": "↓", "stable": "→", "worsening": "↑"}


def _register_formatter(predicate: callable):
    """Decorator to register a formatter with its predicate."""

    def decorator(formatter: callable):
        _FORMATTERS.append((predicate, formatter))
        return formatter

    return decorator


def _day_lines(days: list[dict]) -> list[str]:
    lines = []
    for d in days:
        bar = "#" * d["episode_count"]
        line = f"  {d['date']}: {d['episode_count']} {bar}"
        if d["episode_count"]:
            line += f" (avg intensity {d['avg_intensity']}"
            if d["avg_device_effectiveness"]:
                line += f", device {d['avg_device_effectiveness']}/10"
            line += ")"
        lines.append(line)
    return lines


def _trigger_lines(triggers: list[dict]) -> list[str]:
    return [
        f"  {t['trigger']}: score {t['correlation_score']} "
        f"({t['frequency']} episodes, lift {t['lift']:+d}%, avg intensity {t['avg_intensity']})"
        for t in triggers
    ]


def _pattern_lines(patterns: list[dict]) -> list[str]:
    lines = []
    for p in patterns:
        lines.append(f"  [{p['confidence']}] {p['title']}: {p['description']}")
        lines.append(f"      {p['actionable']}")
    return lines


def _prediction_lines(prediction: dict | None) -> list[str]:
    if prediction is None:
        return ["  Not enough data for a prediction yet"]
    lines = [f"  Risk: {prediction['risk']} ({prediction['probability']}%)"]
    lines.extend(f"    - {factor}" for factor in prediction["factors"])
    lines.append(f"  {prediction['recommendation']}")
    return lines


@_register_formatter(lambda d: "generated_at" in d and "monthly" in d)
def _format_report(data: dict) -> list[str]:
    overview = data["overview"]
    lines = [
        f"Insights ({data['window_days']} day window, generated {data['generated_at']})",
        "",
        f"Episodes: {overview['episodes']}  Habit logs: {overview['habit_logs']}",
        f"Avg intensity: {overview['avg_intensity']}/10  "
        f"Device usage: {overview['device_usage_pct']}%",
        f"Trend: {data['trend']} {TREND_ARROWS[data['trend']]}",
        "",
        "Last 7 days:",
        *_day_lines(data["weekly"]),
        "",
        "Top triggers:",
        *(_trigger_lines(data["triggers"][:5]) or ["  None logged"]),
        "",
        "Patterns:",
        *(_pattern_lines(data["patterns"]) or ["  Not enough data yet"]),
        "",
        "Prediction:",
        *_prediction_lines(data["prediction"]),
    ]
    return lines


@_register_formatter(lambda d: "days" in d and "window_days" in d)
def _format_days(data: dict) -> list[str]:
    return [f"Episodes per day (last {data['window_days']} days):", *_day_lines(data["days"])]


@_register_formatter(lambda d: "triggers" in d)
def _format_triggers(data: dict) -> list[str]:
    if not data["triggers"]:
        return ["No triggers logged"]
    return [f"Triggers ({data['window_days']} day window):", *_trigger_lines(data["triggers"])]


@_register_formatter(lambda d: "patterns" in d)
def _format_patterns(data: dict) -> list[str]:
    if not data["patterns"]:
        return ["No patterns detected yet"]
    return ["Patterns:", *_pattern_lines(data["patterns"])]


@_register_formatter(lambda d: "trend" in d)
def _format_trend(data: dict) -> list[str]:
    return [f"Trend: {data['trend']} {TREND_ARROWS[data['trend']]}"]


@_register_formatter(lambda d: "prediction" in d)
def _format_prediction(data: dict) -> list[str]:
    return ["Prediction (next 24-48h):", *_prediction_lines(data["prediction"])]


@_register_formatter(lambda d: "data_path" in d and "overview" in d)
def _format_status(data: dict) -> list[str]:
    overview = data["overview"]
    lines = [
        f"Data file: {data['data_path']}",
        f"Episodes: {overview['episodes']}",
        f"Habit logs: {overview['habit_logs']}",
        f"Skipped entries: {data['errors']}",
        f"Avg intensity: {overview['avg_intensity']}/10",
        f"Device usage: {overview['device_usage_pct']}%",
    ]
    pressure = overview.get("pressure")
    if pressure:
        lines.append(
            f"Latest pressure: {pressure['hpa']} hPa ({pressure['label']}, {pressure['trend']})"
        )
        if pressure["suspicious_drop"]:
            lines.append("  Warning: rapid pressure drop")
    return lines


def format_output(data: dict, json_output: bool = False) -> str:
    """Format output as JSON or human-readable."""
    if json_output:
        return json.dumps(data, indent=2, default=str)

    # Find matching formatter from registry
    for predicate, formatter in _FORMATTERS:
        if predicate(data):
            return "\n".join(formatter(data))

    # Fallback to JSON if no formatter matches
    return json.dumps(data, indent=2, default=str)


def cmd_status(args):
    """Show what the data file contains."""
    episodes, habit_logs, stats = load_export(args.data)
    result = {
        "data_path": stats["path"],
        "errors": stats["errors"],
        "overview": summarize(episodes, habit_logs),
    }
    print(format_output(result, args.json))


def cmd_days(args):
    """Show per-day episode summaries."""
    episodes, _, _ = load_export(args.data)
    days = aggregate_days(episodes, args.days)
    result = {"window_days": args.days, "days": [d.to_dict() for d in days]}
    print(format_output(result, args.json))


def cmd_triggers(args):
    """Show trigger correlations."""
    episodes, _, _ = load_export(args.data)
    stats = correlate_triggers(episodes, args.window)
    result = {
        "window_days": args.window,
        "triggers": [s.to_dict() for s in stats[: args.limit]],
    }
    print(format_output(result, args.json))


def cmd_patterns(args):
    """Show detected patterns."""
    episodes, habit_logs, _ = load_export(args.data)
    result = {"patterns": [p.to_dict() for p in detect_patterns(episodes, habit_logs)]}
    print(format_output(result, args.json))


def cmd_trend(args):
    """Show the overall trend."""
    episodes, _, _ = load_export(args.data)
    result = {"trend": classify_trend(episodes), "episodes": len(episodes)}
    print(format_output(result, args.json))


def cmd_risk(args):
    """Show the risk prediction."""
    episodes, habit_logs, _ = load_export(args.data)
    prediction = predict_risk(episodes, habit_logs)
    result = {"prediction": prediction.to_dict() if prediction else None}
    print(format_output(result, args.json))


def cmd_analyze(args):
    """Run every analysis pass."""
    episodes, habit_logs, _ = load_export(args.data)
    report = analyze(episodes, habit_logs, window_days=args.window)
    print(format_output(report.to_dict(), args.json))


def cmd_demo(args):
    """Write a demo data file."""
    rng = random.Random(args.seed)
    now = datetime.now()
    episodes = generate_demo_episodes(now, rng)
    habit_logs = generate_demo_habits(now, rng)
    output = args.output or args.data or DEFAULT_DATA_PATH
    path = write_export(output, episodes, habit_logs)
    result = {
        "data_path": str(path),
        "errors": 0,
        "overview": summarize(episodes, habit_logs),
    }
    print(format_output(result, args.json))


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def main():
    """CLI entry point."""
    epilog = """
Examples:
  headache-insights-cli demo --seed 7        # Write demo data
  headache-insights-cli analyze              # Full insights report
  headache-insights-cli triggers --limit 3   # Top three triggers
  headache-insights-cli days --days 30       # Monthly view

All commands support --json for machine-readable output.
Data location: ~/.headache-insights/data.json (override with HEADACHE_INSIGHTS_DATA)
"""
    parser = argparse.ArgumentParser(
        description="Headache Insights CLI - Trends, triggers and patterns in your headache log",
        prog="headache-insights-cli",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--data", help="Path to JSON export (default: ~/.headache-insights)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # status
    sub = subparsers.add_parser("status", help="Show data file summary")
    sub.set_defaults(func=cmd_status)

    # days
    sub = subparsers.add_parser("days", help="Show episodes per day")
    sub.add_argument(
        "--days",
        type=_positive_int,
        default=config.WEEKLY_WINDOW_DAYS,
        help="Days to show (default: 7)",
    )
    sub.set_defaults(func=cmd_days)

    # triggers
    sub = subparsers.add_parser("triggers", help="Show trigger correlations")
    sub.add_argument(
        "--window",
        type=_positive_int,
        default=config.DEFAULT_WINDOW_DAYS,
        help="Window in days (default: 30)",
    )
    sub.add_argument("--limit", type=_positive_int, default=5, help="Max triggers (default: 5)")
    sub.set_defaults(func=cmd_triggers)

    # patterns
    sub = subparsers.add_parser("patterns", help="Show detected patterns")
    sub.set_defaults(func=cmd_patterns)

    # trend
    sub = subparsers.add_parser("trend", help="Show the overall trend")
    sub.set_defaults(func=cmd_trend)

    # risk
    sub = subparsers.add_parser("risk", help="Show the 24-48h risk prediction")
    sub.set_defaults(func=cmd_risk)

    # analyze
    sub = subparsers.add_parser("analyze", help="Full insights report")
    sub.add_argument(
        "--window",
        type=_positive_int,
        default=config.DEFAULT_WINDOW_DAYS,
        help="Window in days (default: 30)",
    )
    sub.set_defaults(func=cmd_analyze)

    # demo
    sub = subparsers.add_parser("demo", help="Write 14 days of demo data")
    sub.add_argument("--seed", type=int, help="Random seed for reproducible data")
    sub.add_argument("--output", help="Output path (default: --data or the default location)")
    sub.set_defaults(func=cmd_demo)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
