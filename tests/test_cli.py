"""Tests for the CLI module."""

import argparse
import json
import sys
from unittest.mock import patch

import pytest

from headache_insights.cli import (
    cmd_analyze,
    cmd_days,
    cmd_demo,
    cmd_patterns,
    cmd_risk,
    cmd_status,
    cmd_trend,
    cmd_triggers,
    format_output,
    main,
)
from headache_insights.engine import analyze
from headache_insights.ingest import write_export
from tests.conftest import NOW


@pytest.fixture
def data_file(tmp_path, sample_episodes, habit_logs):
    """Export file holding the sample history."""
    return write_export(tmp_path / "data.json", sample_episodes, habit_logs)


def _args(data_file, json_output=False, **kwargs) -> argparse.Namespace:
    data = str(data_file) if data_file else None
    return argparse.Namespace(data=data, json=json_output, **kwargs)


class TestFormatOutput:
    """Tests for output formatting."""

    def test_json_output(self):
        data = {"key": "value", "count": 42}
        result = format_output(data, json_output=True)
        assert '"key": "value"' in result
        assert '"count": 42' in result

    def test_unknown_shape_falls_back_to_json(self):
        assert json.loads(format_output({"other": 1})) == {"other": 1}

    def test_report_format(self, sample_episodes, habit_logs):
        data = analyze(sample_episodes, habit_logs, now=NOW).to_dict()
        result = format_output(data)
        assert "Insights (30 day window" in result
        assert "Trend: worsening ↑" in result
        assert "Stress: score 4" in result
        assert "[high] Trigger Combination" in result
        assert "Risk: high (80%)" in result
        assert "    - Recurring trigger: Stress" in result

    def test_empty_report_format(self):
        result = format_output(analyze([], [], now=NOW).to_dict())
        assert "None logged" in result
        assert "Not enough data for a prediction yet" in result

    def test_days_format(self):
        data = {
            "window_days": 2,
            "days": [
                {"date": "2025-06-14", "episode_count": 0, "avg_intensity": 0,
                 "avg_device_effectiveness": 0},
                {"date": "2025-06-15", "episode_count": 2, "avg_intensity": 6.0,
                 "avg_device_effectiveness": 7.5},
            ],
        }
        result = format_output(data)
        assert "Episodes per day (last 2 days):" in result
        assert "2025-06-15: 2 ## (avg intensity 6.0, device 7.5/10)" in result

    def test_trend_format(self):
        assert format_output({"trend": "improving", "episodes": 12}) == "Trend: improving ↓"

    def test_status_format(self):
        data = {
            "data_path": "/tmp/data.json",
            "errors": 1,
            "overview": {
                "episodes": 3,
                "habit_logs": 2,
                "avg_intensity": 5.0,
                "device_usage_pct": 33,
                "pressure": {
                    "hpa": 1003,
                    "label": "Neutral",
                    "trend": "falling",
                    "suspicious_drop": True,
                },
            },
        }
        result = format_output(data)
        assert "Data file: /tmp/data.json" in result
        assert "Skipped entries: 1" in result
        assert "Latest pressure: 1003 hPa (Neutral, falling)" in result
        assert "Warning: rapid pressure drop" in result


class TestCliCommands:
    """Tests for CLI command functions."""

    def test_cmd_status(self, data_file, capsys):
        cmd_status(_args(data_file))
        out = capsys.readouterr().out
        assert "Episodes: 11" in out
        assert "Habit logs: 5" in out

    def test_cmd_days_json(self, data_file, capsys):
        cmd_days(_args(data_file, json_output=True, days=5))
        data = json.loads(capsys.readouterr().out)
        assert data["window_days"] == 5
        assert len(data["days"]) == 5

    def test_cmd_triggers_limit(self, data_file, capsys):
        cmd_triggers(_args(data_file, json_output=True, window=30, limit=2))
        data = json.loads(capsys.readouterr().out)
        assert len(data["triggers"]) == 2

    def test_cmd_patterns(self, data_file, capsys):
        cmd_patterns(_args(data_file))
        out = capsys.readouterr().out
        assert "Patterns:" in out
        assert "Meal Timing Impact" in out

    def test_cmd_trend(self, data_file, capsys):
        cmd_trend(_args(data_file, json_output=True))
        assert json.loads(capsys.readouterr().out)["episodes"] == 11

    def test_cmd_risk_without_data(self, tmp_path, capsys):
        cmd_risk(_args(tmp_path / "missing.json"))
        assert "Not enough data for a prediction yet" in capsys.readouterr().out

    def test_cmd_analyze_json(self, data_file, capsys):
        cmd_analyze(_args(data_file, json_output=True, window=14))
        data = json.loads(capsys.readouterr().out)
        assert data["window_days"] == 14
        assert len(data["weekly"]) == 7

    def test_cmd_demo_writes_file(self, tmp_path, capsys):
        output = tmp_path / "demo.json"
        cmd_demo(_args(None, json_output=True, seed=5, output=str(output)))
        data = json.loads(capsys.readouterr().out)
        assert data["data_path"] == str(output)
        assert data["overview"]["habit_logs"] == 14
        assert output.exists()


class TestMain:
    """Tests for argument parsing."""

    def test_dispatches_subcommand(self, data_file, capsys):
        argv = ["headache-insights-cli", "--json", "--data", str(data_file), "trend"]
        with patch.object(sys, "argv", argv):
            main()
        assert json.loads(capsys.readouterr().out)["episodes"] == 11

    def test_rejects_non_positive_window(self, data_file):
        argv = ["headache-insights-cli", "--data", str(data_file), "triggers", "--window", "0"]
        with patch.object(sys, "argv", argv), pytest.raises(SystemExit):
            main()

    def test_rejects_negative_limit(self, data_file):
        argv = ["headache-insights-cli", "--data", str(data_file), "triggers", "--limit", "-2"]
        with patch.object(sys, "argv", argv), pytest.raises(SystemExit):
            main()
