"""Tests for day aggregation and the shared numeric helpers."""

from datetime import date, timedelta

import pytest

from headache_insights.aggregation import aggregate_days, mean, newest_first, round_half_up
from tests.conftest import NOW, make_episode


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.25, 1) == 0.3
        assert round_half_up(6.0, 1) == 6.0

    def test_negative_halves_round_toward_positive(self):
        assert round_half_up(-12.5) == -12
        assert round_half_up(-54.55) == -55


def test_mean_of_empty_list_is_zero():
    assert mean([]) == 0.0
    assert mean([4, 8]) == 6.0


def test_newest_first_does_not_mutate_input():
    older = make_episode(3)
    newer = make_episode(1)
    episodes = [older, newer]
    assert newest_first(episodes) == [newer, older]
    assert episodes == [older, newer]


class TestAggregateDays:
    """Tests for aggregate_days."""

    @pytest.mark.parametrize("window", [1, 7, 30])
    def test_returns_exactly_window_entries_without_episodes(self, window):
        days = aggregate_days([], window, now=NOW)
        assert len(days) == window
        assert all(d.episode_count == 0 for d in days)
        assert all(d.avg_intensity == 0 for d in days)
        assert all(d.avg_device_effectiveness == 0 for d in days)

    def test_ordered_oldest_to_newest_ending_today(self):
        days = aggregate_days([], 7, now=NOW)
        assert days[-1].date == NOW.date()
        assert days[0].date == NOW.date() - timedelta(days=6)
        assert [d.day for d in days] == list(range(1, 8))

    def test_same_day_intensity_is_exact_mean(self):
        episodes = [make_episode(0, hour=8, intensity=4), make_episode(0, hour=10, intensity=8)]
        today = aggregate_days(episodes, 7, now=NOW)[-1]
        assert today.episode_count == 2
        assert today.avg_intensity == 6.0

    def test_intensity_rounded_to_one_decimal(self):
        episodes = [make_episode(0, hour=h, intensity=i) for h, i in [(1, 5), (2, 5), (3, 6)]]
        assert aggregate_days(episodes, 1, now=NOW)[0].avg_intensity == 5.3

    def test_device_effectiveness_only_counts_device_sessions(self):
        episodes = [
            make_episode(1, hour=8, used_device=True, device_effectiveness=6),
            make_episode(1, hour=9, used_device=True, device_effectiveness=9),
            make_episode(1, hour=10, used_device=True),  # no rating
            make_episode(1, hour=11, device_effectiveness=2),  # device not used
        ]
        yesterday = aggregate_days(episodes, 2, now=NOW)[0]
        assert yesterday.episode_count == 4
        assert yesterday.avg_device_effectiveness == 7.5

    def test_episodes_outside_window_ignored(self):
        episodes = [make_episode(7), make_episode(30)]
        assert sum(d.episode_count for d in aggregate_days(episodes, 7, now=NOW)) == 0

    def test_sample_history(self, sample_episodes):
        days = aggregate_days(sample_episodes, 7, now=NOW)
        assert [d.episode_count for d in days] == [2, 1, 1, 1, 1, 1, 1]
        assert days[0].date == date(2025, 6, 9)
        assert days[0].avg_intensity == 6.5
        assert days[3].avg_device_effectiveness == 7.0

    def test_input_order_does_not_matter(self, sample_episodes):
        forward = aggregate_days(sample_episodes, 30, now=NOW)
        backward = aggregate_days(list(reversed(sample_episodes)), 30, now=NOW)
        assert forward == backward

    @pytest.mark.parametrize("window", [0, -3])
    def test_non_positive_window_raises(self, window):
        with pytest.raises(ValueError, match="window_days"):
            aggregate_days([], window, now=NOW)

    def test_to_dict_serializes_date(self):
        data = aggregate_days([], 1, now=NOW)[0].to_dict()
        assert data["date"] == "2025-06-15"
        assert data["day"] == 1
