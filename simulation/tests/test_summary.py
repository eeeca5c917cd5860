"""Tests for run summaries."""

import random

import pytest

from models.config import AgentConfig
from models.decision import TradeRecord
from models.portfolio import PortfolioState
from simulation.controller import SimulationController
from simulation.summary import (
    latest_thoughts,
    performance_summary,
    reward_stats,
    skill_label,
    summarize,
    trade_stats,
)


def _trade(action: str, confidence: float) -> TradeRecord:
    return TradeRecord(timestamp=0, action=action, price=1.0, confidence=confidence, reason=action)


class TestRewardStats:
    def test_empty(self):
        stats = reward_stats([])
        assert stats.total == 0
        assert stats.average == 0
        assert stats.positive_rate == 0

    def test_values(self):
        stats = reward_stats([10.0, -5.0, 0.0, 15.0])
        assert stats.total == 20.0
        assert stats.average == 5.0
        assert stats.positive_count == 2
        assert stats.positive_rate == 50.0


class TestTradeStats:
    def test_counts(self):
        stats = trade_stats(
            [_trade("buy", 0.5), _trade("hold", 0.3), _trade("sell", 1.0), _trade("buy", 0.2)]
        )
        assert (stats.buys, stats.sells, stats.holds) == (2, 1, 1)
        assert stats.average_confidence == pytest.approx(0.5)

    def test_empty(self):
        assert trade_stats([]).average_confidence == 0.0


class TestPerformance:
    @pytest.mark.parametrize(
        "episodes, label",
        [(0, "Beginner"), (1, "Learning"), (4, "Learning"), (5, "Improving"), (10, "Expert")],
    )
    def test_skill_label(self, episodes, label):
        assert skill_label(episodes) == label

    def test_value_and_level(self):
        portfolio = PortfolioState(cash=500.0, shares=5, total_value=10_500.0, returns=0.05)
        summary = performance_summary(portfolio, 2100.0, episode_count=7)
        assert summary.total_value == 11_000.0
        assert summary.change == 1_000.0
        assert summary.change_pct == pytest.approx(10.0)
        assert summary.level == 3

    def test_latest_thoughts_newest_first(self):
        portfolio = PortfolioState(
            cash=0.0, shares=0, total_value=0.0, returns=-1.0, thoughts=["a", "b", "c", "d"]
        )
        assert latest_thoughts(portfolio) == ["d", "c", "b"]
        assert latest_thoughts(portfolio, n=0) == []


class TestSummarize:
    def test_after_episode(self):
        controller = SimulationController(
            dataset="S&P500",
            config=AgentConfig(exploration_rate=0.0, persona="cautious-carl"),
            series_length=40,
            tick_interval=None,
            rng=random.Random(8),
        )
        controller.run_episode()
        summary = summarize(controller)
        assert summary.dataset == "S&P500"
        assert summary.persona == "Cautious Carl"
        assert summary.episode_count == 1
        assert summary.current_step == 39
        trades = summary.trades
        assert trades.buys + trades.sells + trades.holds == 38
        assert summary.performance.skill == "Learning"
        assert len(summary.latest_thoughts) == 3
