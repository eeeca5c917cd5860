"""Run summaries: reward, trade and performance statistics for display.

These are the figures a dashboard shows next to the charts. They are
computed on demand from the controller and never stored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from models.decision import TradeRecord
from models.portfolio import PortfolioState
from simulation.ledger import INITIAL_CAPITAL

if TYPE_CHECKING:
    from simulation.controller import SimulationController


class RewardStats(BaseModel):
    total: float
    average: float
    positive_count: int
    positive_rate: float  # Percentage of strictly positive rewards


class TradeStats(BaseModel):
    buys: int
    sells: int
    holds: int
    average_confidence: float


class PerformanceSummary(BaseModel):
    """Portfolio value at the current price and the agent's "level".

    Level goes up every three completed episodes.
    """

    total_value: float
    change: float
    change_pct: float
    level: int
    skill: str


class RunSummary(BaseModel):
    dataset: str
    persona: str
    current_step: int
    episode_count: int
    rewards: RewardStats
    trades: TradeStats
    performance: PerformanceSummary
    latest_thoughts: list[str]


def reward_stats(rewards: list[float]) -> RewardStats:
    total = sum(rewards)
    positive = sum(1 for r in rewards if r > 0)
    count = len(rewards)
    return RewardStats(
        total=total,
        average=total / count if count else 0.0,
        positive_count=positive,
        positive_rate=positive / count * 100 if count else 0.0,
    )


def trade_stats(trades: list[TradeRecord]) -> TradeStats:
    counts = {"buy": 0, "sell": 0, "hold": 0}
    for trade in trades:
        counts[trade.action] += 1
    return TradeStats(
        buys=counts["buy"],
        sells=counts["sell"],
        holds=counts["hold"],
        average_confidence=(
            sum(t.confidence for t in trades) / len(trades) if trades else 0.0
        ),
    )


def skill_label(episode_count: int) -> str:
    if episode_count == 0:
        return "Beginner"
    if episode_count < 5:
        return "Learning"
    if episode_count < 10:
        return "Improving"
    return "Expert"


def performance_summary(
    portfolio: PortfolioState,
    current_price: float,
    episode_count: int,
) -> PerformanceSummary:
    total_value = portfolio.cash + portfolio.shares * current_price
    change = total_value - INITIAL_CAPITAL
    return PerformanceSummary(
        total_value=total_value,
        change=change,
        change_pct=change / INITIAL_CAPITAL * 100,
        level=episode_count // 3 + 1,
        skill=skill_label(episode_count),
    )


def latest_thoughts(portfolio: PortfolioState, n: int = 3) -> list[str]:
    """The *n* most recent thoughts, newest first."""
    return list(reversed(portfolio.thoughts[-n:])) if n > 0 else []


def summarize(controller: SimulationController) -> RunSummary:
    """Bundle all statistics for the controller's current state."""
    snapshot = controller.snapshot()
    portfolio = snapshot.portfolio
    return RunSummary(
        dataset=snapshot.dataset,
        persona=controller.persona.name,
        current_step=snapshot.current_step,
        episode_count=snapshot.episode_count,
        rewards=reward_stats(snapshot.reward_history),
        trades=trade_stats(portfolio.trades),
        performance=performance_summary(
            portfolio, snapshot.current_price, snapshot.episode_count
        ),
        latest_thoughts=latest_thoughts(portfolio),
    )
