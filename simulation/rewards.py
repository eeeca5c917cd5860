"""Reward strategies: turn a step's portfolio change into a scalar.

The formulas are illustrative rather than financial-grade. ``sharpe`` is a
single-period proxy without any variance term.
"""

from __future__ import annotations

from typing import Callable

# (previous_total_value, new_total_value, returns) -> reward
RewardFn = Callable[[float, float, float], float]


def profit_reward(previous_value: float, new_value: float, returns: float) -> float:
    return new_value - previous_value


def sharpe_reward(previous_value: float, new_value: float, returns: float) -> float:
    return returns * 100


def risk_adjusted_reward(previous_value: float, new_value: float, returns: float) -> float:
    # Damped symmetrically as cumulative return magnitude grows.
    return (new_value - previous_value) * (1 - abs(returns) * 0.1)


REWARD_STRATEGIES: dict[str, RewardFn] = {
    "profit": profit_reward,
    "sharpe": sharpe_reward,
    "risk-adjusted": risk_adjusted_reward,
}


def compute_reward(
    strategy: str,
    previous_value: float,
    new_value: float,
    returns: float,
) -> float:
    """Apply the reward formula registered under *strategy*.

    Raises ``KeyError`` if *strategy* is unknown.
    """
    if strategy not in REWARD_STRATEGIES:
        raise KeyError(
            f"Unknown reward strategy '{strategy}'. "
            f"Available: {', '.join(REWARD_STRATEGIES)}."
        )
    return REWARD_STRATEGIES[strategy](previous_value, new_value, returns)
