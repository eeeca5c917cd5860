"""Portfolio ledger: applies decisions to cash/share state and scores them.

The ledger is stateless. Each call takes the previous ``PortfolioState`` and
returns the next one together with the step's reward; the controller owns the
canonical state. Buys spend all available cash on whole shares and sells are
all-or-nothing. A buy without enough cash or a sell without shares is a
silent no-op, but the decision is still appended to the trade log.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from models.config import RewardStrategy
from models.decision import TradeRecord
from models.portfolio import PortfolioState
from simulation.rewards import compute_reward

logger = logging.getLogger(__name__)

INITIAL_CAPITAL = 10_000.0
MAX_THOUGHTS = 5


class LedgerResult(NamedTuple):
    next: PortfolioState
    reward: float


def initial_portfolio() -> PortfolioState:
    """Fresh portfolio: all cash, no shares, empty logs."""
    return PortfolioState(
        cash=INITIAL_CAPITAL,
        shares=0,
        total_value=INITIAL_CAPITAL,
        returns=0.0,
        trades=[],
        thoughts=[],
    )


class PortfolioLedger:
    """Pure transformer from (state, decision, price) to (next state, reward)."""

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def apply_decision(
        self,
        previous: PortfolioState,
        decision: TradeRecord,
        current_price: float,
        strategy: RewardStrategy,
    ) -> LedgerResult:
        """Execute *decision* at *current_price* against *previous*.

        Returns the next state and the reward computed under *strategy*.
        """
        cash, shares = self._execute(previous, decision, current_price)

        total_value = cash + shares * current_price
        returns = (total_value - INITIAL_CAPITAL) / INITIAL_CAPITAL
        reward = compute_reward(strategy, previous.total_value, total_value, returns)

        next_state = PortfolioState(
            cash=cash,
            shares=shares,
            total_value=total_value,
            returns=returns,
            trades=[*previous.trades, decision],
            thoughts=[*previous.thoughts, decision.reason][-MAX_THOUGHTS:],
        )
        return LedgerResult(next=next_state, reward=reward)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _execute(
        previous: PortfolioState,
        decision: TradeRecord,
        price: float,
    ) -> tuple[float, int]:
        """Return the post-trade ``(cash, shares)`` pair."""
        cash, shares = previous.cash, previous.shares

        if decision.action == "buy":
            if cash <= price:
                logger.debug("Buy skipped: cash %.2f does not cover price %.2f.", cash, price)
                return cash, shares
            bought = math.floor(cash / price)
            # Float division can round up to the next whole share.
            if bought * price > cash:
                bought -= 1
            return cash - bought * price, shares + bought

        if decision.action == "sell":
            if shares == 0:
                logger.debug("Sell skipped: no shares held.")
                return cash, shares
            return cash + shares * price, 0

        return cash, shares
