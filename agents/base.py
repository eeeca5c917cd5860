"""Abstract base class for decision agents.

Every agent implements this protocol so the simulation controller can invoke
them interchangeably.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from models.config import AgentConfig
from models.decision import TradeRecord


class DecisionAgent(ABC):
    """Common interface for pluggable trading agents.

    Agents hold no simulation state; the config is passed on every call so
    parameter changes apply from the next tick onwards.
    """

    @abstractmethod
    def decide(
        self,
        current_price: float,
        price_history: Sequence[float],
        config: AgentConfig,
    ) -> TradeRecord:
        """Return one trade decision for the current step.

        *price_history* holds the prices of up to the 20 steps preceding
        *current_price*, oldest first, and must not be empty.
        """
