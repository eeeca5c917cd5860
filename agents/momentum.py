"""Momentum agent: moving-average crossover with persona-driven exploration.

The signal is the relative spread between a 5-step and a 20-step moving
average of recent prices, shifted by the persona bias scaled by the
exploration rate. With probability ``exploration_rate`` a uniform jitter in
``[-0.1, 0.1]`` is added on top. The final signal is thresholded at +/-0.02.
"""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Sequence

from agents.base import DecisionAgent
from agents.personas import get_persona
from agents.registry import register
from models.config import AgentConfig
from models.decision import TradeRecord
from models.persona import Persona

logger = logging.getLogger(__name__)

SHORT_WINDOW = 5
LONG_WINDOW = 20
BUY_THRESHOLD = 0.02
SELL_THRESHOLD = -0.02
EXPLORATION_JITTER = 0.1
HOLD_CONFIDENCE = 0.3

SELL_REASON = "Time to take profits and exit"
HOLD_REASON = "Market looks uncertain, staying put"


def moving_average(prices: Sequence[float], window: int) -> float:
    """Mean of the last *window* prices, or of all of them if fewer."""
    tail = list(prices[-window:])
    return sum(tail) / len(tail)


def compute_signal(
    price_history: Sequence[float],
    config: AgentConfig,
    persona: Persona,
) -> float:
    """Deterministic part of the signal: MA spread plus persona bias."""
    short_ma = moving_average(price_history, SHORT_WINDOW)
    long_ma = moving_average(price_history, LONG_WINDOW)
    spread = (short_ma - long_ma) / long_ma if long_ma else 0.0
    return spread + persona.exploration_bias * config.exploration_rate


@register("momentum")
class MomentumAgent(DecisionAgent):
    """Rule-based agent; the persona only colours the signal and buy reasons."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def decide(
        self,
        current_price: float,
        price_history: Sequence[float],
        config: AgentConfig,
    ) -> TradeRecord:
        if not price_history:
            raise ValueError("Momentum agent needs at least one historical price.")

        persona = get_persona(config.persona)
        signal = compute_signal(price_history, config, persona)

        if self._rng.random() < config.exploration_rate:
            signal += self._rng.uniform(-EXPLORATION_JITTER, EXPLORATION_JITTER)

        if signal > BUY_THRESHOLD:
            action = "buy"
            confidence = min(abs(signal) * 5, 1.0)
            reason = self._rng.choice(persona.thought_pool)
        elif signal < SELL_THRESHOLD:
            action = "sell"
            confidence = min(abs(signal) * 5, 1.0)
            reason = SELL_REASON
        else:
            action = "hold"
            confidence = HOLD_CONFIDENCE
            reason = HOLD_REASON

        logger.debug(
            "Signal %.4f -> %s (confidence %.2f) at %.2f",
            signal,
            action,
            confidence,
            current_price,
        )
        return TradeRecord(
            timestamp=int(time.time() * 1000),
            action=action,
            price=current_price,
            confidence=confidence,
            reason=reason,
        )
