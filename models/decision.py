"""Agent output model: one trade decision per step."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TradeAction = Literal["buy", "sell", "hold"]


class TradeRecord(BaseModel):
    """Buy/sell/hold decision produced by an agent.

    The ledger appends every record to the trade log, including buys and
    sells that could not be executed and holds.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int  # Wall-clock ms at decision time, not the market point's time
    action: TradeAction
    price: float
    confidence: float = Field(ge=0.0, le=1.0)
    reason: str
