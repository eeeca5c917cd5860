"""Market data models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

InstrumentKind = Literal["crypto", "stock", "forex"]


class MarketPoint(BaseModel):
    """One bar of a synthetic market series.

    A series is a plain ``list[MarketPoint]`` in strictly increasing timestamp
    order. Points are frozen once generated.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int  # ms since epoch
    price: float = Field(gt=0)
    volume: int | None = Field(default=None, ge=0)  # Decorative, never read by the agent
