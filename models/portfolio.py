"""Portfolio state models."""

from pydantic import BaseModel, ConfigDict, Field

from models.decision import TradeRecord


class PortfolioState(BaseModel):
    """Cash, shares and logs after a step.

    Replaced wholesale by the ledger on every step; ``total_value`` always
    equals ``cash + shares * last observed price``.
    """

    model_config = ConfigDict(frozen=True)

    cash: float = Field(ge=0)
    shares: int = Field(ge=0)
    total_value: float
    returns: float
    trades: list[TradeRecord] = []
    thoughts: list[str] = []  # Last five decision reasons, oldest first
