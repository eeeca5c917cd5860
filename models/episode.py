"""Episode-level models."""

from pydantic import BaseModel, ConfigDict

from models.config import AgentConfig
from models.portfolio import PortfolioState


class SimulationSnapshot(BaseModel):
    """Read-only view of the controller handed to observers and the CLI.

    ``current_price`` is the price at ``current_step``; ``progress`` is the
    percentage of the series traversed.
    """

    model_config = ConfigDict(frozen=True)

    dataset: str
    current_step: int
    series_length: int
    is_running: bool
    episode_count: int
    current_price: float
    progress: float
    portfolio: PortfolioState
    reward_history: list[float]
    config: AgentConfig
