"""Data models for the trading agent playground.

The market generator, agents and simulation controller all import from models.
"""

from models.config import AgentConfig, RewardStrategy, SimulationConfig
from models.decision import TradeAction, TradeRecord
from models.episode import SimulationSnapshot
from models.market import InstrumentKind, MarketPoint
from models.persona import Persona, PersonaId
from models.portfolio import PortfolioState

__all__ = [
    # config
    "AgentConfig",
    "RewardStrategy",
    "SimulationConfig",
    # decision
    "TradeAction",
    "TradeRecord",
    # episode
    "SimulationSnapshot",
    # market
    "InstrumentKind",
    "MarketPoint",
    # persona
    "Persona",
    "PersonaId",
    # portfolio
    "PortfolioState",
]
