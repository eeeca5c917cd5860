"""Simulation configuration models, loaded from YAML.

These live in ``models/`` because they are shared data contracts used by the
simulation controller, the agents and the command-line runner.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from models.persona import PersonaId

RewardStrategy = Literal["profit", "sharpe", "risk-adjusted"]


class AgentConfig(BaseModel):
    """Configuration for the trading agent.

    Mutable at any time through ``SimulationController.update_config``; the
    change is picked up on the next tick.
    """

    model_config = ConfigDict(extra="forbid")

    learning_rate: float = Field(
        default=0.001,
        gt=0.0,
        description="Shown to users for flavour only; no decision math reads it.",
    )
    exploration_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=0.5,
        description="Probability of exploration jitter and scale of the persona bias.",
    )
    reward_strategy: RewardStrategy = Field(
        default="profit",
        description="Formula used to turn a step's portfolio change into a reward.",
    )
    persona: PersonaId = Field(
        default="balanced-bob",
        description="Persona supplying the signal bias and buy rationale text.",
    )
    agent_system: str = Field(
        default="momentum",
        description="Registered decision agent name, e.g. 'momentum'.",
    )


class SimulationConfig(BaseModel):
    """Top-level configuration for a headless simulation run, loaded from YAML."""

    model_config = ConfigDict(extra="forbid")

    dataset: str = Field(
        default="BTC-USD",
        description="Dataset name, e.g. 'BTC-USD', 'S&P500', 'EUR-USD'.",
    )
    series_length: int = Field(
        default=100,
        ge=2,
        description="Number of market points generated for the dataset.",
    )
    tick_interval: float = Field(
        default=0.2,
        gt=0,
        description="Seconds between ticks when driven by the scheduler.",
    )
    num_episodes: int = Field(
        default=1,
        ge=1,
        description="Number of episodes to run.",
    )
    agent: AgentConfig = Field(
        default_factory=AgentConfig,
        description="Agent configuration.",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load and validate a ``SimulationConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
