"""Agent persona model."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PersonaId = Literal["risky-rita", "cautious-carl", "balanced-bob"]


class Persona(BaseModel):
    """Behavioural bias profile: a signal offset plus flavour text for buys."""

    model_config = ConfigDict(frozen=True)

    id: PersonaId
    name: str
    description: str
    exploration_bias: float = Field(ge=-1.0, le=1.0)
    thought_pool: tuple[str, ...] = Field(min_length=1)
