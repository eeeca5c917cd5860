"""Static persona table: signal bias and buy rationale per persona."""

from __future__ import annotations

from models.persona import Persona

PERSONAS: dict[str, Persona] = {
    "risky-rita": Persona(
        id="risky-rita",
        name="Risky Rita",
        description="High-risk, high-reward trading style",
        exploration_bias=0.3,
        thought_pool=(
            "Fortune favors the bold! 🚀",
            "Time to swing for the fences!",
            "Big risks, bigger rewards!",
            "YOLO trade incoming!",
            "Going all-in on this signal!",
        ),
    ),
    "cautious-carl": Persona(
        id="cautious-carl",
        name="Cautious Carl",
        description="Conservative, risk-averse approach",
        exploration_bias=-0.2,
        thought_pool=(
            "Better safe than sorry...",
            "This looks too risky for me",
            "Preserving capital is key",
            "Small steady gains win the race",
            "Risk management first!",
        ),
    ),
    "balanced-bob": Persona(
        id="balanced-bob",
        name="Balanced Bob",
        description="Moderate risk with balanced strategy",
        exploration_bias=0.0,
        thought_pool=(
            "Finding the perfect balance",
            "Moderate risk, steady progress",
            "Diversification is wisdom",
            "Calculated moves only",
            "Following the trend wisely",
        ),
    ),
}


def available_personas() -> list[str]:
    return list(PERSONAS)


def get_persona(persona_id: str) -> Persona:
    """Look up a persona by id.

    Raises ``KeyError`` if *persona_id* is unknown.
    """
    try:
        return PERSONAS[persona_id]
    except KeyError:
        raise KeyError(
            f"Unknown persona '{persona_id}'. Available: {', '.join(PERSONAS)}."
        ) from None
