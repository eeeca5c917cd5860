"""Agent registry: maps config strings to DecisionAgent subclasses.

Usage::

    from agents.registry import create_agent

    agent = create_agent(agent_config.agent_system)
"""

from __future__ import annotations

import random
from typing import Type

from agents.base import DecisionAgent

# ---------------------------------------------------------------------------
# Registry mapping
# ---------------------------------------------------------------------------
_REGISTRY: dict[str, Type[DecisionAgent]] = {}


def register(name: str):
    """Decorator to register a ``DecisionAgent`` subclass under *name*."""

    def _decorator(cls: Type[DecisionAgent]) -> Type[DecisionAgent]:
        if name in _REGISTRY:
            raise ValueError(f"Agent '{name}' is already registered.")
        _REGISTRY[name] = cls
        return cls

    return _decorator


def available_agents() -> list[str]:
    """Names of all registered agents."""
    _ensure_builtins_loaded()
    return sorted(_REGISTRY)


def create_agent(name: str, rng: random.Random | None = None) -> DecisionAgent:
    """Instantiate the agent registered under *name*.

    Raises ``KeyError`` if *name* is not registered.
    """
    # Lazy-import concrete implementations so they self-register.
    _ensure_builtins_loaded()

    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY)) or "(none)"
        raise KeyError(f"Unknown agent '{name}'. Available: {available}.")
    return _REGISTRY[name](rng=rng)


def _ensure_builtins_loaded() -> None:
    """Import built-in agent modules so their ``@register`` calls execute."""
    import agents.momentum  # noqa: F401
