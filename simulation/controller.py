"""Simulation controller: owns run/episode state and drives the step loop.

Lifecycle:
    1. Generate the market series for the selected dataset.
    2. ``start`` arms the tick scheduler (or ``run_episode`` ticks inline).
    3. Each tick:
        - At the last index: stop running and count the episode.
        - Otherwise gather up to 20 prior prices, let the agent decide,
          apply the decision through the ledger, record the reward and
          advance the step cursor. Step 0 has no history and only advances.
    4. ``reset`` / ``change_dataset`` pause and return to step 0 with a
       fresh portfolio; ``restart_episode`` does the same but keeps the
       episode count.

All mutators and ``tick`` run under a single re-entrant lock, so a portfolio
replacement and its reward append are always observed together.
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Any, Callable

from agents.base import DecisionAgent
from agents.personas import get_persona
from agents.registry import create_agent
from market.generator import DEFAULT_SERIES_LENGTH, generate_dataset
from models.config import AgentConfig, SimulationConfig
from models.episode import SimulationSnapshot
from models.market import MarketPoint
from models.persona import Persona
from models.portfolio import PortfolioState
from simulation.ledger import PortfolioLedger, initial_portfolio
from simulation.scheduler import DEFAULT_TICK_INTERVAL, TickScheduler

logger = logging.getLogger(__name__)

HISTORY_WINDOW = 20

Observer = Callable[[SimulationSnapshot], None]


class SimulationController:
    """Drives one agent over one market series, episode after episode.

    Pass ``tick_interval=None`` to drive ticks manually (tests, headless
    runs) instead of through the background scheduler.
    """

    def __init__(
        self,
        dataset: str = "BTC-USD",
        config: AgentConfig | None = None,
        *,
        series_length: int = DEFAULT_SERIES_LENGTH,
        tick_interval: float | None = DEFAULT_TICK_INTERVAL,
        series: list[MarketPoint] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._config = config or AgentConfig()
        self._agent: DecisionAgent = create_agent(self._config.agent_system, rng=self._rng)
        self._ledger = PortfolioLedger()
        if series is not None and not series:
            raise ValueError("Market series must contain at least one point.")
        self._series_length = series_length
        self._dataset = dataset
        self._series: list[MarketPoint] = (
            list(series)
            if series is not None
            else generate_dataset(dataset, series_length, rng=self._rng)
        )

        self._lock = threading.RLock()
        self._scheduler = (
            TickScheduler(self.tick, tick_interval) if tick_interval is not None else None
        )
        self._observers: list[Observer] = []

        self._current_step = 0
        self._is_running = False
        self._episode_count = 0
        self._portfolio = initial_portfolio()
        self._reward_history: list[float] = []

    @classmethod
    def from_config(
        cls,
        config: SimulationConfig,
        *,
        realtime: bool = True,
        rng: random.Random | None = None,
    ) -> SimulationController:
        """Build a controller from a loaded ``SimulationConfig``."""
        return cls(
            dataset=config.dataset,
            config=config.agent,
            series_length=config.series_length,
            tick_interval=config.tick_interval if realtime else None,
            rng=rng,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Idle -> Running. No-op if already running."""
        self._begin_run(arm_scheduler=True)

    def pause(self) -> None:
        """Running -> Idle. No tick mutates state once this returns."""
        with self._lock:
            if not self._is_running:
                return
            stopped = self._halt()
            logger.info("Simulation paused at step %d.", self._current_step)
        # Joined outside the lock so an in-flight tick can finish.
        TickScheduler.join(stopped)
        self._notify()

    def reset(self) -> None:
        """Hard reset: step 0, fresh portfolio, rewards and episode count cleared."""
        with self._lock:
            stopped = self._halt()
            self._clear_run(clear_episodes=True)
            logger.info("Simulation reset on '%s'.", self._dataset)
        TickScheduler.join(stopped)
        self._notify()

    def restart_episode(self) -> None:
        """Soft reset between episodes: like ``reset`` but keeps the episode count."""
        with self._lock:
            stopped = self._halt()
            self._clear_run(clear_episodes=False)
            logger.info(
                "Starting episode %d on '%s'.", self._episode_count + 1, self._dataset
            )
        TickScheduler.join(stopped)
        self._notify()

    def change_dataset(self, name: str) -> None:
        """Regenerate the series for dataset *name*, then hard reset.

        Raises ``KeyError`` if *name* is not a known dataset; the current
        series is kept in that case.
        """
        series = generate_dataset(name, self._series_length, rng=self._rng)
        with self._lock:
            stopped = self._halt()
            self._dataset = name
            self._series = series
            self._clear_run(clear_episodes=True)
            logger.info("Dataset changed to '%s' (%d points).", name, len(series))
        TickScheduler.join(stopped)
        self._notify()

    def update_config(self, partial: dict[str, Any] | None = None, **changes: Any) -> AgentConfig:
        """Merge *partial* and *changes* into the agent config and revalidate.

        Raises ``pydantic.ValidationError`` on invalid values or unknown keys
        and ``KeyError`` on an unknown agent system; the config is unchanged
        then.
        """
        updates = {**(partial or {}), **changes}
        with self._lock:
            merged = AgentConfig.model_validate({**self._config.model_dump(), **updates})
            if merged.agent_system != self._config.agent_system:
                self._agent = create_agent(merged.agent_system, rng=self._rng)
            self._config = merged
            logger.info("Agent config updated: %s", updates)
        self._notify()
        return merged

    def run_episode(self) -> SimulationSnapshot:
        """Tick inline until the current episode completes.

        Intended for headless use with ``tick_interval=None``; the background
        scheduler, if any, is not armed. The controller is left idle even if
        a tick raises.
        """
        self._begin_run(arm_scheduler=False)
        try:
            while self.is_running:
                self.tick()
        finally:
            self.pause()
        return self.snapshot()

    def _begin_run(self, arm_scheduler: bool) -> None:
        with self._lock:
            if self._is_running:
                return
            self._is_running = True
            logger.info(
                "Simulation started on '%s' at step %d/%d.",
                self._dataset,
                self._current_step,
                len(self._series) - 1,
            )
            if arm_scheduler and self._scheduler is not None:
                self._scheduler.start()
        self._notify()

    def _halt(self) -> threading.Thread | None:
        """Mark idle and disarm the scheduler; caller holds the lock.

        Returns the old scheduler thread for the caller to join once the
        lock is released.
        """
        self._is_running = False
        if self._scheduler is None:
            return None
        return self._scheduler.stop(wait=False)

    # ------------------------------------------------------------------
    # Step loop
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance the simulation by one step. Ignored unless running."""
        with self._lock:
            if not self._is_running:
                return

            if self._current_step >= len(self._series) - 1:
                self._complete_episode()
            else:
                self._step()
        self._notify()

    def _step(self) -> None:
        step = self._current_step
        current_price = self._series[step].price
        history = [p.price for p in self._series[max(0, step - HISTORY_WINDOW):step]]

        if history:
            decision = self._agent.decide(current_price, history, self._config)
            result = self._ledger.apply_decision(
                self._portfolio,
                decision,
                current_price,
                self._config.reward_strategy,
            )
            self._portfolio = result.next
            self._reward_history.append(result.reward)
            logger.debug(
                "Step %d: %s at %.2f, reward %.4f, value %.2f",
                step,
                decision.action,
                current_price,
                result.reward,
                result.next.total_value,
            )

        self._current_step += 1

    def _complete_episode(self) -> None:
        # May run on the scheduler thread or under the lock; never join here.
        self._halt()
        self._episode_count += 1
        logger.info(
            "Episode %d complete on '%s': value %.2f, return %.2f%%, %d trade(s).",
            self._episode_count,
            self._dataset,
            self._portfolio.total_value,
            self._portfolio.returns * 100,
            len(self._portfolio.trades),
        )

    def _clear_run(self, clear_episodes: bool) -> None:
        self._current_step = 0
        self._portfolio = initial_portfolio()
        self._reward_history = []
        if clear_episodes:
            self._episode_count = 0

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register *callback* for snapshots after every state change.

        Returns a function that unregisters it.
        """
        with self._lock:
            self._observers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return _unsubscribe

    def _notify(self) -> None:
        with self._lock:
            observers = list(self._observers)
            if not observers:
                return
            snapshot = self.snapshot()
        for callback in observers:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Observer %r failed.", callback)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def dataset(self) -> str:
        return self._dataset

    @property
    def market_series(self) -> list[MarketPoint]:
        return list(self._series)

    @property
    def portfolio(self) -> PortfolioState:
        return self._portfolio

    @property
    def reward_history(self) -> list[float]:
        with self._lock:
            return list(self._reward_history)

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def episode_count(self) -> int:
        return self._episode_count

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def persona(self) -> Persona:
        return get_persona(self._config.persona)

    @property
    def current_price(self) -> float:
        return self._series[self._current_step].price

    @property
    def progress(self) -> float:
        """Percentage of the series traversed (0 for a single-point series)."""
        last_index = len(self._series) - 1
        if last_index <= 0:
            return 0.0
        return self._current_step / last_index * 100

    def snapshot(self) -> SimulationSnapshot:
        """Consistent read-only view of the current state."""
        with self._lock:
            return SimulationSnapshot(
                dataset=self._dataset,
                current_step=self._current_step,
                series_length=len(self._series),
                is_running=self._is_running,
                episode_count=self._episode_count,
                current_price=self.current_price,
                progress=self.progress,
                portfolio=self._portfolio,
                reward_history=list(self._reward_history),
                config=self._config,
            )
