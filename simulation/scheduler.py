"""Periodic tick driver for the simulation controller.

A single daemon thread waits on a stop event with a timeout and calls the
callback after each interval. Stopping sets that thread's event and forgets
the thread, so the next ``start`` always arms a fresh thread and event. The
old thread can be joined immediately or later through ``join``; joining from
the callback itself is skipped and simply ends the loop.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.2


class TickScheduler:
    """Repeating timer: ``start`` arms it, ``stop`` disarms it."""

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}.")
        self._callback = callback
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_active(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Arm the timer. No-op if it is already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._loop,
            args=(self._stop_event,),
            name="tick-scheduler",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Tick scheduler armed (%.3fs).", self._interval)

    def stop(self, wait: bool = True, timeout: float = 5.0) -> threading.Thread | None:
        """Disarm the timer and return the thread that was driving it.

        With *wait*, block until an in-flight callback has finished. Without
        it, pass the returned thread to ``join`` later; a ``start`` in the
        meantime arms a fresh thread that this stop cannot touch.
        """
        thread = self._thread
        if thread is None:
            return None
        self._stop_event.set()
        self._thread = None
        logger.debug("Tick scheduler disarmed.")
        if wait:
            self.join(thread, timeout)
        return thread

    @staticmethod
    def join(thread: threading.Thread | None, timeout: float = 5.0) -> None:
        """Wait for a disarmed scheduler thread, unless called from it."""
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            self._callback()
