"""Stop token for graceful operator interruption."""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class StopToken:
    """
    Lightweight cooperative stop controller.

    It can be tripped by signals (SIGINT/SIGTERM) or programmatically via
    `request_stop()`. Consumers check `should_stop()` at phase boundaries and
    while awaiting the external process, and use `wait()` for interruptible
    pauses.
    """

    def __init__(
        self,
        enable_signals: bool = True,
        on_stop: Optional[Callable[[], None]] = None,
    ) -> None:
        self._on_stop = on_stop
        self._stopped = threading.Event()
        self._prev_handlers: Dict[int, Callable] = {}
        if enable_signals:
            self._install_signal_handlers()

    def _install_signal_handlers(self) -> None:
        """Capture SIGINT/SIGTERM and mark the token as stopped."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                self._prev_handlers[sig] = signal.getsignal(sig)
                signal.signal(sig, self._handle_signal)  # type: ignore[arg-type]
            except (ValueError, OSError):
                # Not on the main thread; fall back to programmatic stops only.
                logger.debug("Cannot install handler for signal %s", sig)
                continue

    def _handle_signal(self, signum: int, frame) -> None:  # type: ignore[override]
        self.request_stop()

    def request_stop(self) -> None:
        """Mark the token as stopped and trigger callback once."""
        if self._stopped.is_set():
            return
        self._stopped.set()
        if self._on_stop:
            try:
                self._on_stop()
            except Exception as exc:
                logger.debug("Stop callback failed: %s", exc)

    def should_stop(self) -> bool:
        """Return True once a stop was requested."""
        return self._stopped.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds; return True if a stop arrives first."""
        return self._stopped.wait(timeout)

    def restore(self) -> None:
        """Restore original signal handlers."""
        for sig, handler in self._prev_handlers.items():
            try:
                signal.signal(sig, handler)  # type: ignore[arg-type]
            except (ValueError, OSError):
                continue
        self._prev_handlers.clear()

    def __enter__(self) -> "StopToken":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
