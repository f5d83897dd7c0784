"""
sineprec.runtime.control
========================

Cooperative stop/snapshot notifications for a running engine.

Both notifications are level-triggered flags. They may be raised from any
thread or from a signal handler; the engine only reads them between outer
iterations, so no statistics cell is ever observed mid-update.

Examples
--------
>>> from sineprec.runtime.control import EngineControl
>>> control = EngineControl()
>>> control.stop_requested
False
>>> control.request_snapshot()
>>> control.consume_snapshot()
True
>>> control.consume_snapshot()
False
"""

from __future__ import annotations
import logging
import signal
import threading
from typing import Any, Dict

logger = logging.getLogger(__name__)


class EngineControl:
    """Holds the stop and snapshot flags polled by `ComparisonEngine`."""

    def __init__(self) -> None:
        self._stop = threading.Event()
        self._snapshot = threading.Event()

    def request_stop(self) -> None:
        """Ask the engine to finish the current iteration and report."""
        self._stop.set()

    def request_snapshot(self) -> None:
        """Ask the engine for one report without stopping."""
        self._snapshot.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    @property
    def snapshot_requested(self) -> bool:
        return self._snapshot.is_set()

    def consume_snapshot(self) -> bool:
        """Return whether a snapshot was requested, clearing the request."""
        if self._snapshot.is_set():
            self._snapshot.clear()
            return True
        return False


def install_signal_handlers(control: EngineControl) -> Dict[int, Any]:
    """
    Route SIGINT to a stop request and SIGHUP to a snapshot request.

    SIGHUP is skipped on platforms that lack it. Must be called from the main
    thread. Returns the previous handlers keyed by signal number, suitable
    for `restore_signal_handlers`.
    """

    def _on_stop(signum: int, frame: Any) -> None:
        control.request_stop()

    def _on_snapshot(signum: int, frame: Any) -> None:
        control.request_snapshot()

    previous: Dict[int, Any] = {}
    previous[signal.SIGINT] = signal.signal(signal.SIGINT, _on_stop)
    if hasattr(signal, "SIGHUP"):
        previous[signal.SIGHUP] = signal.signal(signal.SIGHUP, _on_snapshot)
    logger.debug("Installed handlers for signals %s", sorted(previous))
    return previous


def restore_signal_handlers(previous: Dict[int, Any]) -> None:
    """Reinstall handlers returned by `install_signal_handlers`."""
    for signum, handler in previous.items():
        signal.signal(signum, handler)
