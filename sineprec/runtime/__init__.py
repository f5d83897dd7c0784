"""
sineprec.runtime
================

Execution infrastructure for comparison runs.

Key Components
--------------
- `ComparisonEngine`: the sampling loop over the statistics matrix
- `EngineControl`: cooperative stop/snapshot flags polled by the engine
- `install_signal_handlers`: maps SIGINT/SIGHUP onto an `EngineControl`

Examples
--------
>>> from sineprec.runtime import ComparisonEngine, EngineControl
>>> control = EngineControl()
>>> control.request_stop()
>>> # ComparisonEngine(control=control).run() reports once and returns
"""

from sineprec.runtime.control import (
    EngineControl,
    install_signal_handlers,
    restore_signal_handlers,
)
from sineprec.runtime.engine import ComparisonEngine

__all__ = [
    "ComparisonEngine",
    "EngineControl",
    "install_signal_handlers",
    "restore_signal_handlers",
]
