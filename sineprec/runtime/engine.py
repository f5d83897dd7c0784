"""
sineprec.runtime.engine
=======================

The comparison loop that drives every statistics cell.

One outer iteration draws one input per distribution, computes its
high-precision reference sine once, and records every evaluator's result
against that shared reference in the (distribution, evaluator) cell. The
loop runs until a stop is requested through `EngineControl`; snapshot and
stop requests are only looked at between outer iterations, so every report
sees all cells in a consistent state.

Examples
--------
>>> import io
>>> from sineprec.config import EngineConfig
>>> from sineprec.runtime.engine import ComparisonEngine
>>> out = io.StringIO()
>>> engine = ComparisonEngine(EngineConfig(seed=7, precision_bits=128), stream=out)
>>> final = engine.run(max_iterations=5)
>>> len(final), {r.count for r in final}
(12, {5})
>>> len(out.getvalue().splitlines())
12
"""

from __future__ import annotations
import logging
import sys
import time
from typing import Dict, List, Optional, TextIO

import numpy as np

from sineprec.backends.polars.ledger import ReportLedger
from sineprec.config import EngineConfig
from sineprec.core.names import CellKey, ReportKind
from sineprec.core.precision import make_context
from sineprec.reporting.text import write_reports
from sineprec.runtime.control import EngineControl
from sineprec.stats.common.welford import ErrorReport, RunningErrorStats
from sineprec.stats.distributions import DISTRIBUTIONS
from sineprec.stats.evaluators import EVALUATORS, reference_sine

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """
    Runs the sampling loop over the distribution x evaluator matrix.

    The engine exclusively owns its random source and its statistics cells;
    nothing else mutates them.

    Parameters
    ----------
    config : EngineConfig, optional
        Run configuration; validated on construction
    control : EngineControl, optional
        Stop/snapshot flags; a private one is created when omitted
    stream : TextIO, optional
        Where report lines go (``sys.stdout`` at report time when omitted)
    ledger : ReportLedger, optional
        Receives lifecycle events and every emitted report
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        control: Optional[EngineControl] = None,
        stream: Optional[TextIO] = None,
        ledger: Optional[ReportLedger] = None,
    ):
        self.config = config if config is not None else EngineConfig()
        self.config.validate()

        self.ctx = make_context(self.config.precision_bits)
        self.control = control if control is not None else EngineControl()
        self.stream = stream
        self.ledger = ledger
        self.rng = np.random.default_rng(self.config.seed)

        self.distributions = [DISTRIBUTIONS[k] for k in self.config.distributions]
        self.evaluators = [EVALUATORS[k] for k in self.config.evaluators]

        # Insertion order is the fixed (distribution, evaluator) report order.
        self.stats: Dict[CellKey, RunningErrorStats] = {
            (dist.kind, ev.kind): RunningErrorStats(dist.name, ev.name, ctx=self.ctx)
            for dist in self.distributions
            for ev in self.evaluators
        }
        self.iterations = 0

    @property
    def samples(self) -> int:
        """Samples drawn per distribution so far."""
        return self.iterations

    def step(self) -> None:
        """Run one outer iteration: one sample per distribution."""
        ctx = self.ctx
        for dist in self.distributions:
            x = dist.sample(self.rng)
            reference = reference_sine(x, ctx)
            for ev in self.evaluators:
                self.stats[(dist.kind, ev.kind)].record(ev.evaluate(x, ctx), reference)
        self.iterations += 1

    def reports(self) -> List[ErrorReport]:
        """Current report of every cell, in fixed order, without emitting it."""
        return [cell.report() for cell in self.stats.values()]

    def report(self, kind: ReportKind = ReportKind.SNAPSHOT) -> List[ErrorReport]:
        """Emit the report of every cell to the stream (and ledger)."""
        reports = self.reports()
        stream = self.stream if self.stream is not None else sys.stdout
        write_reports(reports, stream, self.config.report_digits, self.ctx)
        if self.ledger is not None:
            self.ledger.append_report(kind, reports, self.ctx)
        logger.info(
            "Emitted %s report of %d cells after %d iterations",
            ReportKind(kind).value,
            len(reports),
            self.iterations,
        )
        return reports

    def poll(self) -> Optional[List[ErrorReport]]:
        """Service a pending snapshot request; returns its reports, if any."""
        if self.control.consume_snapshot():
            return self.report(ReportKind.SNAPSHOT)
        return None

    def run(self, max_iterations: Optional[int] = None) -> List[ErrorReport]:
        """
        Iterate until a stop is requested, then emit and return the final report.

        Parameters
        ----------
        max_iterations : int, optional
            Also stop after this many outer iterations of this call

        Returns
        -------
        List[ErrorReport]
            The final report, one entry per cell
        """
        if max_iterations is not None and max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")

        logger.info(
            "Starting comparison: seed=%d, precision=%d bits, %d cells",
            self.config.seed,
            self.config.precision_bits,
            len(self.stats),
        )
        if self.ledger is not None:
            self.ledger.log_lifecycle(
                "start",
                {
                    "seed": self.config.seed,
                    "precision_bits": self.config.precision_bits,
                    "iterations": self.iterations,
                },
            )

        started = time.perf_counter()
        completed = 0
        while not self.control.stop_requested:
            if max_iterations is not None and completed >= max_iterations:
                break
            self.step()
            completed += 1
            if self.iterations % self.config.progress_interval == 0:
                logger.debug("Completed %d iterations", self.iterations)
            self.poll()

        elapsed = time.perf_counter() - started
        logger.info(
            "Stopped after %d iterations (%d in this run, %.3fs)",
            self.iterations,
            completed,
            elapsed,
        )
        final = self.report(ReportKind.FINAL)
        if self.ledger is not None:
            self.ledger.log_lifecycle(
                "stop",
                {
                    "iterations": self.iterations,
                    "completed": completed,
                    "elapsed_s": elapsed,
                    "stop_requested": self.control.stop_requested,
                },
            )
        return final
