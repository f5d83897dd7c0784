"""
sineprec.stats.common.welford
=============================

Running relative-error statistics with Welford's online algorithm.

The quantities being averaged are themselves tiny relative errors, so a
naive sum of squares would cancel catastrophically. Welford's update keeps
only ``n``, the running mean and the running sum of squared deviations
(``m2``), all in the high-precision context, with the ``m2`` update done as a
single-rounding fused multiply-add.

Relative error is ``(observed - reference) / |reference|``. A reference of
exactly zero is not guarded: the error becomes ``±inf`` or ``nan`` and the
cell's mean and variance stay non-finite from then on.

Examples
--------
>>> from sineprec.core.precision import make_context
>>> from sineprec.stats.common.welford import RunningErrorStats
>>> ctx = make_context(128)
>>> stats = RunningErrorStats("dist", "eval", ctx=ctx)
>>> stats.record(ctx.mpf(1.5), ctx.mpf(1.5))
>>> stats.n, stats.mean
(1, mpf('0.0'))
>>> stats.record(ctx.mpf(3), ctx.mpf(2))
>>> stats.report().mean
mpf('0.25')
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any

from mpmath.ctx_mp import MPContext

from sineprec.core.precision import DEFAULT_CONTEXT, fma, ieee_divide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorReport:
    """A read-only view of one cell's statistics.

    ``variance`` and ``stddev`` are ``nan`` until at least two samples exist.
    """

    distribution: str
    evaluator: str
    count: int
    mean: Any
    variance: Any
    stddev: Any


@dataclass
class RunningErrorStats:
    """Online mean/variance of the relative error of one evaluator on one
    distribution."""

    distribution: str
    evaluator: str
    ctx: MPContext = field(default=DEFAULT_CONTEXT, repr=False)
    n: int = field(default=0, init=False)
    mean: Any = field(init=False)
    m2: Any = field(init=False)

    def __post_init__(self) -> None:
        self.mean = self.ctx.zero
        self.m2 = self.ctx.zero

    def relative_error(self, observed: Any, reference: Any) -> Any:
        """``(observed - reference) / |reference|`` at the working precision."""
        diff = observed - reference
        return ieee_divide(diff, self.ctx.fabs(reference), self.ctx)

    def record(self, observed: Any, reference: Any) -> None:
        """Fold one (observed, reference) pair into the running statistics."""
        ctx = self.ctx
        reldiff = self.relative_error(observed, reference)
        was_finite = ctx.isfinite(self.mean)

        self.n += 1
        delta = reldiff - self.mean
        self.mean = self.mean + delta / self.n
        mean2_delta = reldiff - self.mean
        self.m2 = fma(delta, mean2_delta, self.m2, ctx)

        if was_finite and not ctx.isfinite(self.mean):
            logger.warning(
                "Statistics for %r / %r became non-finite at sample %d "
                "(reference=%s, observed=%s)",
                self.distribution,
                self.evaluator,
                self.n,
                ctx.nstr(reference, 20),
                ctx.nstr(observed, 20),
            )

    def variance(self) -> Any:
        """Sample variance (``n - 1`` divisor); ``nan`` for ``n <= 1``."""
        if self.n > 1:
            return self.m2 / (self.n - 1)
        return self.ctx.nan

    def report(self) -> ErrorReport:
        """Snapshot the current statistics without changing them."""
        variance = self.variance()
        stddev = self.ctx.sqrt(variance) if self.n > 1 else self.ctx.nan
        return ErrorReport(
            distribution=self.distribution,
            evaluator=self.evaluator,
            count=self.n,
            mean=self.mean,
            variance=variance,
            stddev=stddev,
        )
