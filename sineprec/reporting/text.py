"""
sineprec.reporting.text
=======================

Plain-text report lines, one per statistics cell.

Field order is fixed: distribution, evaluator, sample count, then the mean,
variance and standard deviation of the relative error in scientific
notation.

Examples
--------
>>> from sineprec.core.precision import make_context
>>> from sineprec.stats.common.welford import RunningErrorStats
>>> from sineprec.reporting.text import format_report
>>> ctx = make_context(128)
>>> stats = RunningErrorStats("all floats", "float32", ctx=ctx)
>>> line = format_report(stats.report(), digits=4, ctx=ctx)
>>> line.startswith('Distribution: "all floats"  Evaluator: "float32"  Samples: 0')
True
"""

from __future__ import annotations
from typing import Iterable, TextIO

from mpmath.ctx_mp import MPContext

from sineprec.core.precision import DEFAULT_CONTEXT, to_scientific
from sineprec.stats.common.welford import ErrorReport


def format_report(
    report: ErrorReport, digits: int = 10, ctx: MPContext = DEFAULT_CONTEXT
) -> str:
    """Render one cell's report as a single line (no trailing newline)."""
    return (
        f'Distribution: "{report.distribution}"  '
        f'Evaluator: "{report.evaluator}"  '
        f"Samples: {report.count}  "
        f"Relative difference mean: {to_scientific(report.mean, digits, ctx)}  "
        f"variance: {to_scientific(report.variance, digits, ctx)}  "
        f"standard deviation: {to_scientific(report.stddev, digits, ctx)}"
    )


def write_reports(
    reports: Iterable[ErrorReport],
    stream: TextIO,
    digits: int = 10,
    ctx: MPContext = DEFAULT_CONTEXT,
) -> int:
    """Write one line per report to ``stream`` and flush. Returns the line count."""
    lines = 0
    for report in reports:
        stream.write(format_report(report, digits, ctx) + "\n")
        lines += 1
    stream.flush()
    return lines
