"""
sineprec.stats.common
=====================

Generic online statistics over high-precision values.
"""

from sineprec.stats.common.welford import ErrorReport, RunningErrorStats

__all__ = ["ErrorReport", "RunningErrorStats"]
