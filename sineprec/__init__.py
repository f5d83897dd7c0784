"""
sineprec: online error statistics for floating-point sine implementations.

Every native sine has a precision tier: single, double, extended, quadruple.
sineprec measures how far each tier drifts from a high-precision reference by
drawing an unbounded stream of random float32 inputs and folding the relative
error of every (input distribution, sine tier) pair into its own running
mean/variance accumulator.

The accumulators operate on arbitrary-precision values, so the statistics are
not themselves polluted by the rounding error they are trying to measure. A
running engine can be inspected (snapshot) or stopped at any iteration
boundary without losing a single sample.

Example
-------
>>> import sineprec
>>> assert hasattr(sineprec, "core")
>>> assert hasattr(sineprec, "stats")
>>> assert hasattr(sineprec, "runtime")
"""

from sineprec import core, stats, runtime  # noqa: F401
from sineprec.__version__ import __version__  # noqa: F401
