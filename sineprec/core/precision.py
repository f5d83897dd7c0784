"""
sineprec.core.precision
=======================

The high-precision value type and the few primitives built on it.

High-precision values are `mpmath` ``mpf`` numbers bound to a private
``MPContext``. Using a dedicated context keeps the working precision of the
statistics independent of the global ``mpmath.mp`` settings.

- `make_context()`: a fresh context at a given significand width
- `widen()`: exact conversion of a native float into the context
- `fma()`: ``a*b + c`` with a single rounding
- `ieee_divide()`: division that yields ``inf``/``nan`` for a zero divisor
- `to_scientific()`: fixed-digit scientific notation for reports

Examples
--------
>>> import numpy as np
>>> from sineprec.core.precision import make_context, widen
>>> ctx = make_context(256)
>>> ctx.prec
256
>>> widen(np.float32(0.1), ctx) == ctx.mpf(float(np.float32(0.1)))
True
>>> widen(np.float32(0.1), ctx) == ctx.mpf("0.1")
False
"""

from __future__ import annotations
from typing import Any

from mpmath.ctx_mp import MPContext

# Significand width of the statistics and of the reference sine.
DEFAULT_PRECISION_BITS = 512

# Every native tier must embed exactly, with headroom for the statistics.
MIN_PRECISION_BITS = 128


def make_context(precision_bits: int = DEFAULT_PRECISION_BITS) -> MPContext:
    """
    Create an mpmath context with the given significand width (in bits).

    Raises
    ------
    ValueError
        If the width cannot hold a binary128 value exactly.
    """
    if precision_bits < MIN_PRECISION_BITS:
        raise ValueError(
            f"precision_bits must be >= {MIN_PRECISION_BITS}, got {precision_bits}"
        )
    ctx = MPContext()
    ctx.prec = precision_bits
    return ctx


DEFAULT_CONTEXT = make_context()


def widen(value: Any, ctx: MPContext = DEFAULT_CONTEXT) -> Any:
    """
    Convert a finite native float into ``ctx.mpf`` without rounding.

    Works for numpy scalars of any width (``float32``, ``float64``,
    ``longdouble``) and Python floats, all of which expose an exact
    ``as_integer_ratio()``. The denominator is a power of two, so the
    division is exact at any precision that holds the numerator.
    """
    if isinstance(value, ctx.mpf):
        return value
    num, den = value.as_integer_ratio()
    return ctx.mpf(num) / den


def fma(a: Any, b: Any, c: Any, ctx: MPContext = DEFAULT_CONTEXT) -> Any:
    """
    Return ``a*b + c`` rounded once to the working precision.

    ``fdot`` forms the products exactly and rounds the sum once. Non-finite
    operands take the plain path so that ``inf``/``nan`` propagate the usual
    way.

    >>> from sineprec.core.precision import make_context, fma
    >>> ctx = make_context(128)
    >>> fma(ctx.mpf(3), ctx.mpf(4), ctx.mpf(5), ctx)
    mpf('17.0')
    """
    if ctx.isfinite(a) and ctx.isfinite(b) and ctx.isfinite(c):
        return ctx.fdot([(a, b), (c, 1)])
    return a * b + c


def ieee_divide(num: Any, den: Any, ctx: MPContext = DEFAULT_CONTEXT) -> Any:
    """
    ``num / den`` where a zero divisor gives ``±inf`` (or ``nan`` for ``0/0``).

    mpmath raises ``ZeroDivisionError`` instead, which would abort the run.
    """
    if den:
        return num / den
    if not num or ctx.isnan(num):
        return ctx.nan
    return ctx.inf if num > 0 else -ctx.inf


def to_scientific(value: Any, digits: int, ctx: MPContext = DEFAULT_CONTEXT) -> str:
    """Format ``value`` in scientific notation with ``digits`` after the point.

    >>> from sineprec.core.precision import make_context, to_scientific
    >>> ctx = make_context(128)
    >>> to_scientific(ctx.zero, 4, ctx)
    '0.0000e+0'
    """
    # mpmath prints zero as "0.0" whatever the digit count.
    if ctx.isfinite(value) and not value:
        return "0." + "0" * max(digits, 1) + "e+0"
    return ctx.nstr(
        value,
        digits + 1,
        strip_zeros=False,
        min_fixed=0,
        max_fixed=0,
        show_zero_exponent=True,
    )
