"""
sineprec.stats.evaluators
=========================

Candidate sine evaluators, one per native precision tier, and the
high-precision reference they are measured against.

Each evaluator promotes the float32 input to its tier (exact), computes that
tier's sine, and widens the native result into the high-precision context
(exact). The only rounding error left is the one under test.

- `SingleSine`: ``numpy.sin`` on float32
- `DoubleSine`: ``numpy.sin`` on float64
- `ExtendedSine`: ``numpy.sin`` on ``numpy.longdouble`` (the platform's
  ``sinl``; x87 80-bit on x86-64 Linux)
- `QuadrupleSine`: ``numpy.sin`` on IEEE binary128 through the
  ``numpy_quaddtype`` dtype (SLEEF ``sinq``). numpy has no native binary128
  scalar, so the result is split into three float64 terms whose exact sum
  is the binary128 value.

Examples
--------
>>> import numpy as np
>>> from sineprec.core.names import EvaluatorKind
>>> from sineprec.core.precision import make_context
>>> from sineprec.stats.evaluators import EVALUATORS, reference_sine
>>> ctx = make_context(256)
>>> x = np.float32(0.5)
>>> y = EVALUATORS[EvaluatorKind.DOUBLE].evaluate(x, ctx)
>>> y == ctx.mpf(float(np.sin(np.float64(x))))
True
>>> abs(y - reference_sine(x, ctx)) < ctx.mpf(2) ** -53
True
"""

from __future__ import annotations
from typing import Any, Dict

import numpy as np
from mpmath.ctx_mp import MPContext
from numpy_quaddtype import QuadPrecDType

from sineprec.core.components import CandidateEvaluator
from sineprec.core.names import EvaluatorKind
from sineprec.core.precision import DEFAULT_CONTEXT, widen


class SingleSine(CandidateEvaluator):
    kind = EvaluatorKind.SINGLE

    def native_sine(self, x: np.float32, ctx: MPContext) -> np.float32:
        return np.sin(np.float32(x))


class DoubleSine(CandidateEvaluator):
    kind = EvaluatorKind.DOUBLE

    def native_sine(self, x: np.float32, ctx: MPContext) -> np.float64:
        return np.sin(np.float64(x))


class ExtendedSine(CandidateEvaluator):
    kind = EvaluatorKind.EXTENDED

    def native_sine(self, x: np.float32, ctx: MPContext) -> np.longdouble:
        return np.sin(np.longdouble(x))


QUAD_DTYPE = QuadPrecDType()

# 113 significand bits fit in three float64 terms (53 + 53 + 7).
QUAD_SPLIT_TERMS = 3


def quad_to_mpf(value: np.ndarray, ctx: MPContext = DEFAULT_CONTEXT) -> Any:
    """
    Widen a one-element binary128 array into ``ctx.mpf`` without rounding.

    Each step peels off the float64 nearest to the remainder; the difference
    is representable in binary128, so the subtraction is exact and the terms
    sum back to the original value.
    """
    head = value.astype(np.float64)
    if not np.isfinite(head[0]):
        return ctx.mpf(float(head[0]))
    total = ctx.zero
    for _ in range(QUAD_SPLIT_TERMS):
        total += widen(head[0], ctx)
        value = value - head.astype(QUAD_DTYPE)
        head = value.astype(np.float64)
    return total


class QuadrupleSine(CandidateEvaluator):
    kind = EvaluatorKind.QUADRUPLE

    def native_sine(self, x: np.float32, ctx: MPContext) -> Any:
        q = np.array([np.float64(x)], dtype=np.float64).astype(QUAD_DTYPE)
        return quad_to_mpf(np.sin(q), ctx)


def reference_sine(x: np.float32, ctx: MPContext = DEFAULT_CONTEXT) -> Any:
    """Sine of ``x`` at the context's full working precision."""
    return ctx.sin(widen(x, ctx))


EVALUATORS: Dict[EvaluatorKind, CandidateEvaluator] = {
    EvaluatorKind.SINGLE: SingleSine(),
    EvaluatorKind.DOUBLE: DoubleSine(),
    EvaluatorKind.EXTENDED: ExtendedSine(),
    EvaluatorKind.QUADRUPLE: QuadrupleSine(),
}
