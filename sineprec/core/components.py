"""
sineprec.core.components
========================

Base classes for the two pluggable component families.

Component Types:
- `SampleDistribution`: draw one float32 input from a random source
- `CandidateEvaluator`: compute a sine at one native precision and widen it

Both families are closed: every concrete subclass is tagged with one member
of `DistributionKind` / `EvaluatorKind`, and the registries in
`sineprec.stats.distributions` / `sineprec.stats.evaluators` map each tag to
exactly one instance. Components hold no mutable state.

Examples
--------
>>> import numpy as np
>>> from sineprec.core.names import DistributionKind
>>>
>>> class Zero(SampleDistribution):
...     kind = DistributionKind.UNIFORM_SMALL
...     def sample(self, rng):
...         return np.float32(0.0)
...
>>> Zero().name
'+0 <= x < PI/2, uniform'
>>> float(Zero().sample(np.random.default_rng(0)))
0.0
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np
from mpmath.ctx_mp import MPContext

from sineprec.core.names import DistributionKind, EvaluatorKind
from sineprec.core.precision import DEFAULT_CONTEXT, widen


class SampleDistribution(ABC):
    """
    Base class for input distributions.

    Subclasses implement `sample()`, which must be deterministic given the
    random source state and must only ever return a finite float32.
    """

    kind: ClassVar[DistributionKind]

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> np.float32:
        """Draw one input, advancing ``rng``."""
        pass


class CandidateEvaluator(ABC):
    """
    Base class for candidate sine evaluators.

    Subclasses implement `native_sine()`; `evaluate()` widens its result into
    the high-precision context without adding any rounding.
    """

    kind: ClassVar[EvaluatorKind]

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def native_sine(self, x: np.float32, ctx: MPContext) -> Any:
        """Sine of ``x`` computed at this tier's native width."""
        pass

    def evaluate(self, x: np.float32, ctx: MPContext = DEFAULT_CONTEXT) -> Any:
        """Sine of ``x`` at this tier, as an exact ``ctx.mpf``."""
        return widen(self.native_sine(x, ctx), ctx)
