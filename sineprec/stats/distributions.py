"""
sineprec.stats.distributions
============================

The three input distributions over float32.

Each distribution draws integers from a `numpy.random.Generator` and turns
them into a float32 exactly; no float arithmetic rounds along the way.

- `BiasedSmall`: random bit pattern in ``[0, bits(pi/2))``. Bit patterns are
  uniform, values are not: every binade below pi/2 gets the same share, so
  small magnitudes are heavily over-represented.
- `UniformSmall`: random integer in ``[0, round(2**23 * pi/2))`` divided by
  ``2**23``. Uniform over ``[+0, pi/2)`` on a ``2**-23`` grid.
- `UniformFull`: random 32-bit pattern, redrawn while it encodes NaN or
  Infinity. Negative values and denormals are kept.

Examples
--------
>>> import numpy as np
>>> from sineprec.stats.distributions import DISTRIBUTIONS
>>> from sineprec.core.names import DistributionKind
>>> rng = np.random.default_rng(1111)
>>> x = DISTRIBUTIONS[DistributionKind.UNIFORM_SMALL].sample(rng)
>>> x.dtype
dtype('float32')
>>> 0.0 <= float(x) < 1.5707963267948966
True
"""

from __future__ import annotations
from typing import Dict

import numpy as np

from sineprec.core.components import SampleDistribution
from sineprec.core.names import DistributionKind

# Bit pattern of the smallest float32 >= pi/2 (0x1.921fb6p+0).
HALF_PI_CEIL_BITS = 0x3FC90FDB

# round(2**23 * pi/2); k / 2**23 < pi/2 for every k below it.
HALF_PI_SCALED = 13176795
GRID_SCALE = np.float32(1 << 23)

# float32 exponent field; all ones encodes NaN or Infinity.
EXPONENT_MASK = 0x7F800000


def bits_to_float32(bits: int) -> np.float32:
    """Reinterpret the low 32 bits of ``bits`` as a float32."""
    return np.uint32(bits).view(np.float32)


class BiasedSmall(SampleDistribution):
    kind = DistributionKind.BIASED_SMALL

    def sample(self, rng: np.random.Generator) -> np.float32:
        return bits_to_float32(int(rng.integers(0, HALF_PI_CEIL_BITS)))


class UniformSmall(SampleDistribution):
    kind = DistributionKind.UNIFORM_SMALL

    def sample(self, rng: np.random.Generator) -> np.float32:
        # Both steps are exact: k < 2**24 and the divisor is a power of two.
        k = np.float32(int(rng.integers(0, HALF_PI_SCALED)))
        return k / GRID_SCALE


class UniformFull(SampleDistribution):
    kind = DistributionKind.UNIFORM_FULL

    def sample(self, rng: np.random.Generator) -> np.float32:
        while True:
            bits = int(rng.integers(0, 1 << 32, dtype=np.uint64))
            if bits & EXPONENT_MASK != EXPONENT_MASK:
                return bits_to_float32(bits)


DISTRIBUTIONS: Dict[DistributionKind, SampleDistribution] = {
    DistributionKind.BIASED_SMALL: BiasedSmall(),
    DistributionKind.UNIFORM_SMALL: UniformSmall(),
    DistributionKind.UNIFORM_FULL: UniformFull(),
}
