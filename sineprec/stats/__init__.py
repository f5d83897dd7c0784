"""
Statistical components of the error engine.

1. **Common** (sineprec.stats.common):
   Generic online statistics that know nothing about sine or floats,
   operating on high-precision values only.

2. **Distributions** (sineprec.stats.distributions):
   The closed set of float32 input distributions.

3. **Evaluators** (sineprec.stats.evaluators):
   The closed set of native sine tiers plus the high-precision reference.

Example:
--------
>>> from sineprec.stats.distributions import DISTRIBUTIONS
>>> from sineprec.stats.evaluators import EVALUATORS
>>> len(DISTRIBUTIONS) * len(EVALUATORS)
12
"""
