"""
sineprec.config
===============

Run configuration for the comparison engine.

Examples
--------
>>> from sineprec.config import EngineConfig
>>> config = EngineConfig(seed=42)
>>> config.validate()
>>> config.precision_bits
512
>>> EngineConfig(precision_bits=64).validate()
Traceback (most recent call last):
...
ValueError: precision_bits must be >= 128, got 64
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from sineprec.core.names import DistributionKind, EvaluatorKind
from sineprec.core.precision import DEFAULT_PRECISION_BITS, MIN_PRECISION_BITS

DEFAULT_SEED = 1111


@dataclass
class EngineConfig:
    """
    Configuration of one comparison run.

    Parameters
    ----------
    seed : int, default=1111
        Seed of the random source; equal seeds give identical runs
    precision_bits : int, default=512
        Significand width of the reference sine and of the statistics
    report_digits : int, default=10
        Digits after the point in reported numbers
    distributions : tuple of DistributionKind
        Distributions to sample, in sampling/reporting order
    evaluators : tuple of EvaluatorKind
        Evaluators to compare, in recording/reporting order
    progress_interval : int, default=100000
        Outer iterations between debug progress log lines
    """

    seed: int = DEFAULT_SEED
    precision_bits: int = DEFAULT_PRECISION_BITS
    report_digits: int = 10
    distributions: Tuple[DistributionKind, ...] = field(
        default_factory=lambda: tuple(DistributionKind)
    )
    evaluators: Tuple[EvaluatorKind, ...] = field(
        default_factory=lambda: tuple(EvaluatorKind)
    )
    progress_interval: int = 100_000

    def validate(self) -> None:
        """Validate the configuration."""
        if self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        if self.precision_bits < MIN_PRECISION_BITS:
            raise ValueError(
                f"precision_bits must be >= {MIN_PRECISION_BITS}, "
                f"got {self.precision_bits}"
            )
        if self.report_digits < 0:
            raise ValueError(
                f"report_digits must be non-negative, got {self.report_digits}"
            )
        if not self.distributions:
            raise ValueError("At least one distribution is required")
        if not self.evaluators:
            raise ValueError("At least one evaluator is required")
        if len(set(self.distributions)) != len(self.distributions):
            raise ValueError("distributions must not repeat")
        if len(set(self.evaluators)) != len(self.evaluators):
            raise ValueError("evaluators must not repeat")
        if self.progress_interval <= 0:
            raise ValueError(
                f"progress_interval must be positive, got {self.progress_interval}"
            )
