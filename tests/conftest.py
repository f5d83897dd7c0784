"""Shared test fixtures for sineprec.

Provides a high-precision context, a seeded random source, and an engine
factory writing reports to an in-memory stream.
"""

import io

import numpy as np
import pytest

from sineprec.backends.polars.ledger import ReportLedger
from sineprec.config import EngineConfig
from sineprec.core.precision import make_context
from sineprec.runtime.control import EngineControl
from sineprec.runtime.engine import ComparisonEngine


@pytest.fixture
def ctx():
    """256-bit context: wide enough for every native tier."""
    return make_context(256)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1111)


@pytest.fixture
def make_engine():
    """Factory returning (engine, stream) with a fresh control and ledger."""

    def _make(**config_kwargs):
        config_kwargs.setdefault("precision_bits", 256)
        stream = io.StringIO()
        engine = ComparisonEngine(
            EngineConfig(**config_kwargs),
            control=EngineControl(),
            stream=stream,
            ledger=ReportLedger(),
        )
        return engine, stream

    return _make
