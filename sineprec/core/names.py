"""
sineprec.core.names
===================

Typed names shared across the package.

- `DistributionKind`: closed Enum of input distributions.
- `EvaluatorKind`: closed Enum of native sine precision tiers.
- `ReportKind`: why a report was emitted.
- `Namespace`: well-known report ledger namespaces.
- `CellKey`: the (distribution, evaluator) index of one statistics cell.

Enum order is the fixed enumeration order used for sampling and reporting.

Examples
--------
>>> from sineprec.core.names import DistributionKind, EvaluatorKind
>>> DistributionKind.UNIFORM_FULL.value
'all floats'
>>> [e.value for e in EvaluatorKind]
['float32', 'float64', 'longdouble', 'binary128']
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple


class DistributionKind(str, Enum):
    """Input distributions over float32.

    - BIASED_SMALL: random bit patterns below pi/2 (denser near zero)
    - UNIFORM_SMALL: uniform over [+0, pi/2) on a 2**-23 grid
    - UNIFORM_FULL: any finite float32, denormals included
    """

    BIASED_SMALL = "+0 <= x < PI/2, non-uniform"
    UNIFORM_SMALL = "+0 <= x < PI/2, uniform"
    UNIFORM_FULL = "all floats"


class EvaluatorKind(str, Enum):
    """Native precision tiers whose sine is under test."""

    SINGLE = "float32"
    DOUBLE = "float64"
    EXTENDED = "longdouble"
    QUADRUPLE = "binary128"


class Namespace(str, Enum):
    """Well-known report ledger namespaces.

    - LIFECYCLE: engine start/stop events
    - REPORTS: one row per cell per emitted report
    """

    LIFECYCLE = "lifecycle"
    REPORTS = "reports"


class ReportKind(str, Enum):
    """Why a report was emitted.

    - SNAPSHOT: on demand, the run continues
    - FINAL: once, after the run stopped
    """

    SNAPSHOT = "snapshot"
    FINAL = "final"


CellKey = Tuple[DistributionKind, EvaluatorKind]
