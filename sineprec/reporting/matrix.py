"""
sineprec.reporting.matrix
=========================

Distribution x evaluator views over a `ReportLedger`.

Examples
--------
>>> from sineprec.backends.polars.ledger import ReportLedger
>>> from sineprec.reporting.matrix import ErrorMatrixReporter
>>> rep = ErrorMatrixReporter.from_ledger(ReportLedger())
>>> rep.matrix("mean").height
0
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

import polars as pl

from sineprec.backends.polars.ledger import ReportLedger
from sineprec.core.names import ReportKind

StatName = Literal["count", "mean", "variance", "stddev"]
FloatStatName = Literal["mean", "variance", "stddev"]


@dataclass
class ErrorMatrixReporter:
    """Matrix view of one report: rows are distributions, columns evaluators."""

    df: pl.DataFrame

    @classmethod
    def from_ledger(
        cls, ledger: ReportLedger, kind: Optional[ReportKind] = None
    ) -> "ErrorMatrixReporter":
        """Build from the latest report of ``ledger`` (of ``kind``, if given)."""
        return cls(ledger.latest_report(kind))

    def cells(self) -> pl.DataFrame:
        """One row per cell with the Float64 statistics."""
        return self.df.select(
            "distribution", "evaluator", "count", "mean", "variance", "stddev"
        )

    def matrix(self, stat: StatName = "mean") -> pl.DataFrame:
        """Pivot ``stat`` into a distribution x evaluator table."""
        if self.df.height == 0:
            return pl.DataFrame(schema={"distribution": pl.Utf8})
        return self.df.pivot(
            on="evaluator",
            index="distribution",
            values=stat,
            aggregate_function=None,
        )

    def worst(self, stat: FloatStatName = "stddev") -> pl.DataFrame:
        """Cells ordered by ``|stat|``, largest first; NaN cells sort last."""
        return (
            self.cells()
            .with_columns(pl.col(stat).abs().fill_nan(None).alias("_key"))
            .sort("_key", descending=True, nulls_last=True)
            .drop("_key")
        )
