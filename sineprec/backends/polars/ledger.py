"""
sineprec.backends.polars.ledger
===============================

An in-memory, append-only **Polars-backed** record of everything a run
reported. No persistence.

Two namespaces share one frame:

- ``lifecycle``: ``start`` / ``stop`` events with a JSON payload
- ``reports``: one row per statistics cell per emitted report, carrying the
  numbers both as Float64 (for frame operations) and as decimal strings
  that parse back to the identical high-precision value

Rows of one report share a ``report_id``; ids increase with every report.

Examples
--------
>>> from sineprec.backends.polars.ledger import ReportLedger
>>> from sineprec.core.names import Namespace
>>> L = ReportLedger()
>>> L.log_lifecycle("start", {"seed": 1111})
>>> L.count(namespace=Namespace.LIFECYCLE)
1
>>> L.latest_report().height
0
"""

from __future__ import annotations
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, cast

import polars as pl
from mpmath.ctx_mp import MPContext
from mpmath.libmp import repr_dps

from sineprec.core.names import Namespace, ReportKind
from sineprec.core.precision import DEFAULT_CONTEXT
from sineprec.stats.common.welford import ErrorReport


class ReportLedger:
    """Polars-backed append-only ledger of lifecycle events and reports."""

    _SCHEMA = {
        "uuid": pl.Utf8,
        "ts": pl.Datetime(time_unit="us", time_zone="UTC"),
        "namespace": pl.Utf8,
        "kind": pl.Utf8,
        "report_id": pl.Int64,
        "distribution": pl.Utf8,
        "evaluator": pl.Utf8,
        "count": pl.Int64,
        "mean": pl.Float64,
        "variance": pl.Float64,
        "stddev": pl.Float64,
        "mean_exact": pl.Utf8,
        "variance_exact": pl.Utf8,
        "stddev_exact": pl.Utf8,
        "payload": pl.Utf8,  # JSON string
    }

    def __init__(self, df: Optional[pl.DataFrame] = None) -> None:
        self._df = (
            df if df is not None else pl.DataFrame(schema=cast(Any, self._SCHEMA))
        )
        self._next_report_id = (
            int(self._df["report_id"].max()) + 1  # type: ignore[arg-type]
            if self._df["report_id"].drop_nulls().len()
            else 0
        )

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _append(self, rows: Dict[str, list]) -> None:
        frame = pl.DataFrame(rows, schema=cast(Any, self._SCHEMA))
        self._df = pl.concat([self._df, frame], how="vertical_relaxed")

    # ---- writers ----

    def log_lifecycle(self, kind: str, payload: Optional[Dict[str, Any]] = None) -> None:
        """Append a lifecycle event (e.g. ``start``, ``stop``)."""
        rows: Dict[str, list] = {name: [None] for name in self._SCHEMA}
        rows.update(
            uuid=[str(uuid.uuid4())],
            ts=[self._now()],
            namespace=[Namespace.LIFECYCLE.value],
            kind=[kind],
            payload=[json.dumps(payload or {}, separators=(",", ":"))],
        )
        self._append(rows)

    def append_report(
        self,
        kind: ReportKind,
        reports: Iterable[ErrorReport],
        ctx: MPContext = DEFAULT_CONTEXT,
    ) -> int:
        """Append one row per cell report; returns the new ``report_id``."""
        report_id = self._next_report_id
        self._next_report_id += 1
        ts = self._now()
        rows: Dict[str, list] = {name: [] for name in self._SCHEMA}
        for report in reports:
            rows["uuid"].append(str(uuid.uuid4()))
            rows["ts"].append(ts)
            rows["namespace"].append(Namespace.REPORTS.value)
            rows["kind"].append(ReportKind(kind).value)
            rows["report_id"].append(report_id)
            rows["distribution"].append(report.distribution)
            rows["evaluator"].append(report.evaluator)
            rows["count"].append(report.count)
            for stat in ("mean", "variance", "stddev"):
                value = getattr(report, stat)
                rows[stat].append(float(value))
                rows[f"{stat}_exact"].append(ctx.nstr(value, repr_dps(ctx.prec)))
            rows["payload"].append(None)
        self._append(rows)
        return report_id

    # ---- readers ----

    def _filter(
        self,
        *,
        namespace: Optional[Any] = None,
        kind: Optional[Any] = None,
        report_id: Optional[int] = None,
    ) -> pl.DataFrame:
        q = self._df
        if namespace is not None:
            ns = namespace.value if isinstance(namespace, Namespace) else namespace
            q = q.filter(pl.col("namespace") == str(ns))
        if kind is not None:
            k = kind.value if isinstance(kind, ReportKind) else kind
            q = q.filter(pl.col("kind") == str(k))
        if report_id is not None:
            q = q.filter(pl.col("report_id") == report_id)
        return q

    def count(self, **filters: Any) -> int:
        return int(self._filter(**filters).height)

    def reports(self, kind: Optional[ReportKind] = None) -> pl.DataFrame:
        """All report rows, optionally restricted to one kind."""
        return self._filter(namespace=Namespace.REPORTS, kind=kind)

    def latest_report(self, kind: Optional[ReportKind] = None) -> pl.DataFrame:
        """Rows of the most recent report (empty frame when none exists)."""
        rows = self.reports(kind)
        if rows.height == 0:
            return rows
        last = rows["report_id"].max()
        return rows.filter(pl.col("report_id") == last)

    def lifecycle(self) -> List[Dict[str, Any]]:
        """Lifecycle events in order, payloads decoded."""
        events = self._filter(namespace=Namespace.LIFECYCLE)
        return [
            {
                "ts": rec["ts"],
                "kind": rec["kind"],
                "payload": json.loads(rec["payload"]) if rec["payload"] else {},
            }
            for rec in events.iter_rows(named=True)
        ]

    # ---- frame helpers (no I/O) ----
    def frame(self) -> pl.DataFrame:
        """Return a copy of the underlying Polars DataFrame."""
        return self._df.clone()
