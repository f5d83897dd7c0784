"""Tests for report lines, the report ledger and the matrix view."""

from __future__ import annotations

import io
import math

import polars as pl
import pytest

from sineprec.backends.polars.ledger import ReportLedger
from sineprec.core.names import DistributionKind, EvaluatorKind, Namespace, ReportKind
from sineprec.reporting.matrix import ErrorMatrixReporter
from sineprec.reporting.text import format_report, write_reports
from sineprec.stats.common.welford import RunningErrorStats


@pytest.fixture
def two_sample_stats(ctx) -> RunningErrorStats:
    stats = RunningErrorStats("all floats", "float64", ctx=ctx)
    stats.record(ctx.mpf(3), ctx.mpf(2))
    stats.record(ctx.mpf(5), ctx.mpf(4))
    return stats


@pytest.fixture
def filled_ledger(make_engine) -> ReportLedger:
    engine, _ = make_engine(seed=8)
    engine.run(max_iterations=20)
    return engine.ledger


class TestFormatReport:
    def test_field_order(self, two_sample_stats, ctx) -> None:
        line = format_report(two_sample_stats.report(), digits=10, ctx=ctx)
        positions = [
            line.index(label)
            for label in (
                'Distribution: "all floats"',
                'Evaluator: "float64"',
                "Samples: 2",
                "Relative difference mean: ",
                "variance: ",
                "standard deviation: ",
            )
        ]
        assert positions == sorted(positions)
        assert "\n" not in line

    def test_values_in_scientific_notation(self, two_sample_stats, ctx) -> None:
        # Relative errors 0.5 and 0.25.
        line = format_report(two_sample_stats.report(), digits=10, ctx=ctx)
        mean = line.split("Relative difference mean: ")[1].split()[0]
        variance = line.split("variance: ")[1].split()[0]
        assert mean.startswith("3.7500000000e")
        assert float(mean) == 0.375
        assert float(variance) == 0.03125

    def test_undefined_variance_prints_nan(self, ctx) -> None:
        stats = RunningErrorStats("d", "e", ctx=ctx)
        stats.record(ctx.mpf(1), ctx.mpf(1))
        line = format_report(stats.report(), ctx=ctx)
        assert line.endswith("variance: nan  standard deviation: nan")

    def test_write_reports_counts_lines(self, two_sample_stats, ctx) -> None:
        stream = io.StringIO()
        report = two_sample_stats.report()
        assert write_reports([report, report], stream, 4, ctx) == 2
        assert len(stream.getvalue().splitlines()) == 2


class TestReportLedger:
    def test_report_ids_increase(self, two_sample_stats, ctx) -> None:
        ledger = ReportLedger()
        report = two_sample_stats.report()
        assert ledger.append_report(ReportKind.SNAPSHOT, [report], ctx) == 0
        assert ledger.append_report(ReportKind.FINAL, [report], ctx) == 1
        assert ledger.count(namespace=Namespace.REPORTS) == 2
        assert ledger.count(kind=ReportKind.FINAL) == 1

    def test_exact_and_float_columns(self, two_sample_stats, ctx) -> None:
        ledger = ReportLedger()
        ledger.append_report(ReportKind.SNAPSHOT, [two_sample_stats.report()], ctx)
        row = ledger.latest_report().row(0, named=True)
        assert row["count"] == 2
        assert row["mean"] == 0.375
        assert ctx.mpf(row["mean_exact"]) == ctx.mpf(0.375)
        assert math.isclose(row["stddev"], math.sqrt(0.03125))

    def test_exact_columns_round_trip(self, ctx) -> None:
        stats = RunningErrorStats("d", "e", ctx=ctx)
        stats.record(1 + ctx.mpf(1) / 3, ctx.mpf(1))
        stats.record(1 + ctx.mpf(1) / 7, ctx.mpf(1))
        report = stats.report()
        ledger = ReportLedger()
        ledger.append_report(ReportKind.FINAL, [report], ctx)
        row = ledger.latest_report().row(0, named=True)
        assert ctx.mpf(row["mean_exact"]) == report.mean
        assert ctx.mpf(row["variance_exact"]) == report.variance
        assert ctx.mpf(row["stddev_exact"]) == report.stddev

    def test_nan_is_stored_as_float_nan(self, ctx) -> None:
        ledger = ReportLedger()
        stats = RunningErrorStats("d", "e", ctx=ctx)
        ledger.append_report(ReportKind.FINAL, [stats.report()], ctx)
        row = ledger.latest_report(ReportKind.FINAL).row(0, named=True)
        assert math.isnan(row["variance"])
        assert row["variance_exact"] == "nan"

    def test_latest_report_filters_by_kind(self, filled_ledger) -> None:
        final = filled_ledger.latest_report(ReportKind.FINAL)
        assert final.height == 12
        assert filled_ledger.latest_report(ReportKind.SNAPSHOT).height == 0

    def test_rebuild_from_frame_continues_ids(self, filled_ledger, two_sample_stats, ctx) -> None:
        rebuilt = ReportLedger(filled_ledger.frame())
        assert rebuilt.append_report(ReportKind.SNAPSHOT, [two_sample_stats.report()], ctx) == 1

    def test_frame_is_a_copy(self, filled_ledger) -> None:
        frame = filled_ledger.frame()
        frame = frame.clear()
        assert filled_ledger.frame().height > 0


class TestErrorMatrixReporter:
    def test_matrix_shape_and_order(self, filled_ledger) -> None:
        matrix = ErrorMatrixReporter.from_ledger(filled_ledger).matrix("count")
        assert matrix["distribution"].to_list() == [d.value for d in DistributionKind]
        assert matrix.columns == ["distribution"] + [e.value for e in EvaluatorKind]
        for ev in EvaluatorKind:
            assert matrix[ev.value].to_list() == [20, 20, 20]

    def test_cells_have_float_statistics(self, filled_ledger) -> None:
        cells = ErrorMatrixReporter.from_ledger(filled_ledger, ReportKind.FINAL).cells()
        assert cells.height == 12
        assert cells.schema["stddev"] == pl.Float64

    def test_worst_puts_single_precision_first(self, make_engine) -> None:
        engine, _ = make_engine(seed=4, distributions=(DistributionKind.UNIFORM_SMALL,))
        engine.run(max_iterations=50)
        worst = ErrorMatrixReporter.from_ledger(engine.ledger).worst("stddev")
        assert worst["evaluator"].to_list()[0] == EvaluatorKind.SINGLE.value

    def test_empty_ledger(self) -> None:
        rep = ErrorMatrixReporter.from_ledger(ReportLedger())
        assert rep.matrix().height == 0
        assert rep.cells().height == 0
