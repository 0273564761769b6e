"""Tests for batch helpers."""

import decimal
from decimal import Decimal

import pytest

from taxcompare.engines.batch import (
    compute_effective_tax_rates,
    effective_tax_rate,
    generate_income_range,
    group_incomes_by_segment,
    parallel_map,
)
from taxcompare.exceptions import DataValidationError


def _incomes(*values) -> list[Decimal]:
    return [Decimal(v) for v in values]


def _ranges(groups):
    return [
        (segment.left.income_limit, segment.right.income_limit, incomes)
        for segment, incomes in groups
    ]


class TestGroupIncomesBySegment:
    def test_groups(self, step_amounts):
        groups = group_incomes_by_segment(
            _incomes("500", "1500", "1700", "2500", "3500"), step_amounts.knots
        )
        assert _ranges(groups) == [
            (Decimal("0"), Decimal("1000"), _incomes("500")),
            (Decimal("1000"), Decimal("2000"), _incomes("1500", "1700")),
            (Decimal("2000"), Decimal("3000"), _incomes("2500")),
        ]

    def test_empty_segments_skipped(self, step_amounts):
        groups = group_incomes_by_segment(_incomes("2500", "2600"), step_amounts.knots)
        assert _ranges(groups) == [(Decimal("2000"), Decimal("3000"), _incomes("2500", "2600"))]

    def test_knot_income_goes_to_segment_ending_there(self, step_amounts):
        groups = group_incomes_by_segment(_incomes("1000", "2000"), step_amounts.knots)
        assert _ranges(groups) == [
            (Decimal("0"), Decimal("1000"), _incomes("1000")),
            (Decimal("1000"), Decimal("2000"), _incomes("2000")),
        ]

    def test_no_incomes(self, step_amounts):
        assert group_incomes_by_segment([], step_amounts.knots) == []


class TestParallelMap:
    def test_preserves_order(self):
        items = list(range(1000))
        assert parallel_map(lambda x: x * 2, items, max_workers=4, chunk_size=7) == [x * 2 for x in items]

    def test_inline(self):
        assert parallel_map(str, [1, 2, 3], max_workers=1) == ["1", "2", "3"]

    def test_empty(self):
        assert parallel_map(str, []) == []

    def test_exception_propagates(self):
        def fail_on_fifty(x):
            if x == 50:
                raise ValueError("boom")
            return x

        with pytest.raises(ValueError, match="boom"):
            parallel_map(fail_on_fifty, list(range(100)), max_workers=4, chunk_size=10)

    def test_invalid_chunk_size(self):
        with pytest.raises(DataValidationError):
            parallel_map(str, [1], chunk_size=0)

    def test_invalid_workers(self):
        with pytest.raises(DataValidationError):
            parallel_map(str, [1], max_workers=0)


class TestEffectiveTaxRates:
    def test_zero_income_has_zero_rate(self):
        assert effective_tax_rate(Decimal("0"), Decimal("0")) == Decimal("0")

    def test_rates(self):
        rates = compute_effective_tax_rates(_incomes("0", "10000"), _incomes("0", "1000"))
        assert rates == _incomes("0", "0.1")

    def test_length_mismatch(self):
        with pytest.raises(DataValidationError):
            compute_effective_tax_rates(_incomes("0", "10"), _incomes("0"))


class TestGenerateIncomeRange:
    def test_inclusive_stop(self):
        assert generate_income_range(Decimal("0"), Decimal("30"), Decimal("10")) == _incomes("0", "10", "20", "30")

    def test_stop_between_steps(self):
        assert generate_income_range(Decimal("0"), Decimal("25"), Decimal("10")) == _incomes("0", "10", "20")

    def test_non_positive_step(self):
        with pytest.raises(DataValidationError):
            generate_income_range(Decimal("0"), Decimal("10"), Decimal("0"))


class TestParallelMapDecimalContext:
    def test_workers_use_caller_precision(self):
        items = [Decimal(i) for i in range(1, 101)]
        with decimal.localcontext() as ctx:
            ctx.prec = 50
            parallel = parallel_map(lambda x: Decimal(1) / x, items, max_workers=4, chunk_size=10)
            sequential = parallel_map(lambda x: Decimal(1) / x, items, max_workers=1)
        assert parallel == sequential
        assert len(str(parallel[2])) > 40

    def test_caller_context_unchanged(self):
        with decimal.localcontext() as ctx:
            ctx.prec = 12
            parallel_map(lambda x: x, list(range(10)), max_workers=2, chunk_size=3)
            assert decimal.getcontext().prec == 12
