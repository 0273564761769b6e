"""Cumulative tax amount schedule.

An AmountSchedule is a piecewise-linear curve of cumulative tax against income,
anchored at knots sorted by strictly increasing income. Schedules derived from
a MarginalRateSchedule start at (0, 0) and end at the "max income to consider";
the curve is never evaluated beyond its last knot.
"""

import logging
from bisect import bisect_left
from collections.abc import Sequence
from decimal import Decimal
from itertools import pairwise

from pydantic import BaseModel, ConfigDict, model_validator

from taxcompare.engines.batch import (
    generate_income_range,
    group_incomes_by_segment,
    parallel_map,
)
from taxcompare.engines.segment import LinearSegment, points_coincide
from taxcompare.exceptions import (
    DataValidationError,
    ExchangeRateError,
    IncomeOutOfBoundsError,
    NegativeIncomeError,
)
from taxcompare.models.knots import IncomeTaxKnot, IncomeTaxPoint

logger = logging.getLogger(__name__)


def _income_limit(knot: IncomeTaxKnot) -> Decimal:
    return knot.income_limit


def _interpolate(item: tuple[LinearSegment, Decimal]) -> Decimal:
    segment, income = item
    return segment.linear_interpolation(income)


class AmountSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    knots: tuple[IncomeTaxKnot, ...]

    @model_validator(mode="after")
    def _check_knot_order(self) -> "AmountSchedule":
        if not self.knots:
            raise ValueError("schedule must contain at least one knot")
        for prev, knot in pairwise(self.knots):
            if knot.income_limit <= prev.income_limit:
                raise ValueError(
                    "knot income limits must be strictly increasing: "
                    f"{knot.income_limit} follows {prev.income_limit}"
                )
        return self

    @property
    def bounds(self) -> tuple[Decimal, Decimal]:
        return self.knots[0].income_limit, self.knots[-1].income_limit

    def segments(self) -> list[LinearSegment]:
        return [LinearSegment(left, right) for left, right in pairwise(self.knots)]

    def exchange_rate_adjustment(self, exchange_rate: Decimal | None) -> "AmountSchedule":
        """Rescale the income axis by ``1 / exchange_rate``; tax amounts are unchanged."""
        if exchange_rate is None or exchange_rate == 1:
            return self.model_copy()
        if exchange_rate <= 0:
            raise ExchangeRateError(f"rate must be positive, got {exchange_rate}")
        return AmountSchedule(
            knots=tuple(
                IncomeTaxKnot(
                    income_limit=knot.income_limit / exchange_rate,
                    income_tax_amount=knot.income_tax_amount,
                )
                for knot in self.knots
            )
        )

    def compute_income_taxes(
        self, incomes: Sequence[Decimal], max_workers: int | None = None
    ) -> list[Decimal]:
        """Tax amounts for an ascending batch of incomes, in input order.

        Incomes are grouped by the segment they fall in with a single forward
        sweep, then every income is interpolated independently.
        """
        if not incomes:
            return []
        for prev, income in pairwise(incomes):
            if income < prev:
                raise DataValidationError(
                    "incomes", f"must be sorted ascending ({income} follows {prev})"
                )

        low, high = self.bounds
        if incomes[0] < 0:
            raise NegativeIncomeError(incomes[0])
        if incomes[0] < low:
            raise IncomeOutOfBoundsError(incomes[0], self.bounds)
        if incomes[-1] > high:
            raise IncomeOutOfBoundsError(incomes[-1], self.bounds)

        if len(self.knots) == 1:
            # Every income equals the single knot's limit
            return [self.knots[0].income_tax_amount for _ in incomes]

        grouped = group_incomes_by_segment(incomes, self.knots)
        work = [(segment, income) for segment, group in grouped for income in group]
        return parallel_map(_interpolate, work, max_workers=max_workers)

    def compute_income_taxes_in_range(
        self,
        income_start: Decimal,
        income_stop: Decimal,
        income_step: Decimal,
        max_workers: int | None = None,
    ) -> list[Decimal]:
        incomes = generate_income_range(income_start, income_stop, income_step)
        return self.compute_income_taxes(incomes, max_workers=max_workers)

    def compute_specific_income_tax(self, income: Decimal) -> Decimal | None:
        """Tax amount at a single income via binary search over the knots.

        Returns None when the income is negative or outside the schedule.
        """
        if income < 0:
            return None
        index = bisect_left(self.knots, income, key=_income_limit)
        if index < len(self.knots) and self.knots[index].income_limit == income:
            return self.knots[index].income_tax_amount
        if index == 0 or index == len(self.knots):
            return None
        return LinearSegment(self.knots[index - 1], self.knots[index]).linear_interpolation(income)

    def compute_breakeven_taxes(self, other: "AmountSchedule") -> list[IncomeTaxPoint]:
        """Points where this curve and ``other`` yield equal tax.

        Sweeps both knot lists with one pointer each and only tests segment
        pairs whose income ranges overlap. The origin is excluded.
        """
        mine, theirs = self.knots, other.knots
        points: list[IncomeTaxPoint] = []
        i = j = 0

        while i + 1 < len(mine) and j + 1 < len(theirs):
            l1, r1 = mine[i].income_limit, mine[i + 1].income_limit
            l2, r2 = theirs[j].income_limit, theirs[j + 1].income_limit

            if r1 >= l2 and r2 >= l1:
                point = LinearSegment(mine[i], mine[i + 1]).compute_intersection(
                    LinearSegment(theirs[j], theirs[j + 1])
                )
                # A crossing on a shared knot is seen by two neighbouring pairs,
                # possibly differing in the last digit
                if (
                    point is not None
                    and not point.is_origin()
                    and (not points or not points_coincide(points[-1], point))
                ):
                    points.append(point)

            if r1 < r2:
                i += 1
            else:
                j += 1

        logger.debug("Found %d break-even point(s)", len(points))
        return points
