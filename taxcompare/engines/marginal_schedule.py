"""Marginal-rate bracket schedule and its conversion to a tax amount schedule."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, model_validator

from taxcompare.engines.amount_schedule import AmountSchedule
from taxcompare.exceptions import ExchangeRateError, NegativeIncomeError
from taxcompare.models.knots import IncomeTaxKnot, MarginalRateKnot


class MarginalRateSchedule(BaseModel):
    """A tax table in terms of marginal rates and income thresholds.

    Knots are sorted ascending by income limit. Every knot except the last must
    have a finite limit; the last may be unbounded (the top bracket).
    """

    model_config = ConfigDict(frozen=True)

    knots: tuple[MarginalRateKnot, ...]

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_knot_list(cls, data):
        if isinstance(data, (list, tuple)):
            return {"knots": data}
        return data

    @model_validator(mode="after")
    def _check_bracket_order(self) -> "MarginalRateSchedule":
        if not self.knots:
            raise ValueError("schedule must contain at least one bracket")
        prev_limit = Decimal("0")
        last = len(self.knots) - 1
        for i, knot in enumerate(self.knots):
            if knot.income_limit is None:
                if i != last:
                    raise ValueError(f"only the top bracket may be unbounded (bracket {i})")
                continue
            if knot.income_limit <= prev_limit:
                raise ValueError(
                    "bracket limits must be positive and strictly increasing: "
                    f"{knot.income_limit} follows {prev_limit}"
                )
            prev_limit = knot.income_limit
        return self

    @classmethod
    def from_brackets(
        cls, brackets: list[tuple[Decimal | None, Decimal]]
    ) -> "MarginalRateSchedule":
        """Build from ``(upper_bound, rate)`` pairs; None marks the top bracket."""
        return cls(
            knots=tuple(
                MarginalRateKnot(income_limit=upper, marginal_rate=rate)
                for upper, rate in brackets
            )
        )

    def tax_amount(self, income: Decimal) -> Decimal:
        """Cumulative tax owed at ``income``.

        Dot((r_i - r_{i-1}), max(0, x - b_{i-1})) where (b_0, r_0) = (0, 0).
        """
        if income < 0:
            raise NegativeIncomeError(income)
        tax = Decimal("0")
        prev_limit = Decimal("0")
        prev_rate = Decimal("0")
        for knot in self.knots:
            tax += (knot.marginal_rate - prev_rate) * max(income - prev_limit, Decimal("0"))
            if income <= knot.upper_bound:
                break
            prev_limit, prev_rate = knot.income_limit, knot.marginal_rate
        return tax

    def exchange_rate_adjustment(self, exchange_rate: Decimal | None) -> "MarginalRateSchedule":
        """Rescale income limits into another currency.

        ``exchange_rate`` is in units of local currency per foreign unit, so a
        limit becomes ``limit / exchange_rate``. Rates are unaffected.
        """
        if exchange_rate is None or exchange_rate == 1:
            return self.model_copy()
        if exchange_rate <= 0:
            raise ExchangeRateError(f"rate must be positive, got {exchange_rate}")
        return MarginalRateSchedule(
            knots=tuple(
                MarginalRateKnot(
                    marginal_rate=knot.marginal_rate,
                    income_limit=(
                        None if knot.income_limit is None else knot.income_limit / exchange_rate
                    ),
                )
                for knot in self.knots
            )
        )

    def to_amount_schedule(self, max_income_to_consider: Decimal) -> AmountSchedule:
        """Convert to a cumulative tax amount curve ending at ``max_income_to_consider``."""
        if max_income_to_consider < 0:
            raise NegativeIncomeError(max_income_to_consider)

        income_tax_knots = [IncomeTaxKnot(income_limit=Decimal("0"), income_tax_amount=Decimal("0"))]
        # The top bracket's limit is never a boundary knot
        for knot in self.knots[:-1]:
            if knot.upper_bound >= max_income_to_consider:
                break
            income_tax_knots.append(
                IncomeTaxKnot(
                    income_limit=knot.income_limit,
                    income_tax_amount=self.tax_amount(knot.income_limit),
                )
            )
        if max_income_to_consider > 0:
            income_tax_knots.append(
                IncomeTaxKnot(
                    income_limit=max_income_to_consider,
                    income_tax_amount=self.tax_amount(max_income_to_consider),
                )
            )
        return AmountSchedule(knots=tuple(income_tax_knots))
