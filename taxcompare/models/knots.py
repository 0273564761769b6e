"""Knot and point value types for tax schedules."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

INFINITY = Decimal("Infinity")


class MarginalRateKnot(BaseModel):
    """A marginal tax rate that applies up to an income limit.

    ``income_limit`` is None for the unbounded top bracket.
    """

    model_config = ConfigDict(frozen=True)

    marginal_rate: Decimal = Field(ge=0)
    income_limit: Decimal | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.income_limit is None

    @property
    def upper_bound(self) -> Decimal:
        return INFINITY if self.income_limit is None else self.income_limit


class IncomeTaxKnot(BaseModel):
    """Cumulative tax amount owed at an income threshold."""

    model_config = ConfigDict(frozen=True)

    income_limit: Decimal
    income_tax_amount: Decimal


class IncomeTaxPoint(BaseModel):
    """Tax amount at a given level of income."""

    model_config = ConfigDict(frozen=True)

    income: Decimal
    income_tax_amount: Decimal

    def is_origin(self) -> bool:
        return self.income == 0 and self.income_tax_amount == 0
