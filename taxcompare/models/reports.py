"""Comparison request and report output models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from taxcompare.models.knots import MarginalRateKnot


class ComparisonRequest(BaseModel):
    countries: list[str] = Field(min_length=1)
    income: Decimal | None = None  # specific income to look up exactly
    max_income: Decimal = Field(ge=0)
    show_break_even: bool = False
    normalizing_currency: str | None = None
    income_step: Decimal = Field(default=Decimal("10"), gt=0)


class TaxData(BaseModel):
    incomes: list[Decimal]
    tax_amounts: list[Decimal]
    effective_tax_rates: list[Decimal]
    specific_income: Decimal | None = None
    specific_tax_amount: Decimal | None = None
    specific_tax_rate: Decimal | None = None
    tax_brackets: list[MarginalRateKnot]
    exchange_rate: Decimal | None = None  # None when no conversion was applied


class BreakevenData(BaseModel):
    breakeven_incomes: list[Decimal]
    breakeven_tax_amounts: list[Decimal]
    breakeven_effective_tax_rates: list[Decimal]


class TaxComparison(BaseModel):
    country_specific_data: dict[str, TaxData]
    country_comb_data: dict[str, BreakevenData] | None = None
