"""Multi-country tax comparison engine.

Turns a ComparisonRequest into:
  - per-country tax amounts and effective rates over a sampled income range,
    plus the exact tax at one specific income if requested
  - per-country-pair break-even incomes, tax amounts and effective rates

When a normalizing currency is requested, each country's bracket limits are
rescaled by its exchange rate before conversion, so every amount schedule
ends at the requested max income on the normalized income axis.
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from taxcompare.engines.amount_schedule import AmountSchedule
from taxcompare.engines.batch import (
    compute_effective_tax_rates,
    effective_tax_rate,
    generate_income_range,
    parallel_map,
)
from taxcompare.exchange_rates import resolve_exchange_rate
from taxcompare.models.reports import (
    BreakevenData,
    ComparisonRequest,
    TaxComparison,
    TaxData,
)

if TYPE_CHECKING:
    from taxcompare.config import TaxesConfig

logger = logging.getLogger(__name__)


class TaxComparisonEngine:
    """Compares income tax across the countries of a taxes configuration."""

    def __init__(
        self,
        config: "TaxesConfig",
        max_workers: int | None = None,
    ) -> None:
        self.config = config
        self.max_workers = max_workers
        self.warnings: list[str] = []

    def amount_schedule(
        self,
        country: str,
        max_income: Decimal,
        exchange_rate: Decimal = Decimal("1"),
    ) -> AmountSchedule:
        return (
            self.config.get_country(country)
            .exchange_rate_adjustment(exchange_rate)
            .to_amount_schedule(max_income)
        )

    def process_country_taxes(
        self,
        country: str,
        schedule: AmountSchedule,
        incomes: list[Decimal],
        specific_income: Decimal | None,
        exchange_rate: Decimal,
    ) -> TaxData:
        tax_amounts = schedule.compute_income_taxes(incomes, max_workers=self.max_workers)
        effective_rates = compute_effective_tax_rates(
            incomes, tax_amounts, max_workers=self.max_workers
        )

        specific_tax_amount = None
        specific_tax_rate = None
        if specific_income is not None:
            specific_tax_amount = schedule.compute_specific_income_tax(specific_income)
            if specific_tax_amount is not None:
                specific_tax_rate = effective_tax_rate(specific_income, specific_tax_amount)

        return TaxData(
            incomes=incomes,
            tax_amounts=tax_amounts,
            effective_tax_rates=effective_rates,
            specific_income=specific_income,
            specific_tax_amount=specific_tax_amount,
            specific_tax_rate=specific_tax_rate,
            tax_brackets=list(self.config.get_country(country).knots),
            exchange_rate=None if exchange_rate == 1 else exchange_rate,
        )

    def process_breakeven_points(
        self, schedule_one: AmountSchedule, schedule_two: AmountSchedule
    ) -> BreakevenData:
        points = schedule_one.compute_breakeven_taxes(schedule_two)
        incomes = [point.income for point in points]
        amounts = [point.income_tax_amount for point in points]
        return BreakevenData(
            breakeven_incomes=incomes,
            breakeven_tax_amounts=amounts,
            breakeven_effective_tax_rates=compute_effective_tax_rates(
                incomes, amounts, max_workers=self.max_workers
            ),
        )

    def compare(
        self,
        request: ComparisonRequest,
        exchange_rates: dict[str, Decimal] | None = None,
    ) -> TaxComparison:
        self.warnings = []
        countries = list(dict.fromkeys(request.countries))
        logger.info(
            "Comparing %d countries up to income %s (break-even: %s)",
            len(countries), request.max_income, request.show_break_even,
        )

        # Resolve everything up front so a bad country or rate fails before any work
        multipliers = {
            country: resolve_exchange_rate(country, exchange_rates, request.normalizing_currency)
            for country in countries
        }
        schedules = {
            country: self.amount_schedule(country, request.max_income, multipliers[country])
            for country in countries
        }
        incomes = generate_income_range(Decimal("0"), request.max_income, request.income_step)

        tax_data = parallel_map(
            lambda country: self.process_country_taxes(
                country, schedules[country], incomes, request.income, multipliers[country]
            ),
            countries,
            max_workers=self.max_workers,
            chunk_size=1,
        )
        country_specific_data = dict(zip(countries, tax_data))

        if request.income is not None and request.income > request.max_income:
            self.warnings.append(
                f"Specific income {request.income} exceeds max income {request.max_income}; "
                "no specific tax amount computed."
            )

        country_comb_data = None
        if request.show_break_even:
            pairs = [
                (first, second)
                for i, first in enumerate(countries)
                for second in countries[i + 1:]
            ]
            breakevens = parallel_map(
                lambda pair: self.process_breakeven_points(schedules[pair[0]], schedules[pair[1]]),
                pairs,
                max_workers=self.max_workers,
                chunk_size=1,
            )
            country_comb_data = {
                f"{first}-{second}": data for (first, second), data in zip(pairs, breakevens)
            }
            if len(countries) < 2:
                self.warnings.append("Break-even analysis needs at least two countries.")

        return TaxComparison(
            country_specific_data=country_specific_data,
            country_comb_data=country_comb_data,
        )
