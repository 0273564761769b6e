"""Typer CLI interface for taxcompare."""

import logging
from decimal import Decimal
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from taxcompare.config import TaxesConfig, load_taxes_config
from taxcompare.engines.brackets import DEFAULT_INCOME_STEP, DEFAULT_MAX_INCOME
from taxcompare.exceptions import TaxComputationError

BANNER = r"""
   _____________
  |  ___   ___  |
  | | A | | B | |
  | |___| |___| |
  |    \   /    |
  |     \ /     |
  |      X      |
  |_____/_\_____|

  taxcompare
  "Same income, different bill."
"""


def show_banner() -> None:
    typer.echo(BANNER)


app = typer.Typer(
    name="taxcompare",
    help="taxcompare: compare progressive income tax across countries.",
)

CONFIG_OPTION_HELP = "Taxes configuration JSON (default: $TAXCOMPARE_CONFIG_PATH or bundled brackets)"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """taxcompare: compare progressive income tax across countries."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        show_banner()
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _load_config(config: Path | None) -> TaxesConfig:
    try:
        return load_taxes_config(config)
    except TaxComputationError as exc:
        _fail(str(exc))


def _percent(rate: Decimal | None) -> str:
    if rate is None:
        return "n/a"
    return f"{rate * 100:.2f}%"


@app.command()
def countries(
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """List the countries with a configured tax schedule."""
    from taxcompare.exchange_rates import COUNTRY_CURRENCY

    taxes_config = _load_config(config)
    for country in sorted(taxes_config.countries):
        currency = COUNTRY_CURRENCY.get(country, "???")
        typer.echo(f"  {currency}  {country}")


@app.command()
def brackets(
    country: str = typer.Argument(..., help="Country name, e.g. 'New Zealand'"),
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Show a country's marginal tax brackets."""
    taxes_config = _load_config(config)
    try:
        schedule = taxes_config.get_country(country)
    except TaxComputationError as exc:
        _fail(str(exc))

    tbl = Table(title=f"Tax brackets: {country}", show_header=True)
    tbl.add_column("From", justify="right")
    tbl.add_column("To", justify="right")
    tbl.add_column("Marginal rate", justify="right")
    lower = Decimal("0")
    for knot in schedule.knots:
        upper = "and above" if knot.is_unbounded else f"{knot.income_limit:,.2f}"
        tbl.add_row(f"{lower:,.2f}", upper, _percent(knot.marginal_rate))
        if knot.income_limit is not None:
            lower = knot.income_limit
    Console().print(tbl)


@app.command()
def lookup(
    country: str = typer.Argument(..., help="Country name"),
    income: float = typer.Argument(..., help="Income to compute tax for"),
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Compute the tax owed at a single income."""
    from taxcompare.engines.batch import effective_tax_rate

    taxes_config = _load_config(config)
    income_dec = Decimal(str(income))
    try:
        schedule = taxes_config.get_country(country).to_amount_schedule(income_dec)
    except TaxComputationError as exc:
        _fail(str(exc))

    tax_amount = schedule.compute_specific_income_tax(income_dec)
    typer.echo(f"=== {country} ===")
    typer.echo(f"  Income:                {income_dec:>14,.2f}")
    typer.echo(f"  Tax:                   {tax_amount:>14,.2f}")
    typer.echo(f"  Effective rate:        {_percent(effective_tax_rate(income_dec, tax_amount)):>14}")


@app.command()
def compare(
    country_names: list[str] = typer.Argument(..., metavar="COUNTRIES", help="Countries to compare"),
    max_income: float = typer.Option(
        float(DEFAULT_MAX_INCOME),
        "--max-income",
        "-m",
        help="Largest income to evaluate",
    ),
    income: float | None = typer.Option(
        None,
        "--income",
        "-i",
        help="Specific income to compute exact tax for",
    ),
    break_even: bool = typer.Option(False, "--break-even", "-b", help="Compute break-even incomes between each pair"),
    currency: str | None = typer.Option(
        None,
        "--currency",
        help="Normalizing currency code (requires --rates unless every country uses it)",
    ),
    rates_file: Path | None = typer.Option(
        None,
        "--rates",
        help="JSON file with exchange rates: {currency: units per normalizing unit}",
    ),
    step: float = typer.Option(
        float(DEFAULT_INCOME_STEP),
        "--step",
        help="Income sampling step",
    ),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Worker threads for batch evaluation"),
    json_output: bool = typer.Option(False, "--json", help="Output full results as JSON"),
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Compare income tax across countries."""
    from taxcompare.engines.comparison import TaxComparisonEngine
    from taxcompare.exchange_rates import load_exchange_rates
    from taxcompare.models.reports import ComparisonRequest

    taxes_config = _load_config(config)

    try:
        request = ComparisonRequest(
            countries=country_names,
            income=Decimal(str(income)) if income is not None else None,
            max_income=Decimal(str(max_income)),
            show_break_even=break_even,
            normalizing_currency=currency,
            income_step=Decimal(str(step)),
        )
    except ValidationError as exc:
        _fail(str(exc))

    try:
        exchange_rates = load_exchange_rates(rates_file) if rates_file is not None else None
        engine = TaxComparisonEngine(taxes_config, max_workers=workers)
        result = engine.compare(request, exchange_rates)
    except TaxComputationError as exc:
        _fail(str(exc))

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
        return

    typer.echo("")
    title = f"=== Tax Comparison (max income {request.max_income:,.2f}"
    if currency:
        title += f" {currency.upper()}"
    typer.echo(title + ") ===")
    for country, data in result.country_specific_data.items():
        typer.echo("")
        typer.echo(country.upper())
        if data.exchange_rate is not None:
            typer.echo(f"  Exchange rate:         {data.exchange_rate:>14}")
        typer.echo(f"  Tax at max income:     {data.tax_amounts[-1]:>14,.2f}")
        typer.echo(f"  Effective rate:        {_percent(data.effective_tax_rates[-1]):>14}")
        if data.specific_income is not None and data.specific_tax_amount is not None:
            typer.echo(f"  Tax at {data.specific_income:,.2f}:".ljust(25) + f"{data.specific_tax_amount:>14,.2f}")
            typer.echo(f"  Effective rate:        {_percent(data.specific_tax_rate):>14}")

    if result.country_comb_data:
        typer.echo("")
        typer.echo("BREAK-EVEN POINTS")
        console = Console()
        for pair, data in result.country_comb_data.items():
            if not data.breakeven_incomes:
                typer.echo(f"  {pair}: none below max income")
                continue
            tbl = Table(title=pair, show_header=True)
            tbl.add_column("Income", justify="right")
            tbl.add_column("Tax", justify="right")
            tbl.add_column("Effective rate", justify="right")
            for point_income, amount, rate in zip(
                data.breakeven_incomes,
                data.breakeven_tax_amounts,
                data.breakeven_effective_tax_rates,
            ):
                tbl.add_row(f"{point_income:,.2f}", f"{amount:,.2f}", _percent(rate))
            console.print(tbl)

    if engine.warnings:
        typer.echo("")
        typer.echo("WARNINGS:")
        for w in engine.warnings:
            typer.echo(f"  - {w}")
