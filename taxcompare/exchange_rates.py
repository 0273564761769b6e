"""Country currencies and caller-supplied exchange rates.

Rates are units of local currency per one unit of the normalizing currency,
the convention used by rates APIs queried with the normalizing currency as
base. Rates are read from a file; nothing here performs network I/O.
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from taxcompare.exceptions import ExchangeRateError

logger = logging.getLogger(__name__)

COUNTRY_CURRENCY: dict[str, str] = {
    "New Zealand": "NZD",
    "Australia": "AUD",
    "United Kingdom": "GBP",
    "Singapore": "SGD",
    "Norway": "NOK",
    "South Africa": "ZAR",
    "Netherlands": "EUR",
    "Ireland": "EUR",
    "Spain": "EUR",
    "United States of America (excl. state taxes)": "USD",
    "Canada (excl. provincial taxes)": "CAD",
}


def load_exchange_rates(path: Path) -> dict[str, Decimal]:
    """Load a ``{currency: rate}`` mapping.

    Accepts a flat JSON object or a rates API payload with a ``rates`` object.
    """
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ExchangeRateError(f"cannot read rates file {path}: {exc}") from exc

    if isinstance(data, dict) and isinstance(data.get("rates"), dict):
        data = data["rates"]
    if not isinstance(data, dict):
        raise ExchangeRateError(f"rates file {path} must contain a JSON object")

    rates: dict[str, Decimal] = {}
    for currency, value in data.items():
        try:
            rate = Decimal(str(value))
        except InvalidOperation as exc:
            raise ExchangeRateError(f"invalid rate for {currency}: {value!r}") from exc
        if not rate.is_finite() or rate <= 0:
            raise ExchangeRateError(f"rate for {currency} must be positive, got {value!r}")
        rates[currency.upper()] = rate
    logger.info("Loaded %d exchange rate(s) from %s", len(rates), path)
    return rates


def resolve_exchange_rate(
    country: str,
    rates: dict[str, Decimal] | None,
    normalizing_currency: str | None,
) -> Decimal:
    """Multiplier for a country's schedule. 1 when no normalization is requested."""
    if normalizing_currency is None:
        return Decimal("1")
    currency = COUNTRY_CURRENCY.get(country)
    if currency is None:
        raise ExchangeRateError(f"no currency known for country {country!r}")
    if currency == normalizing_currency.upper():
        return Decimal("1")
    if not rates or currency not in rates:
        raise ExchangeRateError(
            f"no {currency} rate supplied for normalizing currency {normalizing_currency}"
        )
    return rates[currency]
