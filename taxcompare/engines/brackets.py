"""Bundled tax bracket configuration.

Personal income tax brackets per country, in local currency, as
(upper_bound, marginal_rate) pairs. Upper bound is Decimal or None for the top
bracket. Used when no taxes configuration file is supplied. Never hardcode
brackets in computation functions.

Tables are resident single filers with no allowances, credits, levies or
surcharges, and are intended for comparison only.

Sources:
  - New Zealand: IRD tax rates for individuals (from 31 July 2024)
  - Australia: ATO resident tax rates 2024-25
  - United Kingdom: HMRC income tax rates 2024-25 (England, NI, Wales)
  - United States: IRS Rev. Proc. 2023-34 (2024, single, federal only)
  - Canada: CRA federal rates 2024 (excluding provincial taxes)
  - Ireland: Revenue single person rate band 2024
  - Netherlands: Box 1 rates 2024 (below state pension age)
  - Singapore: IRAS resident rates YA 2024
  - South Africa: SARS rates 2025 tax year
"""

from decimal import Decimal

COUNTRY_BRACKETS: dict[str, list[tuple[Decimal | None, Decimal]]] = {
    "New Zealand": [
        (Decimal("15600"), Decimal("0.105")),
        (Decimal("53500"), Decimal("0.175")),
        (Decimal("78100"), Decimal("0.30")),
        (Decimal("180000"), Decimal("0.33")),
        (None, Decimal("0.39")),
    ],
    "Australia": [
        (Decimal("18200"), Decimal("0")),
        (Decimal("45000"), Decimal("0.16")),
        (Decimal("135000"), Decimal("0.30")),
        (Decimal("190000"), Decimal("0.37")),
        (None, Decimal("0.45")),
    ],
    "United Kingdom": [
        (Decimal("12570"), Decimal("0")),
        (Decimal("50270"), Decimal("0.20")),
        (Decimal("125140"), Decimal("0.40")),
        (None, Decimal("0.45")),
    ],
    "United States of America (excl. state taxes)": [
        (Decimal("11600"), Decimal("0.10")),
        (Decimal("47150"), Decimal("0.12")),
        (Decimal("100525"), Decimal("0.22")),
        (Decimal("191950"), Decimal("0.24")),
        (Decimal("243725"), Decimal("0.32")),
        (Decimal("609350"), Decimal("0.35")),
        (None, Decimal("0.37")),
    ],
    "Canada (excl. provincial taxes)": [
        (Decimal("55867"), Decimal("0.15")),
        (Decimal("111733"), Decimal("0.205")),
        (Decimal("173205"), Decimal("0.26")),
        (Decimal("246752"), Decimal("0.29")),
        (None, Decimal("0.33")),
    ],
    "Ireland": [
        (Decimal("42000"), Decimal("0.20")),
        (None, Decimal("0.40")),
    ],
    "Netherlands": [
        (Decimal("75518"), Decimal("0.3697")),
        (None, Decimal("0.495")),
    ],
    "Singapore": [
        (Decimal("20000"), Decimal("0")),
        (Decimal("30000"), Decimal("0.02")),
        (Decimal("40000"), Decimal("0.035")),
        (Decimal("80000"), Decimal("0.07")),
        (Decimal("120000"), Decimal("0.115")),
        (Decimal("160000"), Decimal("0.15")),
        (Decimal("200000"), Decimal("0.18")),
        (Decimal("240000"), Decimal("0.19")),
        (Decimal("280000"), Decimal("0.195")),
        (Decimal("320000"), Decimal("0.20")),
        (Decimal("500000"), Decimal("0.22")),
        (Decimal("1000000"), Decimal("0.23")),
        (None, Decimal("0.24")),
    ],
    "South Africa": [
        (Decimal("237100"), Decimal("0.18")),
        (Decimal("370500"), Decimal("0.26")),
        (Decimal("512800"), Decimal("0.31")),
        (Decimal("673000"), Decimal("0.36")),
        (Decimal("857900"), Decimal("0.39")),
        (Decimal("1817000"), Decimal("0.41")),
        (None, Decimal("0.45")),
    ],
}

# ---------------------------------------------------------------------------
# Income sampling defaults for comparisons
# ---------------------------------------------------------------------------
DEFAULT_INCOME_STEP = Decimal("10")
DEFAULT_MAX_INCOME = Decimal("250000")
