"""Data models for taxcompare."""

from taxcompare.models.knots import IncomeTaxKnot, IncomeTaxPoint, MarginalRateKnot
from taxcompare.models.reports import (
    BreakevenData,
    ComparisonRequest,
    TaxComparison,
    TaxData,
)

__all__ = [
    "BreakevenData",
    "ComparisonRequest",
    "IncomeTaxKnot",
    "IncomeTaxPoint",
    "MarginalRateKnot",
    "TaxComparison",
    "TaxData",
]
