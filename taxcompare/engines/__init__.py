"""Tax schedule engines."""

from taxcompare.engines.amount_schedule import AmountSchedule
from taxcompare.engines.comparison import TaxComparisonEngine
from taxcompare.engines.marginal_schedule import MarginalRateSchedule
from taxcompare.engines.segment import LinearSegment

__all__ = [
    "AmountSchedule",
    "LinearSegment",
    "MarginalRateSchedule",
    "TaxComparisonEngine",
]
