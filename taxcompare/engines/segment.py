"""Linear segment between two adjacent knots of a tax amount schedule.

A schedule is a piecewise-linear curve; each piece is a LinearSegment.
Segments own the two pieces of geometry the engines need:

  - linear interpolation of a tax amount at an income inside the segment
  - intersection with another segment (break-even analysis)

Intersection writes both segments parametrically as P(t) = left + t(right - left),
t in [0, 1], equates them and solves the 2x2 system

    t1 (P2 - P1) + t2 (Q1 - Q2) = Q1 - P1

When the coefficient matrix has rank 2 there is a unique solution, accepted
only if both parameters lie in [0, 1]. Rank < 2 means parallel or coincident
segments, and no point is reported for either.
See https://en.wikipedia.org/wiki/Line%E2%80%93line_intersection
"""

from dataclasses import dataclass
from decimal import Decimal

from taxcompare.models.knots import IncomeTaxKnot, IncomeTaxPoint

# Relative to the magnitude of the matrix terms
RANK_TOLERANCE = Decimal("1e-12")


@dataclass(frozen=True)
class LinearSegment:
    left: IncomeTaxKnot
    right: IncomeTaxKnot

    @property
    def income_range(self) -> tuple[Decimal, Decimal]:
        low, high = sorted((self.left.income_limit, self.right.income_limit))
        return low, high

    def contains(self, income: Decimal) -> bool:
        low, high = self.income_range
        return low <= income <= high

    def linear_interpolation(self, income: Decimal) -> Decimal | None:
        """Tax amount at ``income``, or None if it lies outside the segment."""
        if not self.contains(income):
            return None
        width = self.right.income_limit - self.left.income_limit
        if width == 0:
            return self.left.income_tax_amount
        rise = self.right.income_tax_amount - self.left.income_tax_amount
        return (
            self.left.income_tax_amount
            + rise * (income - self.left.income_limit) / width
        )

    def compute_intersection(self, other: "LinearSegment") -> IncomeTaxPoint | None:
        x1, y1 = self.left.income_limit, self.left.income_tax_amount
        x2, y2 = self.right.income_limit, self.right.income_tax_amount
        q1, r1 = other.left.income_limit, other.left.income_tax_amount
        q2, r2 = other.right.income_limit, other.right.income_tax_amount

        # [a b] [t1]   [e]
        # [c d] [t2] = [f]
        a, b = x2 - x1, q1 - q2
        c, d = y2 - y1, r1 - r2
        e, f = q1 - x1, r1 - y1

        det = a * d - b * c
        scale = abs(a * d) + abs(b * c)
        if scale == 0 or abs(det) <= RANK_TOLERANCE * scale:
            return None

        t1 = (e * d - b * f) / det
        t2 = (a * f - e * c) / det
        if not (0 <= t1 <= 1 and 0 <= t2 <= 1):
            return None

        return IncomeTaxPoint(income=x1 + t1 * a, income_tax_amount=y1 + t1 * c)


def points_coincide(first: IncomeTaxPoint, second: IncomeTaxPoint) -> bool:
    """True when two points differ only by rounding, relative to their magnitude."""
    scale = max(
        abs(first.income), abs(second.income),
        abs(first.income_tax_amount), abs(second.income_tax_amount),
    )
    tolerance = RANK_TOLERANCE * scale
    return (
        abs(first.income - second.income) <= tolerance
        and abs(first.income_tax_amount - second.income_tax_amount) <= tolerance
    )
