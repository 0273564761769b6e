"""Batch helpers: income grouping, parallel map, effective rates, income ranges."""

import decimal
import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import TypeVar

from taxcompare.engines.segment import LinearSegment
from taxcompare.exceptions import DataValidationError
from taxcompare.models.knots import IncomeTaxKnot

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_CHUNK_SIZE = 2048


def _map_chunk(
    func: Callable[[T], R], items: Sequence[T], indices: range, context: decimal.Context
) -> list[R]:
    # Worker threads start from decimal.DefaultContext
    with decimal.localcontext(context):
        return [func(items[i]) for i in indices]


def parallel_map(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: int | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> list[R]:
    """Apply ``func`` to every item across worker threads.

    The index range is split into contiguous chunks, each evaluated as an
    independent task. Results are gathered chunk by chunk in index order, so
    the output always lines up with ``items`` regardless of completion order.
    Runs inline when ``max_workers`` is 1 or there is only one chunk. Workers
    evaluate under a copy of the caller's decimal context.
    Exceptions raised by ``func`` propagate to the caller.
    """
    if chunk_size < 1:
        raise DataValidationError("chunk_size", f"must be positive, got {chunk_size}")
    if max_workers is not None and max_workers < 1:
        raise DataValidationError("max_workers", f"must be positive, got {max_workers}")

    n = len(items)
    chunks = [range(start, min(start + chunk_size, n)) for start in range(0, n, chunk_size)]
    if max_workers == 1 or len(chunks) <= 1:
        return [func(item) for item in items]

    logger.debug("Mapping %d item(s) in %d chunk(s)", n, len(chunks))
    context = decimal.getcontext().copy()
    results: list[R] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(_map_chunk, func, items, chunk, context) for chunk in chunks]
        for future in futures:
            results.extend(future.result())
    return results


def group_incomes_by_segment(
    incomes: Sequence[Decimal], knots: Sequence[IncomeTaxKnot]
) -> list[tuple[LinearSegment, list[Decimal]]]:
    """Partition sorted incomes into runs sharing the same schedule segment.

    Both inputs must be sorted ascending. An income equal to a knot limit goes
    to the segment ending at that knot. Incomes beyond the last knot are left
    ungrouped; callers check bounds first.
    """
    groups: list[tuple[LinearSegment, list[Decimal]]] = []
    in_segment: list[Decimal] = []
    knot_index = 0
    income_index = 0

    while income_index < len(incomes) and knot_index + 1 < len(knots):
        income = incomes[income_index]
        if income <= knots[knot_index + 1].income_limit:
            in_segment.append(income)
            income_index += 1
            continue
        if in_segment:
            groups.append(
                (LinearSegment(knots[knot_index], knots[knot_index + 1]), in_segment)
            )
            in_segment = []
        knot_index += 1

    # Flush the final run
    if in_segment:
        groups.append((LinearSegment(knots[knot_index], knots[knot_index + 1]), in_segment))

    return groups


def effective_tax_rate(income: Decimal, tax_amount: Decimal) -> Decimal:
    """Tax as a fraction of income. Zero income is defined to have a zero rate."""
    if income == 0:
        return Decimal("0")
    return tax_amount / income


def compute_effective_tax_rates(
    incomes: Sequence[Decimal],
    tax_amounts: Sequence[Decimal],
    max_workers: int | None = None,
) -> list[Decimal]:
    if len(incomes) != len(tax_amounts):
        raise DataValidationError(
            "tax_amounts",
            f"expected {len(incomes)} value(s) to match incomes, got {len(tax_amounts)}",
        )
    return parallel_map(
        lambda i: effective_tax_rate(incomes[i], tax_amounts[i]),
        range(len(incomes)),
        max_workers=max_workers,
    )


def generate_income_range(start: Decimal, stop: Decimal, step: Decimal) -> list[Decimal]:
    """Incomes ``start, start + step, ...`` up to and including ``stop``."""
    if step <= 0:
        raise DataValidationError("step", f"must be positive, got {step}")
    values: list[Decimal] = []
    current = start
    while current <= stop:
        values.append(current)
        current += step
    return values
