from collections.abc import Iterable
from datetime import datetime, time, timezone, tzinfo
from decimal import Decimal

from app.models import (
    FilterCriteria,
    FilterOptions,
    ProductTotal,
    Sale,
    SalesView,
)

_ZERO = Decimal("0")


def _day_bounds(criteria: FilterCriteria, tz: tzinfo) -> tuple:
    start = end = None
    if criteria.date_from:
        start = datetime.combine(criteria.date_from, time.min, tzinfo=tz)
    if criteria.date_to:
        end = datetime.combine(criteria.date_to, time.max, tzinfo=tz)
    return start, end


def newest_first(records: Iterable[Sale]) -> list[Sale]:
    """Sort by date descending; ties keep their incoming order."""
    return sorted(records, key=lambda s: s.date, reverse=True)


def apply_filters(
    records: Iterable[Sale],
    criteria: FilterCriteria,
    tz: tzinfo = timezone.utc,
) -> SalesView:
    """Derive the dashboard view from a snapshot of sales.

    Product and customer match exactly (case-sensitive, untrimmed). The date
    range is inclusive of whole calendar days in ``tz``. An unsatisfiable
    range simply gives an empty view.
    """
    start, end = _day_bounds(criteria, tz)

    # ── 1. Filter ────────────────────────────────────────────────────────────
    filtered = [
        s for s in records
        if (not criteria.product or s.product == criteria.product)
        and (not criteria.customer or s.customer == criteria.customer)
        and (start is None or s.date >= start)
        and (end is None or s.date <= end)
    ]

    # ── 2. Aggregate ─────────────────────────────────────────────────────────
    total = sum((s.amount for s in filtered), _ZERO)

    by_product: dict[str, Decimal] = {}
    for s in filtered:
        by_product[s.product] = by_product.get(s.product, _ZERO) + s.amount

    return SalesView(
        filtered=newest_first(filtered),
        total=total,
        by_product=by_product,
    )


def filter_options(records: Iterable[Sale]) -> FilterOptions:
    # dict.fromkeys keeps first-seen order
    records = list(records)
    return FilterOptions(
        products=list(dict.fromkeys(s.product for s in records)),
        customers=list(dict.fromkeys(s.customer for s in records)),
    )


def chart_series(view: SalesView) -> list[ProductTotal]:
    return [ProductTotal(name=name, total=total) for name, total in view.by_product.items()]
