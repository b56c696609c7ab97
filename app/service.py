import logging
from collections.abc import Mapping
from datetime import timezone, tzinfo
from typing import Union

from app.engine import apply_filters, chart_series, filter_options
from app.errors import SaveFailed, StorageFault
from app.models import Dashboard, FilterCriteria, Sale, SaleInput
from app.store import SalesStore
from app.validation import ensure_valid

logger = logging.getLogger(__name__)


def submit_sale(raw: Union[Mapping, SaleInput], store: SalesStore) -> Sale:
    """Validate a raw submission and append it to ``store``.

    Raises ``SaleValidationError`` carrying every field error, or
    ``SaveFailed`` when the store itself could not take the write.
    """
    candidate = ensure_valid(raw)
    try:
        sale = store.append(candidate)
    except StorageFault as exc:
        logger.exception("failed to save sale for %s", candidate.product)
        raise SaveFailed("Failed to add sale due to a server error.") from exc
    logger.info("added sale %s: %s for %s (%s)", sale.id, sale.product, sale.customer, sale.amount)
    return sale


def dashboard(
    store: SalesStore,
    criteria: FilterCriteria,
    tz: tzinfo = timezone.utc,
) -> Dashboard:
    snapshot = store.list_all()
    view = apply_filters(snapshot, criteria, tz)
    return Dashboard(
        view=view,
        chart=chart_series(view),
        # options come from the unfiltered snapshot so every choice stays selectable
        options=filter_options(snapshot),
    )
