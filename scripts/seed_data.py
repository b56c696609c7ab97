"""
Demo data for the sales dashboard.

Produces five sales across four products and three customers, June and
July 2024. Records go through the normal validated write path, so ids are
assigned by the store.
"""

from datetime import datetime, timezone

from app.models import SaleCandidate
from app.store import SalesStore

DEMO_SALES = [
    ("Laptop",   "Acme Corp",        "1200", datetime(2024, 6, 15, tzinfo=timezone.utc)),
    ("Keyboard", "Globex Inc",       "75",   datetime(2024, 6, 20, tzinfo=timezone.utc)),
    ("Monitor",  "Acme Corp",        "300",  datetime(2024, 7, 1,  tzinfo=timezone.utc)),
    ("Laptop",   "Stark Industries", "1500", datetime(2024, 7, 5,  tzinfo=timezone.utc)),
    ("Mouse",    "Globex Inc",       "25",   datetime(2024, 7, 10, tzinfo=timezone.utc)),
]


def seed(store: SalesStore) -> None:
    for product, customer, amount, when in DEMO_SALES:
        store.append(SaleCandidate(
            product=product,
            customer=customer,
            amount=amount,
            date=when,
        ))
