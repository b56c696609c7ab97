import itertools
from abc import ABC, abstractmethod
from threading import Lock

from app.models import Sale, SaleCandidate
from app.validation import ensure_valid


class SalesStore(ABC):
    """Append-only record store. Implementations hand out copies only."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        ...

    @abstractmethod
    def append(self, candidate: SaleCandidate) -> Sale:
        ...


class InMemoryStore(SalesStore):
    def __init__(self) -> None:
        self._sales: list[Sale] = []
        self._ids = itertools.count(1)
        self._lock = Lock()

    # ── writes ────────────────────────────────────────────────────────────────

    def append(self, candidate: SaleCandidate) -> Sale:
        # the entry point is untrusted, so check again right before storing
        checked = ensure_valid(candidate.model_dump())
        with self._lock:
            sale = Sale(id=str(next(self._ids)), **checked.model_dump())
            self._sales.append(sale)
            return sale.model_copy(deep=True)

    def clear(self) -> None:
        with self._lock:
            self._sales.clear()
            self._ids = itertools.count(1)

    # ── reads ─────────────────────────────────────────────────────────────────

    def list_all(self) -> list[Sale]:
        with self._lock:
            return [s.model_copy(deep=True) for s in self._sales]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sales)


# module-level singleton used by the app
store = InMemoryStore()
