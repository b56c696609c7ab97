import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Optional

# extended ISO-8601: a date, optionally a time, optionally an offset
_ISO_8601 = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?"
)


class SaleCandidate(BaseModel):
    """Validated sale fields that have not been stored yet (no id).

    ``date`` is always stored timezone-aware in UTC; naive input is taken
    to be UTC already.
    """

    product: str = Field(min_length=2)
    customer: str = Field(min_length=2)
    amount: Decimal = Field(gt=0, allow_inf_nan=False)
    date: datetime

    @field_validator("amount", mode="before")
    @classmethod
    def _reject_bool_amount(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("amount must be a number")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        # only ISO-8601 text or structured dates, never epoch numbers
        if isinstance(value, (bool, int, float, Decimal)):
            raise ValueError("date must be an ISO-8601 timestamp")
        if isinstance(value, str) and not _ISO_8601.fullmatch(value):
            raise ValueError("date must be an ISO-8601 timestamp")
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value

    @field_validator("date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Sale(SaleCandidate):
    model_config = ConfigDict(frozen=True)

    id: str


class SaleInput(BaseModel):
    """Raw, untrusted submission as it arrives from a form."""

    product: Any = None
    customer: Any = None
    amount: Any = None
    date: Any = None


class FieldError(BaseModel):
    field: str
    message: str


class FilterCriteria(BaseModel):
    product: Optional[str] = None
    customer: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


# ── Response models ──────────────────────────────────────────────────────────

class SalesView(BaseModel):
    # newest first
    filtered: list[Sale]
    total: Decimal
    by_product: dict[str, Decimal]


class ProductTotal(BaseModel):
    name: str
    total: Decimal


class FilterOptions(BaseModel):
    products: list[str]
    customers: list[str]


class Dashboard(BaseModel):
    view: SalesView
    chart: list[ProductTotal]
    options: FilterOptions
