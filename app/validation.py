"""
Validation of raw sale submissions.

Form input is loosely typed: amounts arrive as text, dates as ISO-8601
strings. ``validate`` turns such input into a ``SaleCandidate`` or into the
complete list of field errors, so a form can show every problem at once.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError

from app.errors import SaleValidationError
from app.models import FieldError, SaleCandidate, SaleInput

logger = logging.getLogger(__name__)

# field order of the submission form
_FIELDS = ("product", "customer", "amount", "date")

_REQUIRED = {
    "product": "Product name is required.",
    "customer": "Customer name is required.",
    "amount": "Amount must be a positive number.",
    "date": "A date is required.",
}

_INVALID = {
    "product": "Product name must be at least 2 characters.",
    "customer": "Customer name must be at least 2 characters.",
    "amount": "Amount must be a positive number.",
    "date": "Date must be a valid ISO-8601 timestamp.",
}


class ValidationResult(BaseModel):
    candidate: Optional[SaleCandidate] = None
    errors: list[FieldError] = []

    @property
    def ok(self) -> bool:
        return self.candidate is not None


def _payload(raw: Union[Mapping, SaleInput]) -> dict:
    if isinstance(raw, SaleInput):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return {name: raw.get(name) for name in _FIELDS}
    raise TypeError(f"Expected a mapping of sale fields, got {type(raw).__name__}")


def _message(field: str, value: Any) -> str:
    if value is None or (field == "date" and value == ""):
        return _REQUIRED[field]
    return _INVALID[field]


def validate(raw: Union[Mapping, SaleInput]) -> ValidationResult:
    payload = _payload(raw)
    try:
        candidate = SaleCandidate.model_validate(payload)
    except ValidationError as exc:
        failed = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        errors = [
            FieldError(field=name, message=_message(name, payload[name]))
            for name in _FIELDS
            if name in failed
        ]
        logger.debug("rejected sale submission: %s", [e.field for e in errors])
        return ValidationResult(errors=errors)
    return ValidationResult(candidate=candidate)


def ensure_valid(raw: Union[Mapping, SaleInput]) -> SaleCandidate:
    """Like ``validate`` but raises ``SaleValidationError`` on failure."""
    result = validate(raw)
    if not result.ok:
        raise SaleValidationError(result.errors)
    return result.candidate
