from app.models import FieldError


class SaleValidationError(ValueError):
    """Raised when a submission fails one or more field checks."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Invalid sale data: {fields}")


class StorageFault(RuntimeError):
    """The backing store could not complete a read or write."""


class SaveFailed(RuntimeError):
    """A valid sale could not be saved. Distinct from validation failure."""
