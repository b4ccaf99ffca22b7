from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from app.services.validation import FieldError


class LinkError(Exception):
    """Base class for link registry failures."""


class LinkValidationError(LinkError):
    def __init__(self, errors: List["FieldError"]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class LinkNotFoundError(LinkError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Link not found: {code}")


class CodeConflictError(LinkError, ValueError):
    """The unique constraint on ``links.code`` rejected an insert."""

    def __init__(self, code: str):
        self.code = code
        super().__init__("Short code already exists")


class LinkStorageError(LinkError):
    """Unexpected database failure while writing a link."""


class NoLinksToExportError(LinkError):
    def __init__(self):
        super().__init__("No links to export")


class ExportFailedError(LinkError):
    """Reading links or uploading the CSV failed."""

