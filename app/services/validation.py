"""Per-operation input validation.

Each ``validate_*`` function returns a :class:`ValidationResult` holding either the
coerced value or the list of field errors; nothing here raises on bad input.
"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, TypeVar

from pydantic import HttpUrl, TypeAdapter, ValidationError

from app.utils.encoding import MAX_CODE_LENGTH, MIN_CODE_LENGTH, RESERVED_CODES, is_path_safe

T = TypeVar("T")

MAX_URL_LENGTH = 2048
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# OFFSET is bound as a signed 64-bit integer by both SQLite and PostgreSQL
MAX_OFFSET = 2 ** 63 - 1

_http_url = TypeAdapter(HttpUrl)


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class LinkCreateInput:
    original_url: str
    code: Optional[str] = None
    custom_name: Optional[str] = None


@dataclass
class Pagination:
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def check_url(value: Any, name: str = "original_url") -> List[FieldError]:
    if not isinstance(value, str) or not value.strip():
        return [FieldError(name, "URL is required")]
    if len(value) > MAX_URL_LENGTH:
        return [FieldError(name, f"URL must be less than {MAX_URL_LENGTH} characters")]
    try:
        _http_url.validate_python(value.strip())
    except ValidationError:
        return [FieldError(name, "Malformed URL")]
    return []


def check_code(value: Any, name: str = "code") -> List[FieldError]:
    if not isinstance(value, str):
        return [FieldError(name, "must be a string")]
    if len(value) < MIN_CODE_LENGTH:
        return [FieldError(name, f"must be at least {MIN_CODE_LENGTH} characters")]
    if len(value) > MAX_CODE_LENGTH:
        return [FieldError(name, f"must be {MAX_CODE_LENGTH} characters or less")]
    if not is_path_safe(value):
        return [FieldError(name, "must not contain whitespace, '/', '?', '#' or '%'")]
    if value in RESERVED_CODES:
        return [FieldError(name, f"'{value}' is reserved")]
    return []


def _optional_str(payload: Mapping[str, Any], key: str, errors: List[FieldError]) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        errors.append(FieldError(key, "must be a string"))
        return None
    return value


def validate_create_link(payload: Any) -> ValidationResult[LinkCreateInput]:
    """Check the body of a create request.

    ``code`` is checked exactly as sent, never trimmed. ``custom_name`` is
    checked only after its canonical prefix has been stripped, which needs the
    configured base URL (see ``LinkService.resolve_code``).
    """
    if not isinstance(payload, Mapping):
        return ValidationResult(errors=[FieldError("body", "must be a JSON object")])

    errors = check_url(payload.get("original_url"))
    code = _optional_str(payload, "code", errors)
    custom_name = _optional_str(payload, "custom_name", errors)
    if code is not None:
        errors.extend(check_code(code))

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(
        value=LinkCreateInput(
            original_url=payload["original_url"].strip(),
            code=code,
            custom_name=custom_name,
        )
    )


def _coerce_int(raw: Optional[str], name: str, default: int, errors: List[FieldError]) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        errors.append(FieldError(name, "must be an integer"))
        return default


def validate_pagination(page: Optional[str], page_size: Optional[str]) -> ValidationResult[Pagination]:
    errors: List[FieldError] = []
    page_value = _coerce_int(page, "page", DEFAULT_PAGE, errors)
    size_value = _coerce_int(page_size, "pageSize", DEFAULT_PAGE_SIZE, errors)

    if not errors:
        if page_value < 1:
            errors.append(FieldError("page", "must be greater than or equal to 1"))
        if not MIN_PAGE_SIZE <= size_value <= MAX_PAGE_SIZE:
            errors.append(
                FieldError("pageSize", f"must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")
            )
        elif page_value >= 1 and (page_value - 1) * size_value > MAX_OFFSET:
            errors.append(FieldError("page", "is too large"))

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=Pagination(page=page_value, page_size=size_value))
