import secrets
import string
from typing import Iterable

ALPHABET = string.ascii_letters + string.digits
SHORT_CODE_LENGTH = 6
MIN_CODE_LENGTH = 3
MAX_CODE_LENGTH = 10

# A code must stay one path segment after URL decoding
FORBIDDEN_CODE_CHARS = frozenset("/?#%")

# Top-level paths served by the app itself; GET /<code> could never reach them
RESERVED_CODES = frozenset({"health", "ready"})


def generate_short_code(length: int = SHORT_CODE_LENGTH) -> str:
    """Generate a cryptographically secure random alphanumeric code."""
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def is_path_safe(code: str) -> bool:
    return all(
        ch.isprintable() and not ch.isspace() and ch not in FORBIDDEN_CODE_CHARS
        for ch in code
    )


def strip_canonical_prefix(name: str, prefixes: Iterable[str]) -> str:
    """Remove the first matching leading prefix, e.g. ``sho.rt/`` in ``sho.rt/promo``."""
    for prefix in prefixes:
        if prefix and name.startswith(prefix):
            return name[len(prefix):]
    return name


def short_url_for(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/{key}"
