from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple
import logging

from app.core.exceptions import (
    CodeConflictError,
    LinkNotFoundError,
    LinkStorageError,
    LinkValidationError,
)
from app.db import repository
from app.db.Models.models import Link
from app.services.validation import LinkCreateInput, Pagination, check_code
from app.utils.encoding import (
    RESERVED_CODES,
    generate_short_code,
    short_url_for,
    strip_canonical_prefix,
)

logger = logging.getLogger(__name__)

MAX_GENERATION_ATTEMPTS = 5


class LinkService:
    """All state transitions over link records.

    Built per request around the request's session; holds no state of its own.
    """

    def __init__(self, db: Session, base_url: str, base_host: Optional[str] = None):
        self.db = db
        self.base_url = base_url.rstrip("/")
        self.base_host = base_host

    def short_url(self, code: str) -> str:
        return short_url_for(self.base_url, code)

    def canonical_prefixes(self) -> Tuple[str, ...]:
        prefixes = [f"{self.base_url}/"]
        if self.base_host:
            prefixes.append(f"{self.base_host}/")
        return tuple(prefixes)

    def resolve_code(self, custom_name: Optional[str], code: Optional[str]) -> Optional[str]:
        """Pick the caller-chosen code, or None when one must be generated.

        ``custom_name`` wins over ``code``; its canonical prefix is removed first.
        """
        if custom_name is not None:
            name = strip_canonical_prefix(custom_name, self.canonical_prefixes())
            errors = check_code(name, "custom_name")
            if errors:
                raise LinkValidationError(errors)
            return name
        if code is not None:
            errors = check_code(code)
            if errors:
                raise LinkValidationError(errors)
            return code
        return None

    def create_link(self, link_in: LinkCreateInput) -> Link:
        chosen = self.resolve_code(link_in.custom_name, link_in.code)
        if chosen:
            link = self._insert(chosen, link_in.original_url)
        else:
            link = self._insert_generated(link_in.original_url)
        logger.info("Created link %s -> %s", link.code, link.original_url[:50])
        return link

    def _insert(self, code: str, original_url: str) -> Link:
        try:
            return repository.insert_link(self.db, code, original_url)
        except CodeConflictError:
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to insert link code=%s", code)
            raise LinkStorageError("Failed to create link") from e

    def _insert_generated(self, original_url: str) -> Link:
        for attempt in range(MAX_GENERATION_ATTEMPTS):
            code = generate_short_code()
            if code in RESERVED_CODES:
                continue
            try:
                return self._insert(code, original_url)
            except CodeConflictError as e:
                logger.info(
                    "Generated code %s collided on attempt %d/%d",
                    e.code, attempt + 1, MAX_GENERATION_ATTEMPTS,
                )
        raise LinkStorageError(
            f"Failed to generate unique short code after {MAX_GENERATION_ATTEMPTS} attempts"
        )

    def get_link(self, code: str) -> Link:
        link = repository.get_link_by_code(self.db, code)
        if link is None:
            raise LinkNotFoundError(code)
        return link

    def record_visit(self, code: str) -> str:
        """Add one to the counter of ``code`` and return its original URL.

        The URL is read before the increment commits, since the commit expires
        the loaded row.
        """
        original_url = self.get_link(code).original_url
        if not repository.increment_access_count(self.db, code):
            # Deleted between lookup and update
            raise LinkNotFoundError(code)
        return original_url

    def list_links(self, pagination: Pagination) -> List[Link]:
        return repository.list_links(self.db, offset=pagination.offset, limit=pagination.page_size)

    def delete_link(self, code: str) -> None:
        if not repository.delete_link_by_code(self.db, code):
            raise LinkNotFoundError(code)
        logger.info("Deleted link %s", code)
