from typing import List, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from app.core.exceptions import CodeConflictError
from app.db.Models.models import Link

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    return "unique" in str(orig if orig is not None else exc).lower()


def get_link_by_code(db: Session, code: str) -> Optional[Link]:
    return db.query(Link).filter(Link.code == code).first()


def insert_link(db: Session, code: str, original_url: str) -> Link:
    db_link = Link(code=code, original_url=original_url)
    try:
        db.add(db_link)
        db.commit()
        db.refresh(db_link)
        return db_link
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            logger.warning("Unique constraint rejected code=%s", code)
            raise CodeConflictError(code) from e
        raise


def increment_access_count(db: Session, code: str) -> int:
    """Add one to ``access_count`` inside the database.

    The new value is computed by the UPDATE itself, so concurrent callers never
    overwrite each other. Returns the number of rows touched (0 or 1).
    """
    result = db.execute(
        update(Link)
        .where(Link.code == code)
        .values(access_count=Link.access_count + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount


def list_links(db: Session, offset: int = 0, limit: Optional[int] = None) -> List[Link]:
    query = db.query(Link).order_by(Link.created_at.desc(), Link.id.desc())
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def delete_link_by_code(db: Session, code: str) -> bool:
    deleted = db.query(Link).filter(Link.code == code).delete(synchronize_session=False)
    db.commit()
    return deleted > 0
