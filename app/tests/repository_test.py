from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import CodeConflictError
from app.db import repository
from app.db.Models.models import Base


@pytest.fixture
def session_factory(tmp_path):
    """File-backed SQLite so each thread gets its own connection."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'links.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_insert_conflict_leaves_single_row(db_session):
    repository.insert_link(db_session, "same", "https://example.com/1")

    with pytest.raises(CodeConflictError):
        repository.insert_link(db_session, "same", "https://example.com/2")

    links = repository.list_links(db_session)
    assert [(l.code, l.original_url) for l in links] == [("same", "https://example.com/1")]


def test_increment_missing_code(db_session):
    assert repository.increment_access_count(db_session, "missing") == 0


def test_delete_link_by_code(db_session):
    repository.insert_link(db_session, "bye", "https://example.com")
    assert repository.delete_link_by_code(db_session, "bye") is True
    assert repository.delete_link_by_code(db_session, "bye") is False
    assert repository.get_link_by_code(db_session, "bye") is None


def test_concurrent_increments_are_not_lost(session_factory):
    with session_factory() as db:
        repository.insert_link(db, "hot", "https://example.com/hot")

    def bump(_):
        with session_factory() as db:
            return repository.increment_access_count(db, "hot")

    workers, hits = 8, 200
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(bump, range(hits)))

    assert results == [1] * hits
    with session_factory() as db:
        assert repository.get_link_by_code(db, "hot").access_count == hits
