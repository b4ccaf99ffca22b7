from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.Connection import database
from app.services.export import CsvExporter
from app.services.shortener import LinkService
from app.services.storage import ObjectStorage


def get_storage(request: Request) -> ObjectStorage:
    """The process-wide storage client created at startup."""
    return request.app.state.storage


def get_link_service(db: Session = Depends(database.get_db)) -> LinkService:
    return LinkService(db, settings.base_url, settings.base_host)


def get_csv_exporter(
    db: Session = Depends(database.get_db),
    storage: ObjectStorage = Depends(get_storage),
) -> CsvExporter:
    return CsvExporter(db, storage, settings.base_url)
