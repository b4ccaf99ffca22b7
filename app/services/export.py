import csv
import io
import logging
import uuid
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ExportFailedError, NoLinksToExportError
from app.db import repository
from app.db.Models.models import Link, iso_timestamp
from app.services.storage import ObjectStorage
from app.utils.encoding import short_url_for

logger = logging.getLogger(__name__)

CSV_HEADER = ["original url", "short url", "access count", "creation date"]
CSV_CONTENT_TYPE = "text/csv"


def build_csv(links: Iterable[Link], base_url: str) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for link in links:
        writer.writerow([
            link.original_url,
            short_url_for(base_url, link.code),
            link.access_count,
            iso_timestamp(link.created_at),
        ])
    return buffer.getvalue().rstrip("\n")


def new_object_key() -> str:
    return f"{uuid.uuid4()}.csv"


class CsvExporter:
    def __init__(self, db: Session, storage: ObjectStorage, base_url: str):
        self.db = db
        self.storage = storage
        self.base_url = base_url.rstrip("/")

    def export(self) -> str:
        """Upload a snapshot of every link and return the file's public URL."""
        try:
            links: List[Link] = repository.list_links(self.db)
        except SQLAlchemyError as e:
            logger.exception("Failed to read links for export")
            raise ExportFailedError("Failed to read links") from e

        if not links:
            raise NoLinksToExportError()

        key = new_object_key()
        body = build_csv(links, self.base_url).encode("utf-8")
        self.storage.put_object(key, body, CSV_CONTENT_TYPE)

        logger.info("Exported %d links to %s", len(links), key)
        return short_url_for(self.base_url, key)
