from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from typing import Any, List, Optional
import logging

from app.api.deps import get_csv_exporter, get_link_service
from app.api.errors import validation_error_response
from app.core.exceptions import (
    CodeConflictError,
    ExportFailedError,
    LinkNotFoundError,
    LinkStorageError,
    LinkValidationError,
    NoLinksToExportError,
)
from app.db.Models.models import Link
from app.schemas import CsvExportResponse, LinkCreatedResponse, LinkResponse, VisitResponse
from app.services.export import CsvExporter
from app.services.shortener import LinkService
from app.services.validation import validate_create_link, validate_pagination

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/links", tags=["links"])


def to_response(service: LinkService, link: Link) -> LinkResponse:
    return LinkResponse(
        id=link.id,
        code=link.code,
        original_url=link.original_url,
        access_count=link.access_count,
        created_at=link.created_at,
        short_url=service.short_url(link.code),
    )


@router.post("", response_model=LinkCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_link_endpoint(payload: Any = Body(None), service: LinkService = Depends(get_link_service)):
    result = validate_create_link(payload)
    if not result.ok:
        return validation_error_response(result.errors)

    try:
        link = service.create_link(result.value)
    except LinkValidationError as e:
        return validation_error_response(e.errors)
    except CodeConflictError as e:
        logger.warning(f"Create rejected, code already exists: {e.code}")
        raise HTTPException(status_code=400, detail=str(e))
    except LinkStorageError:
        raise HTTPException(status_code=500, detail="Internal server error")

    return LinkCreatedResponse(id=link.id, code=link.code, short_url=service.short_url(link.code))


@router.get("", response_model=List[LinkResponse])
def list_links_endpoint(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    service: LinkService = Depends(get_link_service),
):
    result = validate_pagination(page, page_size)
    if not result.ok:
        return validation_error_response(result.errors, detail="Invalid pagination parameters")
    return [to_response(service, link) for link in service.list_links(result.value)]


@router.post("/export/csv", response_model=CsvExportResponse, status_code=status.HTTP_201_CREATED)
def export_csv_endpoint(exporter: CsvExporter = Depends(get_csv_exporter)):
    try:
        csv_url = exporter.export()
    except NoLinksToExportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExportFailedError:
        raise HTTPException(status_code=500, detail="Failed to export CSV")
    return CsvExportResponse(csv_url=csv_url)


@router.get("/{code}", response_model=LinkResponse)
def get_link_endpoint(code: str, service: LinkService = Depends(get_link_service)):
    try:
        link = service.get_link(code)
    except LinkNotFoundError:
        logger.warning(f"Lookup 404: Short code not found: {code}")
        raise HTTPException(status_code=404, detail="Link not found")
    return to_response(service, link)


@router.post("/{code}/visit", response_model=VisitResponse)
def visit_link_endpoint(code: str, service: LinkService = Depends(get_link_service)):
    try:
        service.record_visit(code)
    except LinkNotFoundError:
        logger.warning(f"Visit 404: Short code not found: {code}")
        raise HTTPException(status_code=404, detail="Link not found")
    return VisitResponse(success=True)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_link_endpoint(code: str, service: LinkService = Depends(get_link_service)):
    try:
        service.delete_link(code)
    except LinkNotFoundError:
        raise HTTPException(status_code=404, detail="Link not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
