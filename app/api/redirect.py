from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
import logging

from app.api.deps import get_link_service
from app.core.exceptions import LinkNotFoundError
from app.services.shortener import LinkService

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/{code}", tags=["redirect"])
def redirect_to_url_endpoint(code: str, service: LinkService = Depends(get_link_service)):
    """
    Access the shortened URL and get redirected to the original long URL.
    Every hit adds one to the link's access count.
    """
    try:
        original_url = service.record_visit(code)
    except LinkNotFoundError:
        logger.warning(f"Redirect 404: Short code not found: {code}")
        raise HTTPException(status_code=404, detail="Link not found")

    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
