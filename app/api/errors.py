from typing import List

from fastapi import status
from fastapi.responses import JSONResponse

from app.services.validation import FieldError


def validation_error_response(errors: List[FieldError], detail: str = "Validation failed") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": detail,
            "errors": [{"field": e.field, "message": e.message} for e in errors],
        },
    )
