from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import health, links, redirect
from app.api.errors import validation_error_response
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.Connection import database
from app.db.Models import models
from app.services.storage import ObjectStorage
from app.services.validation import FieldError

logger = configure_logging(settings.LOG_LEVEL)
logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")

models.Base.metadata.create_all(bind=database.engine)
logger.info("Database models initialized/checked.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.storage = ObjectStorage.from_settings(settings)
    logger.info(f"Object storage ready (bucket={settings.STORAGE_BUCKET}).")
    yield
    logger.info("Shutting down gracefully...")
    try:
        database.engine.dispose()
    except Exception:
        logger.debug("Error disposing DB engine")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="URL shortener with access counts and CSV export",
    lifespan=lifespan,
    # Kept off the top level, which belongs to /{code}
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# /{code} catches every single-segment path, so it is registered last
app.include_router(health.router)
app.include_router(links.router)
app.include_router(redirect.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        FieldError(".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body", err.get("msg", "invalid"))
        for err in exc.errors()
    ]
    return validation_error_response(errors, detail="Malformed request")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Internal server error"})
