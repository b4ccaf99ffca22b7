from fastapi import APIRouter
from app.core.config import settings
from app.db.Connection import database

router = APIRouter(tags=["health"])

# simple liveness
@router.get("/health")
def health():
    return {"status": "healthy", "service": settings.PROJECT_NAME}

# readiness: check DB connectivity
@router.get("/ready")
def readiness():
    db_ok = database.verify_database_connection()
    details = {"db": "ok" if db_ok else "error"}
    return {"ready": db_ok, "details": details}
