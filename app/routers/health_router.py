# /app/routers/health_router.py

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from ..db.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="Liveness Probe")
def health():
    return {"status": "ok"}


@router.get("/ready", summary="Readiness Probe")
def ready(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Readiness check failed: database unreachable", exc_info=True)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "not_ready", "db": "down"})
    return {"status": "ready", "db": "up"}
