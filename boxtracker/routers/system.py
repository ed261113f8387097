from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boxtracker.db import get_db
from boxtracker.infra.logging_config import get_logger

logger = get_logger("system")

router = APIRouter(tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> JSONResponse:
    """Report API and database reachability."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check database error: %s", e)
        return JSONResponse(
            status_code=503, content={"status": "degraded", "database": "error"}
        )
    return JSONResponse(content={"status": "healthy", "database": "connected"})
