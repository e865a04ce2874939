import logging
from datetime import datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["status"])


@router.get("/health")
def health(request: Request):
    """Liveness plus a round trip to the words database."""
    database = request.app.state.database
    payload = {"time": datetime.utcnow().isoformat() + "Z"}

    try:
        db = database.session()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        return JSONResponse({"status": "degraded", "database": "unreachable", **payload}, status_code=503)

    return {"status": "ok", "database": "ok", **payload}
