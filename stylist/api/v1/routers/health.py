# stylist/api/v1/routers/health.py
import time
from fastapi import APIRouter
from stylist.core.config import get_settings
from stylist.db import mongo
from stylist.db.redis import get_redis

router = APIRouter(tags=["health"])
START_TIME = time.time()

_HEALTHY = ("ok", "skipped")


@router.get("/health")
async def health():
    """
    Catalog (Mongo) is required for product answers; Redis is optional and
    reported as 'skipped' when absent. Without an OpenAI key chat degrades to apologies.
    """
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "version": settings.GIT_SHA,
        "uptime_seconds": int(time.time() - START_TIME),
    }

    if not mongo.is_connected():
        checks["catalog"] = "not configured"
    else:
        try:
            await mongo.get_db().command("ping")
            checks["catalog"] = "ok"
        except Exception as e:
            checks["catalog"] = f"error: {e}"

    r = get_redis()
    if r is None:
        checks["sessions"] = "skipped"
    else:
        try:
            await r.ping()
            checks["sessions"] = "ok"
        except Exception as e:
            checks["sessions"] = f"error: {e}"

    checks["completion"] = "ok" if settings.OPENAI_API_KEY else "no api key"

    degraded = [k for k in ("catalog", "sessions", "completion") if checks[k] not in _HEALTHY]
    return {
        "status": "degraded" if degraded else "ok",
        "degraded": degraded,
        "checks": checks,
        "timestamp": int(time.time()),
    }
