# stylist/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from stylist.db import mongo, redis as r
from stylist.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Mongo holds the catalog (required when a URI is configured)
    if settings.MONGO_URI:
        try:
            await mongo.connect()
            logger.info("✅ Mongo connected")
        except Exception as e:
            logger.error(f"❌ Mongo connection failed: {e}")
            raise
    else:
        logger.warning("⚠️ No MONGO_URI provided, skipping Mongo connection")

    # Redis is optional: chat sessions fall back to process memory
    if settings.REDIS_URL:
        try:
            await r.connect()
            logger.info("✅ Redis connected")
        except Exception as e:
            logger.warning(f"⚠️ Redis connection failed (ignored): {e}")
    else:
        logger.warning("⚠️ No REDIS_URL provided, chat sessions stay in process memory")

    # Application runs
    yield

    # --- Shutdown ---
    try:
        if settings.REDIS_URL:
            await r.disconnect()
            logger.info("🔌 Redis disconnected")
    except Exception as e:
        logger.warning(f"Redis disconnect failed: {e}")

    try:
        if settings.MONGO_URI:
            await mongo.disconnect()
            logger.info("🔌 Mongo disconnected")
    except Exception as e:
        logger.warning(f"Mongo disconnect failed: {e}")
