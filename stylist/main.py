from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from stylist.core.config import get_settings
from stylist.core.lifespan import lifespan
from stylist.core.logging import configure_logging
from stylist.api.v1.routers.chat import router as chat_router
from stylist.api.v1.routers.health import router as health_router
from stylist.api.v1.routers.outfits import router as outfits_router
from stylist.domain.repositories.session_repo import InMemorySessionRepo


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    # used by chat routes when Redis is not configured
    app.state.local_sessions = InMemorySessionRepo()

    # ------- CORS -------
    # ALLOWED_ORIGINS is a CSV, e.g. "https://shop.example.com,https://www.shop.example.com"
    allowed_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["http://localhost:5173", "http://localhost:8080"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=86400,
    )

    # ------- Routes -------
    app.include_router(health_router)
    app.include_router(chat_router)      # conversational product discovery
    app.include_router(outfits_router)   # virtual stylist
    return app


app = create_app()
