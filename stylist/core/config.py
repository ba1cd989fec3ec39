from functools import lru_cache
from typing import Literal
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "StylistAI"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"
    ALLOWED_ORIGINS: str = ""  # CSV

    # Mongo (empty URI disables the catalog backend)
    MONGO_URI: str = ""
    MONGO_DB: str = "storefront"
    PRODUCTS_COLLECTION: str = "products"

    # Redis (empty URL falls back to in-process sessions)
    REDIS_URL: str = ""

    # Chat sessions
    session_ttl: int = 2 * 3600               # 2 hours of inactivity
    session_prefix: str = "chat"              # redis key namespace

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_CHAT_MODEL: str = "gpt-4o-mini"
    openai_timeout_s: float = 20.0            # hard cap per completion call
    openai_temperature: float = 0.7
    openai_max_tokens: int = 400

    # Outfit engine
    outfit_catalog_size: int = 50             # catalog snapshot per request

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True, extra="ignore")

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
