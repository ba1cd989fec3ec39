# stylist/api/deps.py
from fastapi import Depends, Request

from stylist.core.config import get_settings
from stylist.db import mongo
from stylist.db.redis import get_redis
from stylist.domain.repositories.product_repo import ProductRepo, UnavailableCatalog
from stylist.domain.repositories.session_repo import RedisSessionRepo
from stylist.domain.services.completion_svc import OpenAICompleter

# Dependency for injecting the Redis client into endpoints/services
def redis_dep():
    return get_redis()

# Catalog query collaborator over the products collection.
# Without Mongo every query raises, so chat answers with an apology and outfits with 503.
def catalog_dep():
    if not mongo.is_connected():
        return UnavailableCatalog()
    return ProductRepo(mongo.get_db(), collection_name=get_settings().PRODUCTS_COLLECTION)

# Redis-backed sessions when available, else the app's in-process store
def sessions_dep(request: Request, redis = Depends(redis_dep)):
    if redis is not None:
        settings = get_settings()
        return RedisSessionRepo(redis, key_prefix=settings.session_prefix, ttl=settings.session_ttl)
    return request.app.state.local_sessions

def completer_dep():
    return OpenAICompleter(get_settings())
