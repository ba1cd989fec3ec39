# stylist/api/v1/routers/outfits.py
from fastapi import APIRouter, Depends, HTTPException
import time
import logging

from stylist.api.deps import catalog_dep, completer_dep
from stylist.api.v1.schemas.chat import OutfitsOut
from stylist.core.config import get_settings
from stylist.domain.models.outfit import OutfitRequest
from stylist.domain.services.errors import InsufficientInventory
from stylist.domain.services.outfit_svc import generate_outfits

logger = logging.getLogger(__name__)

router = APIRouter(tags=["outfits"])


@router.post("/outfits", response_model=OutfitsOut)
async def create_outfits(
    body: OutfitRequest,
    catalog = Depends(catalog_dep),
    completer = Depends(completer_dep),
):
    """
    Virtual stylist: up to 3 scored outfits for an occasion from a catalog snapshot.
    """
    logger.info("Request: outfits occasion=%s budget=%s", body.occasion, body.budget)
    start_time = time.perf_counter()

    try:
        products = await catalog.fetch_batch(get_settings().outfit_catalog_size, 0)
    except Exception as e:
        logger.error(f"Catalog fetch failed for outfits: {e}")
        raise HTTPException(status_code=503, detail="Catalog temporarily unavailable")

    try:
        outfits = await generate_outfits(products=products, request=body, completer=completer)
    except InsufficientInventory as e:
        logger.warning(f"Insufficient inventory occasion={e.occasion} available={e.available}")
        raise HTTPException(
            status_code=422,
            detail="Not enough products for this occasion. Please try a different occasion.",
        )

    logger.info(
        "Response: outfits occasion=%s count=%s elapsed_time=%.4fs",
        body.occasion, len(outfits), time.perf_counter() - start_time,
    )
    return OutfitsOut(
        occasion=body.occasion,
        outfits=outfits,
        count=len(outfits),
        message=None if outfits else "Could not combine enough distinct categories; try another occasion.",
    )
