"""Venue routes: classification, remapping, category fixes and stats."""

from fastapi import APIRouter, Depends, HTTPException

from mylocalguide.api.deps import get_repository, get_resolver
from mylocalguide.api.schemas import (
    ClassifyRequest,
    ClassifyResponse,
    RecategorizeResponse,
    RemapRequest,
    RemapResponse,
    RemapWarningResponse,
    VenueStatsResponse,
)
from mylocalguide.config import settings
from mylocalguide.data.recategorize import recategorize_venues
from mylocalguide.data.remap import remap_venues
from mylocalguide.data.repository import VenueRepository
from mylocalguide.data.resolver import NeighborhoodResolver
from mylocalguide.engine.categorizer import classify_venue

router = APIRouter(prefix="/api/v1/venues", tags=["venues"])

RESOLUTION_LAYERS = [
    "Zip code mapping (high confidence when the zip has one neighborhood)",
    "Street address ranges (high confidence)",
    "Landmark and venue-name keywords (medium confidence)",
    "Secondary address keywords (medium confidence)",
    "External geocoding, when configured (medium confidence)",
    "Default neighborhood fallback (low confidence)",
]


@router.post("/classify", response_model=ClassifyResponse)
async def classify(req: ClassifyRequest):
    return ClassifyResponse(category=classify_venue(req.tags, req.name, req.address))


@router.post("/remap", response_model=RemapResponse | RemapWarningResponse)
async def remap(
    req: RemapRequest,
    repository: VenueRepository = Depends(get_repository),
    resolver: NeighborhoodResolver = Depends(get_resolver),
):
    """Re-resolve every stored venue. Requires explicit confirmation."""
    if not req.confirm:
        return RemapWarningResponse(
            warning=f"This re-resolves the neighborhood of ALL venues using {len(RESOLUTION_LAYERS)} layers",
            layers=RESOLUTION_LAYERS,
            instructions='Send {"confirm": true} to proceed',
        )

    city = await repository.get_city(settings.city_name)
    if city is None:
        raise HTTPException(status_code=404, detail=f"City not found: {settings.city_name}")

    try:
        report = await remap_venues(repository, resolver, city, test_mode=req.test_mode)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RemapResponse(
        message="Remap test completed" if req.test_mode else "Remap completed",
        report=report.as_dict(),
    )


@router.post("/recategorize", response_model=RecategorizeResponse)
async def recategorize(repository: VenueRepository = Depends(get_repository)):
    """Re-classify venues stored as Other from their name and address."""
    city = await repository.get_city(settings.city_name)
    if city is None:
        raise HTTPException(status_code=404, detail=f"City not found: {settings.city_name}")
    report = await recategorize_venues(repository, city)
    return RecategorizeResponse(**report.as_dict())


@router.get("/stats", response_model=VenueStatsResponse)
async def stats(repository: VenueRepository = Depends(get_repository)):
    city = await repository.get_city(settings.city_name)
    if city is None:
        raise HTTPException(status_code=404, detail=f"City not found: {settings.city_name}")
    result = await repository.venue_stats(city.id)
    return VenueStatsResponse(total=result.total, unmapped=result.unmapped, by_category=result.by_category)
