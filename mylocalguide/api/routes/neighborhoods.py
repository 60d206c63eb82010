"""Neighborhood resolution routes."""

from fastapi import APIRouter, Depends

from mylocalguide.api.deps import get_resolver
from mylocalguide.api.schemas import NeighborhoodResponse, ResolutionResponse, ResolveRequest
from mylocalguide.data.resolver import NeighborhoodResolver
from mylocalguide.models.neighborhood import VenueAddressInput

router = APIRouter(prefix="/api/v1/neighborhoods", tags=["neighborhoods"])


@router.post("/resolve", response_model=ResolutionResponse)
async def resolve_neighborhood(
    req: ResolveRequest,
    resolver: NeighborhoodResolver = Depends(get_resolver),
):
    """Resolve a venue name and address to a neighborhood."""
    result = await resolver.resolve_venue(VenueAddressInput(req.name, req.address))
    return ResolutionResponse(**result.as_dict())


@router.get("", response_model=list[NeighborhoodResponse])
async def list_neighborhoods(resolver: NeighborhoodResolver = Depends(get_resolver)):
    return [
        NeighborhoodResponse(name=n.name, slug=n.slug, description=n.description)
        for n in resolver.rules.neighborhoods
    ]
