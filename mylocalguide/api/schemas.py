"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field


# ---- Request schemas ----

class ResolveRequest(BaseModel):
    name: str = ""
    address: str = Field("", description="Free-text street address")


class ClassifyRequest(BaseModel):
    name: str = ""
    address: str = ""
    tags: list[str] = Field(default_factory=list, description="Source category titles or place types")


class RemapRequest(BaseModel):
    confirm: bool = False
    test_mode: bool = False


# ---- Response schemas ----

class ResolutionResponse(BaseModel):
    neighborhood: str
    confidence: str
    method: str


class NeighborhoodResponse(BaseModel):
    name: str
    slug: str
    description: str


class ClassifyResponse(BaseModel):
    category: str


class RemapWarningResponse(BaseModel):
    warning: str
    layers: list[str]
    instructions: str


class RemapResponse(BaseModel):
    success: bool = True
    message: str
    report: dict


class RecategorizeResponse(BaseModel):
    processed: int
    recategorized: int
    unchanged: int
    failed: int
    by_category: dict[str, int]


class VenueStatsResponse(BaseModel):
    total: int
    unmapped: int
    by_category: dict[str, int]
