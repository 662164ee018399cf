"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel


class SubsectorResponse(BaseModel):
    """Response containing the current subsector."""

    subsectorId: str  # noqa: N815
    seed: int
    state: dict


class WorldResponse(BaseModel):
    """Response describing one hex."""

    hex: str
    world: dict | None = None
    details: dict | None = None


class FactionResponse(BaseModel):
    """Response after a faction change."""

    index: int
    faction: dict


class MapResponse(BaseModel):
    """Display primitives for every occupied hex."""

    title: str
    glyphs: list[dict]


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
