"""Pydantic request schemas for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request to generate a subsector (new session or regenerate-all)."""

    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    worldAbundance: int | str = Field(  # noqa: N815
        default=0,
        description="World-abundance DM or preset: 'rift', 'sparse', 'nominal', 'dense', 'abundant'",
    )
    columns: int = Field(default=8, description="Grid columns")
    rows: int = Field(default=10, description="Grid rows")
    name: str | None = Field(default=None, description="Subsector name (generated if omitted)")


class RenameRequest(BaseModel):
    """Request to rename a subsector or world."""

    name: str


class RegenerateWorldRequest(BaseModel):
    """Request to regenerate one hex."""

    keepName: bool = Field(default=False, description="Keep the current world name")  # noqa: N815
    rollOccupancy: bool = Field(  # noqa: N815
        default=False, description="Roll occupancy; the hex may come back empty"
    )


class RerollFieldRequest(BaseModel):
    """Request to re-roll one attribute of a world."""

    field: str = Field(description="Attribute to re-roll, e.g. 'atmosphere' or 'bases'")


class EditFieldRequest(BaseModel):
    """Request to set one attribute of a world."""

    field: str = Field(description="World attribute name, e.g. 'population'")
    value: Any = Field(description="New value (integer, string or boolean)")


class MoveRequest(BaseModel):
    """Request to move a world to another hex."""

    to: str = Field(description="Destination hex as CCRR")


class FactionRequest(BaseModel):
    """Request to add a faction."""

    name: str
    color: str = Field(default="grey", description="Polity color name")
    worlds: list[str] = Field(default_factory=list, description="Member hexes as CCRR")


class FactionUpdateRequest(BaseModel):
    """Request to change some of a faction's attributes."""

    name: str | None = None
    color: str | None = None
    worlds: list[str] | None = None
