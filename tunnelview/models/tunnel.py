"""Tunnel models for JSON record batches."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tunnelview.kernel.location import LocationKey
from tunnelview.kernel.types import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN, Facing, TunnelBatch, TunnelInfo


class LocationModel(BaseModel):
    """Structured location, same field names as the tag codec."""

    model_config = {"extra": "forbid"}

    x: int = Field(ge=INT_MIN, le=INT_MAX)
    y: int = Field(ge=INT_MIN, le=INT_MAX)
    z: int = Field(ge=INT_MIN, le=INT_MAX)
    f: int = Field(ge=0, le=len(Facing) - 1)
    d: int = Field(ge=INT_MIN, le=INT_MAX)

    def to_key(self) -> LocationKey:
        return LocationKey(self.x, self.y, self.z, Facing(self.f), self.d)


class TunnelInfoModel(BaseModel):
    """One tunnel record as the server describes it."""

    model_config = {"extra": "forbid"}

    loc: LocationModel
    frequency: int = Field(default=0, ge=LONG_MIN, le=LONG_MAX)
    output: bool
    error: bool = False
    name: str = ""

    def to_info(self) -> TunnelInfo:
        return TunnelInfo(
            loc=self.loc.to_key(),
            frequency=self.frequency,
            output=self.output,
            error=self.error,
            name=self.name,
        )


class TunnelBatchModel(BaseModel):
    """A full or incremental update."""

    model_config = {"extra": "forbid"}

    full: bool = True
    infos: list[TunnelInfoModel] = Field(default_factory=list)

    def to_batch(self) -> TunnelBatch:
        return TunnelBatch(full=self.full, infos=[m.to_info() for m in self.infos])
