"""Pydantic models for tunnel data crossing the JSON boundary."""

from tunnelview.models.tunnel import LocationModel, TunnelBatchModel, TunnelInfoModel

__all__ = ["LocationModel", "TunnelInfoModel", "TunnelBatchModel"]
