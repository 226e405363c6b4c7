"""TunnelView — live, searchable view over tunnel endpoints."""

__version__ = "0.1.0"
