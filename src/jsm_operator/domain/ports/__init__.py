"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogGateway
from .store import ResourceStore

__all__ = ["CatalogGateway", "ResourceStore"]
