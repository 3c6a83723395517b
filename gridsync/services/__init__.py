"""Services: artwork sync and the per-user pipeline."""

from .artwork_service import ArtworkService
from .sync_service import SyncService

__all__ = ["ArtworkService", "SyncService"]
