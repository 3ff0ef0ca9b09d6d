from .sync_preview_service import SyncPreviewService

__all__ = ["SyncPreviewService"]
