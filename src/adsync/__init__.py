"""adsync: ad-field validation and sync-classification engine."""

from .models import (
    AdDefinition,
    AdGroupDefinition,
    CampaignDefinition,
    SyncPreview,
    SyncPreviewRequest,
)

__version__ = "0.1.0"
__all__ = [
    "AdDefinition",
    "AdGroupDefinition",
    "CampaignDefinition",
    "SyncPreview",
    "SyncPreviewRequest",
]
