from .hierarchy import (
    AdDefinition,
    AdGroupDefinition,
    CampaignBudget,
    CampaignDefinition,
    DataColumn,
    SyncPreviewRequest,
)
from .preview import (
    FallbackAdEntry,
    PreviewBreakdown,
    SkippedAdEntry,
    SyncPreview,
    ValidAdEntry,
)

__all__ = [
    "AdDefinition",
    "AdGroupDefinition",
    "CampaignBudget",
    "CampaignDefinition",
    "DataColumn",
    "SyncPreviewRequest",
    "FallbackAdEntry",
    "PreviewBreakdown",
    "SkippedAdEntry",
    "SyncPreview",
    "ValidAdEntry",
]
