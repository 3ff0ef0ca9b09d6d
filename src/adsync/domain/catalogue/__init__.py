"""Built-in ad type catalogue, one module per platform."""

from .facebook import FACEBOOK_AD_TYPES
from .google import GOOGLE_AD_TYPES
from .reddit import REDDIT_AD_TYPES

BUILTIN_AD_TYPES = (*GOOGLE_AD_TYPES, *FACEBOOK_AD_TYPES, *REDDIT_AD_TYPES)

__all__ = ["BUILTIN_AD_TYPES", "FACEBOOK_AD_TYPES", "GOOGLE_AD_TYPES", "REDDIT_AD_TYPES"]
