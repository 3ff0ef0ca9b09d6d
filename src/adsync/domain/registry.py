"""AdTypeRegistry: lookup table of ad type definitions keyed by (platform, id)."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .ad_types import AdCategory, AdTypeDefinition
from .catalogue import BUILTIN_AD_TYPES

_LOGGER = logging.getLogger("adsync.registry")


class AdTypeRegistry:
    """Holds ad type definitions; one instance per host process, injected where needed."""

    def __init__(self, definitions: Iterable[AdTypeDefinition] | None = None) -> None:
        self._types: dict[tuple[str, str], AdTypeDefinition] = {}
        self._initialized = False
        for definition in definitions or ():
            self.register(definition)

    def register(self, definition: AdTypeDefinition) -> None:
        """Insert or overwrite by (platform, id); last write wins."""
        self._types[definition.key] = definition

    def get(self, platform: str, ad_type_id: str) -> AdTypeDefinition | None:
        return self._types.get((platform, ad_type_id))

    def get_by_platform(self, platform: str) -> list[AdTypeDefinition]:
        return [d for d in self._types.values() if d.platform == platform]

    def get_by_category(self, category: AdCategory) -> list[AdTypeDefinition]:
        return [d for d in self._types.values() if d.category == category]

    def get_paid_types(self, platform: str) -> list[AdTypeDefinition]:
        return [d for d in self.get_by_platform(platform) if d.category == "paid"]

    def get_organic_types(self, platform: str) -> list[AdTypeDefinition]:
        return [d for d in self.get_by_platform(platform) if d.category == "organic"]

    def get_promoted_types(self, platform: str) -> list[AdTypeDefinition]:
        return [d for d in self.get_by_platform(platform) if d.category == "promoted"]

    def all(self) -> list[AdTypeDefinition]:
        return list(self._types.values())

    @property
    def platforms(self) -> list[str]:
        """Platforms with at least one registered ad type, in registration order."""
        seen: list[str] = []
        for platform, _ in self._types:
            if platform not in seen:
                seen.append(platform)
        return seen

    def clear(self) -> None:
        self._types.clear()
        self._initialized = False

    def initialize(self, reset: bool = False) -> AdTypeRegistry:
        """Register the built-in catalogue. Safe to call repeatedly.

        With ``reset=True`` the registry is cleared first, dropping any custom
        registrations as well.
        """
        if reset:
            self.clear()
        if self._initialized:
            return self
        for definition in BUILTIN_AD_TYPES:
            self.register(definition)
        self._initialized = True
        _LOGGER.debug("ad_type_registry_initialized", extra={"ad_types": len(self._types)})
        return self

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __iter__(self) -> Iterator[AdTypeDefinition]:
        return iter(list(self._types.values()))
