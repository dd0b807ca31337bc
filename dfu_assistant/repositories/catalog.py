from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from ..domain.models import CatalogEntry, Variant
from ..data.variants import VARIANT_CATALOG


# The Interface
class ConfigurationCatalog(ABC):
    """
    Defines how the application looks up deployment variants.
    The set of variants is closed; implementations only decide where
    the entries come from.
    """

    @abstractmethod
    def entries(self) -> List[CatalogEntry]:
        """All entries, in display (and detection) order."""
        pass

    @abstractmethod
    def get(self, variant: Variant) -> CatalogEntry:
        """
        Retrieves the entry for a variant.
        Raises ValueError if not found.
        """
        pass

    def resolve(self, variant: Variant) -> str:
        """Canonical integration path for a variant. Never empty."""
        return self.get(variant).integration_path

    def match_selection(self, text: str) -> Optional[CatalogEntry]:
        """
        Interprets a user's reply to the variant list: either the 1-based
        position shown in the list, the variant key or its title.
        """
        choice = text.strip().lower()
        if not choice:
            return None

        entries = self.entries()
        if choice.isdigit():
            index = int(choice) - 1
            if 0 <= index < len(entries):
                return entries[index]
            return None

        for entry in entries:
            if choice in (entry.variant.value, entry.title.lower()):
                return entry
        return None

    def detection_rules(self) -> List[Tuple[str, Variant]]:
        """Flattened (glob, variant) pairs in first-match-wins order."""
        return [
            (pattern, entry.variant)
            for entry in self.entries()
            for pattern in entry.detection_globs
        ]


class StaticConfigurationCatalog(ConfigurationCatalog):
    """
    Serves the variants defined in data/variants.py.
    """

    def __init__(self, entries: Tuple[CatalogEntry, ...] = VARIANT_CATALOG):
        self._entries = list(entries)
        # Index for O(1) lookup
        self._index: Dict[Variant, CatalogEntry] = {e.variant: e for e in self._entries}

    def entries(self) -> List[CatalogEntry]:
        return list(self._entries)

    def get(self, variant: Variant) -> CatalogEntry:
        if variant not in self._index:
            raise ValueError(f"Variant '{variant}' not found.")
        return self._index[variant]
