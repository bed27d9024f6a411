"""
Schemas for the add-on catalog.

The catalog is static configuration: a fixed, ordered list of add-on
descriptors that is handed to the orchestrator when it is constructed.
"""

from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modbundle.archive.remapper import validate_addon_id
from modbundle.core.exceptions import CatalogError

ALL_BRANDS = "All"


class AddonDescriptor(BaseModel):
    """One independently hosted add-on archive."""
    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    name: str = ""
    description: str = ""
    brands: FrozenSet[str] = Field(default_factory=frozenset)  # empty = every brand
    conflicts: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        return validate_addon_id(value)

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def is_compatible(self, brand: Optional[str]) -> bool:
        if not brand or brand == ALL_BRANDS or not self.brands:
            return True
        return brand in self.brands


class AddonCatalog(BaseModel):
    """Ordered, immutable set of add-on descriptors."""
    model_config = ConfigDict(frozen=True)

    addons: List[AddonDescriptor] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ids(self) -> "AddonCatalog":
        seen = set()
        for addon in self.addons:
            if addon.id in seen:
                raise ValueError(f"Duplicate add-on id '{addon.id}'")
            seen.add(addon.id)
        for addon in self.addons:
            unknown = addon.conflicts - seen
            if unknown:
                raise ValueError(f"Add-on '{addon.id}' conflicts with unknown ids: {sorted(unknown)}")
        return self

    def by_id(self) -> Dict[str, AddonDescriptor]:
        return {addon.id: addon for addon in self.addons}

    def get(self, addon_id: str) -> Optional[AddonDescriptor]:
        return self.by_id().get(addon_id)

    def brands(self) -> List[str]:
        """All brand tags used in the catalog, sorted."""
        tags = set()
        for addon in self.addons:
            tags.update(addon.brands)
        return sorted(tags)

    def compatible_with(self, brand: Optional[str]) -> List[AddonDescriptor]:
        return [addon for addon in self.addons if addon.is_compatible(brand)]

    def select(self, addon_ids: List[str], brand: Optional[str] = None) -> List[AddonDescriptor]:
        """
        Resolve requested ids to descriptors, in catalog order.

        Raises:
            CatalogError: unknown id, brand mismatch, or two conflicting add-ons
        """
        index = self.by_id()
        requested = set(addon_ids)

        unknown = [addon_id for addon_id in addon_ids if addon_id not in index]
        if unknown:
            raise CatalogError(f"Unknown add-on(s): {', '.join(unknown)}")

        selected = [addon for addon in self.addons if addon.id in requested]

        incompatible = [addon.id for addon in selected if not addon.is_compatible(brand)]
        if incompatible:
            raise CatalogError(f"Add-on(s) not available for {brand}: {', '.join(incompatible)}")

        for addon in selected:
            clash = sorted((addon.conflicts & requested) - {addon.id})
            if clash:
                raise CatalogError(f"Add-on '{addon.id}' cannot be combined with: {', '.join(clash)}")

        return selected
