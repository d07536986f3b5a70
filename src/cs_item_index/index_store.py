"""Read-only store of per-catalog indexes."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .index_builder import empty_index
from .item_mapping import wear_conditions
from .models import BaseItem, CategoryIndex, RawItemBase, Selection, SkinItem, Variant
from .preprocessor import type_name
from .query_engine import search

DEFAULT_ALIASES = {"liquids": "skins"}


def get_variant(base_item: BaseItem, variant: Variant | str) -> RawItemBase | None:
    """Return the catalog entry for one variant of a base item, if present."""
    try:
        tag = Variant(variant)
    except ValueError:
        return None
    return base_item.variants.get(tag)


def _wear_for(base_item: BaseItem, item: RawItemBase) -> list[str]:
    # Variants of one skin share a float range; not every entry carries it.
    for raw in (item, *base_item.variants.values()):
        if isinstance(raw, SkinItem):
            conditions = wear_conditions(raw)
            if conditions:
                return conditions
    return []


def select_variant(
    base_item: BaseItem, variant: Variant | str = Variant.NORMAL
) -> Selection | None:
    """Pick a variant of a base item, falling back to normal, then to the first one.

    Skins also report the wear conditions their float range covers, taken
    from any variant that carries one.
    """
    item = get_variant(base_item, variant)
    selected = variant
    if item is None:
        item = base_item.variants.get(Variant.NORMAL)
        selected = Variant.NORMAL
    if item is None:
        if not base_item.variants:
            return None
        selected, item = next(iter(base_item.variants.items()))

    return Selection(
        item=item,
        base_name=base_item.base_name,
        selected_variant=Variant(selected),
        has_stattrak=base_item.has_stattrak,
        has_souvenir=base_item.has_souvenir,
        wear_conditions=_wear_for(base_item, item),
    )


class CategoryIndexStore:
    """Holds one CategoryIndex per catalog type.

    The store is built once from loaded catalogs and never mutated, so it
    can be shared between readers without locking.
    """

    def __init__(
        self,
        indexes: Mapping[str, CategoryIndex] | None = None,
        aliases: Mapping[str, str] | None = None,
        failures: Mapping[str, str] | None = None,
    ):
        """Initialize the store.

        Args:
            indexes: Category indexes keyed by catalog type
            aliases: Extra type aliases, merged over the defaults
            failures: Error messages for catalogs that failed to load
        """
        merged_aliases = dict(DEFAULT_ALIASES)
        for alias, target in (aliases or {}).items():
            merged_aliases[type_name(alias)] = type_name(target)

        self._indexes = MappingProxyType(
            {type_name(item_type): index for item_type, index in (indexes or {}).items()}
        )
        self._aliases = MappingProxyType(merged_aliases)
        self._failures = MappingProxyType(dict(failures or {}))

    @property
    def aliases(self) -> Mapping[str, str]:
        """Get the type alias table."""
        return self._aliases

    @property
    def failures(self) -> Mapping[str, str]:
        """Get load errors keyed by catalog type."""
        return self._failures

    def types(self) -> list[str]:
        """List the catalog types held by the store."""
        return list(self._indexes)

    def resolve_type(self, item_type: str) -> str:
        """Resolve a type name through the alias table."""
        name = type_name(item_type)
        return self._aliases.get(name, name)

    def get_index_for_type(self, item_type: str) -> CategoryIndex:
        """Get the index for a catalog type, or an empty one if unknown."""
        resolved = self.resolve_type(item_type)
        index = self._indexes.get(resolved)
        return index if index is not None else empty_index(resolved)

    def get_items_for_type(self, item_type: str) -> list[BaseItem]:
        """Get all base items of a catalog type in catalog order."""
        return list(self.get_index_for_type(item_type).items)

    def search(
        self,
        item_type: str,
        query: str | None,
        limit: int | None = None,
        exclude_special: bool = False,
    ) -> list[BaseItem]:
        """Search one catalog type.

        Args:
            item_type: Catalog type or alias
            query: Free-text query
            limit: Maximum number of results
            exclude_special: Drop knives and gloves

        Returns:
            Matching base items in catalog order
        """
        return search(
            self.get_index_for_type(item_type),
            query,
            limit=limit,
            exclude_special=exclude_special,
        )

    def get_variant(self, base_item: BaseItem, variant: Variant | str) -> RawItemBase | None:
        """Return the catalog entry for one variant of a base item, if present."""
        return get_variant(base_item, variant)

    def select_variant(
        self, base_item: BaseItem, variant: Variant | str = Variant.NORMAL
    ) -> Selection | None:
        """Pick a variant of a base item for a caller."""
        return select_variant(base_item, variant)

    def stats(self) -> dict[str, dict[str, Any]]:
        """Summarize item and token counts per catalog type."""
        summary = {}
        for item_type, index in self._indexes.items():
            summary[item_type] = {
                "base_items": len(index.items),
                "entries": sum(len(item.variants) for item in index.items),
                "tokens": len(index.postings),
                "error": self._failures.get(item_type),
            }
        return summary
