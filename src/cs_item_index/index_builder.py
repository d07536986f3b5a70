"""Inverted token index construction."""

import logging
from collections.abc import Iterable
from typing import Any

from .models import BaseItem, CatalogType, CategoryIndex
from .preprocessor import preprocess_catalog, type_name

logger = logging.getLogger(__name__)


def build_postings(items: Iterable[BaseItem], field: str = "tokens") -> dict[str, list[int]]:
    """Map each token to the ascending indices of the base items holding it.

    Args:
        items: Base items in array order
        field: Token set attribute to index, ``tokens`` or ``match_tokens``

    Returns:
        Token postings
    """
    postings: dict[str, list[int]] = {}
    for item in items:
        for token in getattr(item, field):
            postings.setdefault(token, []).append(item.index)
    return postings


def empty_index(item_type: CatalogType | str) -> CategoryIndex:
    """Create an index with no items."""
    return CategoryIndex(item_type=type_name(item_type))


def build_category_index(item_type: CatalogType | str, payload: Any) -> CategoryIndex:
    """Preprocess a catalog payload and index it.

    Args:
        item_type: Catalog type of the payload
        payload: Decoded JSON array of catalog entries, or None

    Returns:
        CategoryIndex for the catalog type
    """
    items = preprocess_catalog(item_type, payload)
    index = CategoryIndex(
        item_type=type_name(item_type),
        items=items,
        postings=build_postings(items),
        match_postings=build_postings(items, "match_tokens"),
    )
    logger.debug(
        "Indexed %d %s base items over %d tokens",
        len(items),
        index.item_type,
        len(index.postings),
    )
    return index
