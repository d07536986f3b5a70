"""Grouping of raw catalog entries into base items with variant maps."""

import logging
from typing import Any

from .item_mapping import MalformedItemError, map_raw_item
from .models import BaseItem, CatalogType, RawItemBase, SkinItem, StickerItem
from .normalizer import BaseInfo, extract_base_info, normalize, tokenize
from .synonyms import expand_tokens

logger = logging.getLogger(__name__)

# Unit separator; never present in catalog text.
KEY_SEPARATOR = "\x1f"


def type_name(item_type: CatalogType | str) -> str:
    """Return the plain string name of a catalog type."""
    if isinstance(item_type, CatalogType):
        return item_type.value
    return str(item_type).strip().lower()


def base_key(info: BaseInfo) -> str:
    """Build the grouping key for a base item."""
    return KEY_SEPARATOR.join((info.base_name, info.category, info.pattern))


def item_metadata(item: RawItemBase) -> list[str]:
    """Build the display metadata shown next to an item."""
    if isinstance(item, SkinItem):
        fields = [item.weapon, item.category, item.pattern]
    elif isinstance(item, StickerItem):
        fields = [item.tournament_event, item.tournament_team]
        if not any(fields):
            fields = [item.type]
    else:
        fields = [getattr(item, "type", None)]
    return [value for value in fields if value]


def preprocess_catalog(item_type: CatalogType | str, payload: Any) -> list[BaseItem]:
    """Group a catalog payload into base items.

    Entries sharing base name, category and pattern become variants of one
    base item. Base items keep the order in which their key was first seen.
    When two entries map to the same key and variant, the later one wins.

    Args:
        item_type: Catalog type of the payload
        payload: Decoded JSON array of catalog entries

    Returns:
        Base items in first-seen order
    """
    item_type = type_name(item_type)
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.warning(
            "Ignoring %s payload: expected a JSON array, got %s",
            item_type,
            type(payload).__name__,
        )
        return []

    items: list[BaseItem] = []
    by_key: dict[str, BaseItem] = {}

    for position, entry in enumerate(payload):
        try:
            raw = map_raw_item(item_type, entry)
        except MalformedItemError as e:
            logger.warning("Dropping entry %d: %s", position, e)
            continue

        info = extract_base_info(raw)
        key = base_key(info)
        base = by_key.get(key)
        if base is None:
            text = " ".join((info.base_name, info.category, info.pattern))
            base = BaseItem(
                index=len(items),
                item_type=item_type,
                base_name=info.base_name,
                category=info.category,
                pattern=info.pattern,
                tokens=tokenize(normalize(text)),
                metadata=item_metadata(raw),
            )
            by_key[key] = base
            items.append(base)
        elif info.variant in base.variants:
            logger.debug(
                "Replacing %s variant of %r with entry %d",
                info.variant.value,
                info.base_name,
                position,
            )

        base.variants[info.variant] = raw

    for base in items:
        base.match_tokens = expand_tokens(base)

    return items
