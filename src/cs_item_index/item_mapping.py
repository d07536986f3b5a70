"""Mapping of per-category catalog JSON into item models.

Payloads arrive either in the upstream API shape, where fields such as
``rarity`` are nested ``{"name": ..., "color": ...}`` objects, or already
flattened (``rarity`` plus ``rarityColor``). Both are accepted.
"""

from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from .models import (
    CaseItem,
    CatalogType,
    GenericItem,
    RawItemBase,
    SkinItem,
    StickerItem,
)

# (short, full name, min float, max float)
WEAR_CONDITIONS = [
    ("FN", "Factory New", 0.00, 0.07),
    ("MW", "Minimal Wear", 0.07, 0.15),
    ("FT", "Field-Tested", 0.15, 0.37),
    ("WW", "Well-Worn", 0.37, 0.44),
    ("BS", "Battle-Scarred", 0.44, 1.00),
]


class MalformedItemError(ValueError):
    """Raised when a catalog entry cannot be turned into an item."""

    def __init__(self, item_type: str, reason: str):
        self.item_type = item_type
        self.reason = reason
        super().__init__(f"Malformed {item_type} item: {reason}")


def _name_of(value: Any) -> str | None:
    """Read a display name from a nested object or a plain string."""
    if isinstance(value, dict):
        value = value.get("name")
    if isinstance(value, str) and value:
        return value
    return None


def _first(payload: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _rarity_color(payload: dict[str, Any]) -> str | None:
    rarity = payload.get("rarity")
    if isinstance(rarity, dict) and rarity.get("color"):
        return str(rarity["color"])
    color = _first(payload, "rarityColor", "rarity_color")
    return str(color) if color else None


def _common(payload: dict[str, Any]) -> dict[str, Any]:
    item_id = payload.get("id")
    image = payload.get("image")
    return {
        "id": str(item_id) if item_id is not None else None,
        "name": payload["name"],
        "image": image if isinstance(image, str) else "",
        "rarity": _name_of(payload.get("rarity")),
        "rarity_color": _rarity_color(payload),
    }


def _map_skin(payload: dict[str, Any]) -> SkinItem:
    return SkinItem(
        **_common(payload),
        weapon=_name_of(payload.get("weapon")),
        category=_name_of(payload.get("category")),
        pattern=_name_of(payload.get("pattern")),
        min_float=_as_float(_first(payload, "min_float", "minFloat")),
        max_float=_as_float(_first(payload, "max_float", "maxFloat")),
        stattrak=bool(payload.get("stattrak")),
        souvenir=bool(payload.get("souvenir")),
    )


def _map_sticker(payload: dict[str, Any]) -> StickerItem:
    return StickerItem(
        **_common(payload),
        type=_name_of(payload.get("type")),
        tournament_event=_name_of(_first(payload, "tournament_event", "tournamentEvent")),
        tournament_team=_name_of(_first(payload, "tournament_team", "tournamentTeam")),
    )


def _map_case(payload: dict[str, Any]) -> CaseItem:
    return CaseItem(**_common(payload), type=_name_of(payload.get("type")) or "Case")


def _map_generic(payload: dict[str, Any]) -> GenericItem:
    return GenericItem(**_common(payload), type=_name_of(payload.get("type")))


_MAPPERS: dict[str, Callable[[dict[str, Any]], RawItemBase]] = {
    CatalogType.SKINS.value: _map_skin,
    CatalogType.STICKERS.value: _map_sticker,
    CatalogType.CASES.value: _map_case,
}


def map_raw_item(item_type: str, payload: Any) -> RawItemBase:
    """Map one catalog JSON object to its item model.

    Args:
        item_type: Catalog type the payload was loaded for
        payload: Decoded JSON object

    Returns:
        The tagged item model for the catalog type

    Raises:
        MalformedItemError: If the payload is not an object or has no name
    """
    if not isinstance(payload, dict):
        raise MalformedItemError(item_type, f"expected an object, got {type(payload).__name__}")
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedItemError(item_type, f"missing name (id={payload.get('id')!r})")

    mapper = _MAPPERS.get(item_type, _map_generic)
    try:
        return mapper(payload)
    except ValidationError as e:
        raise MalformedItemError(item_type, str(e)) from e


def wear_conditions(item: SkinItem) -> list[str]:
    """List the wear conditions a skin's float range can roll into."""
    if item.min_float is None or item.max_float is None:
        return []
    return [
        full
        for _, full, low, high in WEAR_CONDITIONS
        if item.min_float < high and item.max_float > low
    ]
