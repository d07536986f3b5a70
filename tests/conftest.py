"""Shared test fixtures for CS Item Index."""

import json

import pytest

from cs_item_index.index_builder import build_category_index
from cs_item_index.index_store import CategoryIndexStore


@pytest.fixture
def skins_payload():
    """Skins in the upstream API shape, including variant and malformed entries."""
    return [
        {
            "id": "skin-ak-redline",
            "name": "AK-47 | Redline",
            "image": "https://img.example/ak-redline.png",
            "weapon": {"id": "weapon_ak47", "name": "AK-47"},
            "category": {"id": "csgo_inventory_weapon_category_rifles", "name": "Rifles"},
            "pattern": {"id": "cu_ak47_cobra", "name": "Redline"},
            "rarity": {"id": "rarity_legendary_weapon", "name": "Classified", "color": "#d32ce6"},
            "min_float": 0.1,
            "max_float": 0.7,
            "stattrak": True,
            "souvenir": False,
        },
        {
            "id": "skin-awp-dlore",
            "name": "AWP | Dragon Lore",
            "image": "https://img.example/awp-dlore.png",
            "weapon": {"name": "AWP"},
            "category": {"name": "Sniper Rifles"},
            "pattern": {"name": "Dragon Lore"},
            "rarity": {"name": "Covert", "color": "#eb4b4b"},
            "min_float": 0.0,
            "max_float": 0.7,
            "souvenir": True,
        },
        {
            "id": "skin-ak-redline-st",
            "name": "StatTrak™ AK-47 | Redline",
            "image": "https://img.example/ak-redline-st.png",
            "weapon": {"name": "AK-47"},
            "category": {"name": "Rifles"},
            "pattern": {"name": "Redline"},
            "rarity": {"name": "Classified", "color": "#d32ce6"},
        },
        {
            "id": "skin-awp-dlore-sv",
            "name": "Souvenir AWP | Dragon Lore",
            "image": "https://img.example/awp-dlore-sv.png",
            "weapon": {"name": "AWP"},
            "category": {"name": "Sniper Rifles"},
            "pattern": {"name": "Dragon Lore"},
            "rarity": {"name": "Covert", "color": "#eb4b4b"},
        },
        {
            "id": "skin-ak-bloodsport",
            "name": "AK-47 | Bloodsport",
            "image": "https://img.example/ak-bloodsport.png",
            "weapon": {"name": "AK-47"},
            "category": {"name": "Rifles"},
            "pattern": {"name": "Bloodsport"},
            "rarity": {"name": "Covert", "color": "#eb4b4b"},
        },
        {"image": "https://img.example/nameless.png"},
        {
            "id": "skin-karambit-doppler",
            "name": "★ Karambit | Doppler",
            "image": "https://img.example/karambit.png",
            "weapon": {"name": "Karambit"},
            "category": {"name": "Knives"},
            "pattern": {"name": "Doppler"},
            "rarity": {"name": "Covert", "color": "#eb4b4b"},
            "stattrak": True,
        },
        {
            "id": "skin-glock-fade",
            "name": "Glock-18 | Fade",
            "image": "https://img.example/glock-fade.png",
            "weapon": {"name": "Glock-18"},
            "category": {"name": "Pistols"},
            "pattern": {"name": "Fade"},
            "rarity": {"name": "Restricted", "color": "#8847ff"},
            "min_float": 0.0,
            "max_float": 0.08,
        },
    ]


@pytest.fixture
def stickers_payload():
    """Stickers with and without tournament information."""
    return [
        {
            "id": "sticker-navi-kato14",
            "name": "Sticker | Natus Vincere | Katowice 2014",
            "image": "https://img.example/navi.png",
            "rarity": {"name": "High Grade", "color": "#4b69ff"},
            "tournament_event": "Katowice 2014",
            "tournament_team": "Natus Vincere",
        },
        {
            "id": "sticker-crown",
            "name": "Sticker | Crown (Foil)",
            "image": "https://img.example/crown.png",
            "type": "Other",
        },
    ]


@pytest.fixture
def cases_payload():
    """Cases in the pre-flattened shape."""
    return [
        {"id": "crate-chroma", "name": "Chroma Case", "image": "https://img.example/chroma.png"},
        {
            "id": "crate-kato14",
            "name": "EMS One 2014 Souvenir Package",
            "image": "https://img.example/ems.png",
            "type": "Souvenir",
        },
    ]


@pytest.fixture
def skins_index(skins_payload):
    """Index built from the sample skins."""
    return build_category_index("skins", skins_payload)


@pytest.fixture
def store(skins_payload, stickers_payload, cases_payload):
    """Store holding skins, stickers and cases."""
    return CategoryIndexStore(
        {
            "skins": build_category_index("skins", skins_payload),
            "stickers": build_category_index("stickers", stickers_payload),
            "cases": build_category_index("cases", cases_payload),
        }
    )


@pytest.fixture
def catalog_dir(tmp_path, skins_payload, stickers_payload, cases_payload):
    """Write the sample catalogs as JSON files."""
    data_dir = tmp_path / "catalogs"
    data_dir.mkdir()
    for name, payload in (
        ("skins", skins_payload),
        ("stickers", stickers_payload),
        ("cases", cases_payload),
    ):
        (data_dir / f"{name}.json").write_text(json.dumps(payload), encoding="utf-8")
    return data_dir
