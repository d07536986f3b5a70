"""Tests for the category index store."""

import pytest

from cs_item_index.index_builder import build_category_index
from cs_item_index.index_store import CategoryIndexStore, get_variant, select_variant
from cs_item_index.models import Variant


class TestLookup:
    """Tests for index and item lookup."""

    def test_get_items_for_type(self, store):
        """Items come back in catalog order."""
        items = store.get_items_for_type("skins")
        assert [item.index for item in items] == list(range(5))

    def test_liquids_alias(self, store):
        """'liquids' resolves to skins."""
        assert store.get_index_for_type("liquids") is store.get_index_for_type("skins")
        assert store.resolve_type("Liquids") == "skins"

    def test_custom_alias(self, store, skins_payload):
        """Extra aliases are merged over the defaults."""
        aliased = CategoryIndexStore(
            {"skins": store.get_index_for_type("skins")}, aliases={"Weapons": "Skins"}
        )
        assert aliased.resolve_type("weapons") == "skins"
        assert aliased.resolve_type("liquids") == "skins"

    def test_unknown_type_is_empty(self, store):
        """Unknown types give an empty index, not an error."""
        index = store.get_index_for_type("music_kits")
        assert index.is_empty
        assert store.get_items_for_type("music_kits") == []
        assert store.search("music_kits", "anything") == []

    def test_types(self, store):
        """Store lists its catalog types."""
        assert store.types() == ["skins", "stickers", "cases"]

    def test_store_is_read_only(self, store):
        """The index mapping cannot be modified."""
        with pytest.raises(TypeError):
            store._indexes["skins"] = None


class TestStoreSearch:
    """Tests for searching through the store."""

    def test_search_by_type(self, store):
        """Search runs against the requested type."""
        results = store.search("stickers", "natus kato")
        assert [item.base_name for item in results] == ["Sticker | Natus Vincere | Katowice 2014"]

    def test_search_through_alias(self, store):
        """Search accepts type aliases."""
        results = store.search("liquids", "ak red")
        assert [item.base_name for item in results] == ["AK-47 | Redline"]

    def test_search_options(self, store):
        """Limit and special-item exclusion are passed through."""
        assert len(store.search("skins", "", limit=3)) == 3
        assert len(store.search("skins", "", exclude_special=True)) == 4


class TestVariants:
    """Tests for variant lookup and selection."""

    def test_get_variant(self, store):
        """A present variant returns its catalog entry."""
        redline = store.get_items_for_type("skins")[0]
        entry = store.get_variant(redline, Variant.STATTRAK)
        assert entry.name == "StatTrak™ AK-47 | Redline"
        assert get_variant(redline, "normal").name == "AK-47 | Redline"

    def test_get_missing_variant(self, store):
        """Absent or unknown variants return None."""
        redline = store.get_items_for_type("skins")[0]
        assert store.get_variant(redline, Variant.SOUVENIR) is None
        assert store.get_variant(redline, "golden") is None

    def test_select_requested_variant(self, store):
        """Selection uses the requested variant when available."""
        dlore = store.get_items_for_type("skins")[1]
        selection = store.select_variant(dlore, "souvenir")
        assert selection.selected_variant == Variant.SOUVENIR
        assert selection.item.name == "Souvenir AWP | Dragon Lore"
        assert selection.has_souvenir is True
        assert selection.has_stattrak is False
        assert selection.base_name == "AWP | Dragon Lore"

    def test_select_falls_back_to_normal(self, store):
        """Missing variants fall back to the normal one."""
        bloodsport = store.get_items_for_type("skins")[2]
        selection = select_variant(bloodsport, Variant.STATTRAK)
        assert selection.selected_variant == Variant.NORMAL
        assert selection.item.name == "AK-47 | Bloodsport"

    def test_select_falls_back_to_first(self):
        """Items without a normal variant fall back to the first one."""
        index = build_category_index("skins", [{"name": "StatTrak™ Music Kit Box"}])
        only_stattrak = index.items[0]
        selection = select_variant(only_stattrak, Variant.SOUVENIR)
        assert selection.selected_variant == Variant.STATTRAK

    def test_selection_wear_conditions(self, store):
        """Skin selections list the wear conditions of the float range."""
        skins = store.get_items_for_type("skins")
        glock = store.select_variant(skins[4])
        assert glock.wear_conditions == ["Factory New", "Minimal Wear"]

        # The StatTrak entry has no floats of its own
        redline = store.select_variant(skins[0], Variant.STATTRAK)
        assert redline.wear_conditions == [
            "Minimal Wear",
            "Field-Tested",
            "Well-Worn",
            "Battle-Scarred",
        ]

    def test_selection_without_wear(self, store):
        """Entries without a float range report no wear conditions."""
        karambit = store.get_items_for_type("skins")[3]
        sticker = store.get_items_for_type("stickers")[0]
        assert store.select_variant(karambit).wear_conditions == []
        assert store.select_variant(sticker).wear_conditions == []


class TestStats:
    """Tests for store statistics."""

    def test_stats(self, store):
        """Stats count base items, entries and tokens."""
        stats = store.stats()
        assert stats["skins"]["base_items"] == 5
        assert stats["skins"]["entries"] == 7
        assert stats["skins"]["tokens"] > 0
        assert stats["skins"]["error"] is None

    def test_failures_in_stats(self, store):
        """Load failures are reported per type."""
        failed = CategoryIndexStore(
            {"skins": store.get_index_for_type("skins")}, failures={"skins": "timed out"}
        )
        assert failed.failures == {"skins": "timed out"}
        assert failed.stats()["skins"]["error"] == "timed out"
