"""Core data models for CS Item Index."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class Variant(str, Enum):
    """Item variant tags."""

    NORMAL = "normal"
    STATTRAK = "stattrak"
    SOUVENIR = "souvenir"


class CatalogType(str, Enum):
    """Catalog types served by the index."""

    SKINS = "skins"
    CASES = "cases"
    STICKERS = "stickers"
    AGENTS = "agents"
    KEYCHAINS = "keychains"
    GRAFFITI = "graffiti"
    PATCHES = "patches"
    MUSIC_KITS = "music_kits"
    HIGHLIGHTS = "highlights"


class RawItemBase(BaseModel):
    """Fields shared by every catalog entry."""

    id: str | None = None
    name: str
    image: str = ""
    rarity: str | None = None
    rarity_color: str | None = None


class SkinItem(RawItemBase):
    """A weapon, knife or glove finish."""

    kind: Literal["skin"] = "skin"
    weapon: str | None = None
    category: str | None = None
    pattern: str | None = None
    min_float: float | None = None
    max_float: float | None = None
    stattrak: bool = False
    souvenir: bool = False


class StickerItem(RawItemBase):
    """A sticker, optionally tied to a tournament."""

    kind: Literal["sticker"] = "sticker"
    type: str | None = None
    tournament_event: str | None = None
    tournament_team: str | None = None


class CaseItem(RawItemBase):
    """A case, capsule or other container."""

    kind: Literal["case"] = "case"
    type: str = "Case"


class GenericItem(RawItemBase):
    """Agents, keychains, graffiti, patches, music kits and highlights."""

    kind: Literal["generic"] = "generic"
    type: str | None = None


RawItem = Annotated[
    SkinItem | StickerItem | CaseItem | GenericItem,
    Field(discriminator="kind"),
]


class BaseItem(BaseModel):
    """A de-duplicated logical item grouping its variants."""

    index: int
    item_type: str
    base_name: str
    category: str = ""
    pattern: str = ""
    variants: dict[Variant, RawItem] = Field(default_factory=dict)
    tokens: frozenset[str] = frozenset()
    match_tokens: frozenset[str] = frozenset()
    metadata: list[str] = Field(default_factory=list)

    @property
    def key(self) -> tuple[str, str, str]:
        """Grouping key of this item within its catalog."""
        return (self.base_name, self.category, self.pattern)

    @property
    def has_stattrak(self) -> bool:
        return Variant.STATTRAK in self.variants

    @property
    def has_souvenir(self) -> bool:
        return Variant.SOUVENIR in self.variants

    @property
    def image(self) -> str:
        """Image of the normal variant, or of the first variant seen."""
        preferred = self.variants.get(Variant.NORMAL)
        if preferred is None and self.variants:
            preferred = next(iter(self.variants.values()))
        return preferred.image if preferred else ""


class CategoryIndex(BaseModel):
    """Base items and inverted token index for one catalog type."""

    item_type: str
    items: list[BaseItem] = Field(default_factory=list)
    postings: dict[str, list[int]] = Field(default_factory=dict)
    match_postings: dict[str, list[int]] = Field(default_factory=dict)

    @property
    def vocabulary(self) -> list[str]:
        """Known indexed tokens, sorted."""
        return sorted(self.postings)

    @property
    def is_empty(self) -> bool:
        return not self.items


class Selection(BaseModel):
    """A variant picked from a base item for a caller."""

    item: RawItem
    base_name: str
    selected_variant: Variant
    has_stattrak: bool = False
    has_souvenir: bool = False
    wear_conditions: list[str] = Field(default_factory=list)


class QueryInfo(BaseModel):
    """Summary of a free-text query."""

    query: str
    query_words: list[str] = Field(default_factory=list)

    @property
    def has_active_search(self) -> bool:
        return bool(self.query_words)

    @property
    def term_count(self) -> int:
        return len(self.query_words)


class LoadProgress(BaseModel):
    """Progress event emitted as each catalog finishes loading."""

    loaded: int
    total: int
    item_type: str
    ok: bool = True
    item_count: int = 0
    error: str | None = None
