"""CS Item Index - Autocomplete search over CS item catalogs."""

from .catalog_loader import (
    DEFAULT_SOURCES,
    CatalogLoader,
    CategoryFetchError,
    fetch_payload,
    load_catalogs,
)
from .config import ConfigManager
from .index_builder import build_category_index, build_postings, empty_index
from .index_store import CategoryIndexStore, get_variant, select_variant
from .item_mapping import MalformedItemError, map_raw_item, wear_conditions
from .models import (
    BaseItem,
    CaseItem,
    CatalogType,
    CategoryIndex,
    GenericItem,
    LoadProgress,
    QueryInfo,
    RawItem,
    RawItemBase,
    Selection,
    SkinItem,
    StickerItem,
    Variant,
)
from .normalizer import BaseInfo, extract_base_info, normalize, query_words, tokenize
from .output_formatter import OutputFormatter
from .preprocessor import preprocess_catalog
from .query_engine import describe_query, search, token_matches

__version__ = "0.1.0"

__all__ = [
    "BaseInfo",
    "BaseItem",
    "build_category_index",
    "build_postings",
    "CaseItem",
    "CatalogLoader",
    "CatalogType",
    "CategoryFetchError",
    "CategoryIndex",
    "CategoryIndexStore",
    "ConfigManager",
    "DEFAULT_SOURCES",
    "describe_query",
    "empty_index",
    "extract_base_info",
    "fetch_payload",
    "GenericItem",
    "get_variant",
    "load_catalogs",
    "LoadProgress",
    "MalformedItemError",
    "map_raw_item",
    "normalize",
    "OutputFormatter",
    "preprocess_catalog",
    "query_words",
    "QueryInfo",
    "RawItem",
    "RawItemBase",
    "search",
    "select_variant",
    "Selection",
    "SkinItem",
    "StickerItem",
    "token_matches",
    "tokenize",
    "Variant",
    "wear_conditions",
]
