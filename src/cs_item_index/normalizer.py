"""Shared text normalization for catalog indexing and queries.

Every function here is applied identically to catalog data and to user
queries, so a query token always lines up with the tokens indexed for the
same text.
"""

import re
from typing import NamedTuple

from .models import Variant

MIN_TOKEN_LENGTH = 2
STATTRAK_PREFIX = "StatTrak™ "
SOUVENIR_PREFIX = "Souvenir "

_NON_WORD = re.compile(r"[^\w\s\-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_TOKEN_SPLIT = re.compile(r"[\s\-]+")


class BaseInfo(NamedTuple):
    """Grouping information extracted from a raw item."""

    base_name: str
    variant: Variant
    category: str
    pattern: str


def normalize(text: str | None) -> str:
    """Normalize text into lower-case words separated by single spaces.

    Stars become the word "star", pipes become spaces, and anything that is
    not a word character, whitespace or hyphen is dropped.
    """
    if not text:
        return ""
    cleaned = text.lower().replace("★", "star").replace("|", " ")
    cleaned = _NON_WORD.sub(" ", cleaned)
    return _WHITESPACE.sub(" ", cleaned).strip()


def split_words(normalized: str) -> list[str]:
    """Split normalized text into words of at least two characters, in order."""
    return [
        word for word in _TOKEN_SPLIT.split(normalized) if len(word) >= MIN_TOKEN_LENGTH
    ]


def tokenize(normalized: str) -> frozenset[str]:
    """Tokenize normalized text into a set of tokens."""
    return frozenset(split_words(normalized))


def query_words(text: str | None) -> list[str]:
    """Normalize a query and return its distinct words in typing order."""
    return list(dict.fromkeys(split_words(normalize(text))))


def extract_base_info(item) -> BaseInfo:
    """Strip the variant prefix from an item's name.

    The StatTrak prefix is checked before the Souvenir prefix. Category and
    pattern are copied as-is, or empty when the item has none.
    """
    name = item.name
    if name.startswith(STATTRAK_PREFIX):
        base_name, variant = name[len(STATTRAK_PREFIX):], Variant.STATTRAK
    elif name.startswith(SOUVENIR_PREFIX):
        base_name, variant = name[len(SOUVENIR_PREFIX):], Variant.SOUVENIR
    else:
        base_name, variant = name, Variant.NORMAL

    return BaseInfo(
        base_name=base_name,
        variant=variant,
        category=getattr(item, "category", None) or "",
        pattern=getattr(item, "pattern", None) or "",
    )
