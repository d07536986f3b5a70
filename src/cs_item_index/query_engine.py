"""Free-text matching of queries against a category index."""

from .models import BaseItem, CategoryIndex, QueryInfo
from .normalizer import query_words

SPECIAL_ITEM_PREFIX = "★"

# Two-letter shorthands that do not occur inside the word they stand for.
QUERY_ALIASES = {
    "st": frozenset({"stattrak", "stat"}),
    "sv": frozenset({"souvenir"}),
}


def token_matches(word: str, token: str) -> bool:
    """Check whether a query word matches an item token.

    A word matches when it equals the token, when either one contains the
    other, or when the word is a known alias of the token.
    """
    if word == token or word in token or token in word:
        return True
    return token in QUERY_ALIASES.get(word, ())


def describe_query(query: str | None) -> QueryInfo:
    """Summarize a query into its searchable words."""
    return QueryInfo(query=query or "", query_words=query_words(query))


def _positions_for(index: CategoryIndex, word: str) -> set[int]:
    positions: set[int] = set()
    for token, postings in index.match_postings.items():
        if token_matches(word, token):
            positions.update(postings)
    return positions


def search(
    index: CategoryIndex,
    query: str | None,
    *,
    limit: int | None = None,
    exclude_special: bool = False,
) -> list[BaseItem]:
    """Find the base items matching every word of a query.

    Queries without a word of at least two characters match every item.
    Results keep catalog order.

    Args:
        index: Category index to search
        query: Free-text query
        limit: Maximum number of results to return
        exclude_special: Drop knives and gloves (names starting with a star)

    Returns:
        Matching base items
    """
    words = query_words(query)

    if not words:
        matches = list(index.items)
    else:
        positions: set[int] | None = None
        for word in words:
            found = _positions_for(index, word)
            positions = found if positions is None else positions & found
            if not positions:
                return []
        matches = [index.items[i] for i in sorted(positions)]

    if exclude_special:
        matches = [item for item in matches if not item.base_name.startswith(SPECIAL_ITEM_PREFIX)]
    if limit is not None:
        matches = matches[: max(limit, 0)]
    return matches
