"""Fixed synonym and abbreviation tables used to widen item match sets."""

from .models import BaseItem, SkinItem, Variant
from .normalizer import normalize, tokenize

# (trigger phrases, abbreviation, expansion)
CONDITION_SYNONYMS = [
    (("factory new",), "fn", "fn factory new"),
    (("minimal wear",), "mw", "mw minimal wear"),
    (("field-tested", "field tested"), "ft", "ft field tested field-tested"),
    (("well-worn", "well worn"), "ww", "ww well worn well-worn"),
    (("battle-scarred", "battle scarred"), "bs", "bs battle scarred battle-scarred"),
]

VARIANT_SYNONYMS = {
    Variant.STATTRAK: "stattrak stat trak",
    Variant.SOUVENIR: "souvenir",
}

# Matched against the normalized base name.
WEAPON_ABBREVIATIONS = {
    "ak-47": "ak ak47",
    "m4a4": "m4 m4a4",
    "m4a1-s": "m4 m4a1 m4a1s",
    "awp": "awp",
    "usp-s": "usp usps",
    "glock-18": "glock",
}

# Matched against the normalized pattern and base name.
PATTERN_ABBREVIATIONS = {
    "dragon lore": "dlore",
    "asiimov": "asii",
    "redline": "red line",
    "bloodsport": "blood sport",
}


def _flagged(base_item: BaseItem, variant: Variant) -> bool:
    """Check whether any skin entry advertises a variant through its flags."""
    return any(
        isinstance(raw, SkinItem) and getattr(raw, variant.value)
        for raw in base_item.variants.values()
    )


def synonym_terms(base_item: BaseItem) -> list[str]:
    """Collect the synonym phrases that apply to a base item."""
    name_text = normalize(base_item.base_name)
    pattern_text = normalize(base_item.pattern)
    full_text = " ".join(
        part for part in (name_text, normalize(base_item.category), pattern_text) if part
    )

    terms = []
    for phrases, abbreviation, expansion in CONDITION_SYNONYMS:
        if abbreviation in base_item.tokens or any(phrase in full_text for phrase in phrases):
            terms.append(expansion)

    for variant, expansion in VARIANT_SYNONYMS.items():
        if variant in base_item.variants or _flagged(base_item, variant):
            terms.append(expansion)

    for weapon, expansion in WEAPON_ABBREVIATIONS.items():
        if weapon in name_text:
            terms.append(expansion)

    for pattern, expansion in PATTERN_ABBREVIATIONS.items():
        if pattern in pattern_text or pattern in name_text:
            terms.append(expansion)

    return terms


def expand_tokens(base_item: BaseItem) -> frozenset[str]:
    """Return a base item's indexed tokens plus its synonym tokens."""
    terms = synonym_terms(base_item)
    if not terms:
        return base_item.tokens
    return base_item.tokens | tokenize(normalize(" ".join(terms)))
