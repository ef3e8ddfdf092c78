from __future__ import annotations

import unicodedata
from typing import Iterable, List, Sequence, Tuple

from .models import CategoryChoice, PriceRecord
from .rules import ALL_CATEGORIES_LABEL


def query(
    records: Sequence[PriceRecord],
    search_text: str = "",
    category: str = "",
) -> List[PriceRecord]:
    """
    Records whose item contains `search_text` (case-insensitive) and whose
    category equals `category` exactly. Empty inputs match everything and
    the original order is kept.
    """
    needle = (search_text or "").strip().lower()
    category = category or ""
    return [
        r
        for r in records
        if (not needle or needle in r.item.lower())
        and (not category or r.kategorie == category)
    ]


def german_sort_key(value: str) -> Tuple[str, str]:
    # DIN 5007-1: umlauts sort as their base letter, ß as "ss".
    decomposed = unicodedata.normalize("NFKD", value.replace("\u00df", "ss").replace("\u1e9e", "SS"))
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value


def category_options(records: Iterable[PriceRecord]) -> List[str]:
    """Distinct non-empty categories, first spelling wins, German order."""
    seen: dict[str, str] = {}
    for r in records:
        name = r.kategorie
        if not name:
            continue
        seen.setdefault(name.casefold(), name)
    return sorted(seen.values(), key=german_sort_key)


def category_choices(categories: Iterable[str]) -> List[CategoryChoice]:
    choices = [CategoryChoice(value="", label=ALL_CATEGORIES_LABEL)]
    choices.extend(CategoryChoice(value=c, label=c) for c in categories)
    return choices
