from __future__ import annotations

import re
from collections.abc import Iterable

from ..models.line_item import ClassifiedItem, LineItem

"""SKU / title classification of item names.

"PKG-BOX-Deluxe Hamper" -> sku "PKG-BOX", title "Deluxe Hamper". Leading
hyphen-separated tokens without lowercase letters form the SKU; the first token
with a lowercase letter starts the title and everything after it stays there.
"""

__all__ = [
    "split_sku_title",
    "classify_item",
    "packaging_matcher",
    "is_packaging_sku",
]

_TOKEN_SPLIT = re.compile(r"\s*-\s*")
_LOWER = re.compile(r"[a-z]")


def split_sku_title(name: str) -> tuple[str, str]:
    """Return (sku, title) for an item name. The title is never empty."""
    raw = name.strip()
    tokens = [t for t in _TOKEN_SPLIT.split(raw) if t]
    sku_parts: list[str] = []
    title_parts: list[str] = []
    in_title = False
    for token in tokens:
        if not in_title and not _LOWER.search(token):
            sku_parts.append(token)
        else:
            in_title = True
            title_parts.append(token)
    sku = "-".join(sku_parts).strip()
    title = " - ".join(title_parts).strip() or raw
    return sku, title


def classify_item(item: LineItem) -> ClassifiedItem:
    sku, title = split_sku_title(item.name)
    return ClassifiedItem(sku=sku, title=title, quantity=item.quantity)


def packaging_matcher(codes: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive "starts with one of these whole tokens" pattern."""
    alternatives = "|".join(re.escape(c) for c in codes if c)
    if not alternatives:
        # Matches nothing
        return re.compile(r"(?!)")
    return re.compile(rf"^(?:{alternatives})\b", re.IGNORECASE)


def is_packaging_sku(sku: str, codes: Iterable[str]) -> bool:
    return bool(packaging_matcher(codes).match(sku))
