from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..models.line_item import LineItem

"""Free-text item list parsing.

Two grammars, each for its own source field:

- offline items: fragments split on newlines or unquoted commas, each with an
  optional trailing " - <N>" quantity suffix. The rest of the fragment is the
  item name, verbatim (SKU prefixes included).
- notes: one item per line, using an ordered first-match-wins rule list.
  Lines that match no rule are ignored.

`consolidate_items` merges duplicates by case-insensitive name.
"""

__all__ = [
    "NoteRule",
    "NOTE_RULES",
    "split_items_list",
    "parse_offline_fragment",
    "parse_offline_cell",
    "parse_notes",
    "consolidate_items",
]

# newline, or a comma followed by an even number of double quotes up to end of cell
_FRAGMENT_SPLIT = re.compile(r'\r?\n|,(?=(?:[^"]*"[^"]*")*[^"]*$)')
_QTY_SUFFIX = re.compile(r"\s-\s(\d+)\s*$")


def _quantity(text: str) -> int:
    # A count of zero is not a valid quantity; fall back to the default
    return int(text) or 1


@dataclass(frozen=True)
class NoteRule:
    """One line pattern of the notes grammar.

    `pattern` must define a `name` group and may define a `qty` group.
    """
    label: str
    pattern: re.Pattern[str]

    def apply(self, line: str) -> LineItem | None:
        m = self.pattern.match(line)
        if not m:
            return None
        groups = m.groupdict()
        qty = _quantity(groups["qty"]) if groups.get("qty") else 1
        return LineItem(name=groups["name"].strip(), quantity=qty, raw_text=line)


NOTE_RULES: tuple[NoteRule, ...] = (
    NoteRule("marker_count", re.compile(r"^[-*]\s*(?P<qty>\d+)\s*x\s*(?P<name>.+)$", re.IGNORECASE)),
    NoteRule("count", re.compile(r"^(?P<qty>\d+)\s*x\s*(?P<name>.+)$", re.IGNORECASE)),
    NoteRule("marker", re.compile(r"^[-*]\s*(?P<name>.+)$")),
)


def split_items_list(cell: str) -> list[str]:
    """Split an items cell into trimmed, non-empty fragments."""
    return [part.strip() for part in _FRAGMENT_SPLIT.split(cell) if part.strip()]


def parse_offline_fragment(fragment: str) -> LineItem:
    """Parse "SKU-Product Name - 2" style fragments; quantity defaults to 1."""
    m = _QTY_SUFFIX.search(fragment)
    if not m:
        return LineItem(name=fragment, quantity=1, raw_text=fragment)
    name = fragment[: m.start()].strip()
    return LineItem(name=name, quantity=_quantity(m.group(1)), raw_text=fragment)


def parse_offline_cell(cell: str) -> list[LineItem]:
    return [parse_offline_fragment(part) for part in split_items_list(cell)]


def parse_notes(cell: str, rules: Iterable[NoteRule] = NOTE_RULES) -> list[LineItem]:
    """Parse a notes field line by line.

    Args:
        cell: Notes text
        rules: Ordered rule list, first match wins per line

    Returns:
        Items in line order; unmatched lines contribute nothing.
    """
    rule_list = tuple(rules)
    items: list[LineItem] = []
    for line in re.split(r"\r?\n", cell):
        text = line.strip()
        if not text:
            continue
        for rule in rule_list:
            item = rule.apply(text)
            if item is not None:
                items.append(item)
                break
    return items


def consolidate_items(
    items: Iterable[LineItem], key: Callable[[str], str] = str.lower
) -> list[LineItem]:
    """Merge items sharing a case-insensitive name, summing quantities.

    The first spelling seen for a name is kept for display, and output order
    follows first occurrence. Applying this twice gives the same result as once.
    """
    merged: dict[str, LineItem] = {}
    for item in items:
        k = key(item.name)
        seen = merged.get(k)
        if seen is None:
            merged[k] = item
        else:
            merged[k] = LineItem(
                name=seen.name, quantity=seen.quantity + item.quantity, raw_text=seen.raw_text
            )
    return list(merged.values())
