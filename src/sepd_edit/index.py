"""Alphabetical index: the A-Z navigation table the game reads."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sepd_core.ids import sort_key
from sepd_core.protocol import ALPHABET

if TYPE_CHECKING:
    from .codec import Record


def sort_and_count(records: list[Record]) -> tuple[list[Record], dict[str, int]]:
    """Sort records by display name and count them by first letter.

    Names whose first character is not A-Z (after upper-casing) are sorted
    but counted under no letter.
    """
    ordered = sorted(records, key=lambda r: sort_key(r.display_name))

    counts = {letter: 0 for letter in ALPHABET}
    for rec in ordered:
        first = rec.display_name[:1].upper()
        if first in counts:
            counts[first] += 1
    return ordered, counts


def cumulative_counts(counts: dict[str, int]) -> list[int]:
    """Running totals in A..Z order."""
    out = []
    total = 0
    for letter in ALPHABET:
        total += counts[letter]
        out.append(total)
    return out
