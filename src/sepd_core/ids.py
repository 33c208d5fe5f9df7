"""SEPD commentary keys - deterministic key derivation and name ordering."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pyuca import Collator

from .errors import InvalidIdError
from .protocol import ID_DIGITS, LayoutDescriptor


@dataclass(frozen=True)
class ByNumericId:
    """Reference a record by its numeric commentary id."""

    id: int

    def __post_init__(self) -> None:
        if self.id < 0:
            raise InvalidIdError(str(self.id))


@dataclass(frozen=True)
class ByKey:
    """Reference a record by its full commentary key."""

    key: str


RecordRef = ByNumericId | ByKey


def format_id(commentary_id: int) -> str:
    """Zero-pad to six digits, keeping only the last six of longer ids."""
    return str(commentary_id).zfill(ID_DIGITS)[-ID_DIGITS:]


def commentary_key(layout: LayoutDescriptor, commentary_id: int) -> str:
    return layout.name_prefix + format_id(commentary_id)


def resolve_key(ref: RecordRef, layout: LayoutDescriptor) -> str:
    """Normalize a record reference into the key stored on disk."""
    if isinstance(ref, ByNumericId):
        return commentary_key(layout, ref.id)
    return ref.key


def parse_ref(text: str) -> RecordRef:
    """Interpret command-line input: all digits is an id, anything else a key."""
    text = text.strip()
    if text.isdecimal():
        return ByNumericId(int(text))
    return ByKey(text)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Loads the DUCET table once.
    return Collator()


def sort_key(name: str) -> tuple[int, ...]:
    """Primary-strength UCA key: case, accents, strokes and ligature marks ignored."""
    key = _collator().sort_key(name)
    # Levels are separated by 0; the primary level comes first.
    return key[:key.index(0)]
