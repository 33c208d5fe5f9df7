"""SEPD commentary list protocol constants.

Single source of truth for the on-disk magic, header offsets and the
per-edition record layouts. Keep this file stable. Decoder, encoder and
verifier must remain synchronized.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

# File magic
MAGIC_SEPD = b"SEPD"

# Header: [Magic(4) | Opaque(12) | Count(4) | Opaque(16) | Index(26*4) ...]
U32_FMT = "<I"
U32_LEN = 4

META_FIRST = (0, 16)
META_SECOND = (20, 36)
COUNT_OFFSET = 16

# Reserved range, zero in every known file
RESERVED_ZERO = (24, 36)

# Cumulative A..Z index. The last slot is shadowed by TOTAL_OFFSETS[0].
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
INDEX_OFFSET = 36
INDEX_STRIDE = 4
TOTAL_OFFSETS = (136, 140)

HEADER_LEN = 144

# Commentary ids are always rendered as six digits
ID_DIGITS = 6
MAX_ID = 10 ** ID_DIGITS - 1


@dataclass(frozen=True)
class LayoutDescriptor:
    """Field offsets and widths for one edition of the file."""

    name_prefix: str
    records_start_offset: int
    key_field_length: int
    name_field_padding: int
    name_field_length: int
    record_stride: int

    def __post_init__(self) -> None:
        if not isinstance(self.name_prefix, str):
            raise ValueError(f"name_prefix must be a string, got {self.name_prefix!r}")
        for f in fields(self):
            if f.name == "name_prefix":
                continue
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{f.name} must be a non-negative integer, got {value!r}")

        if self.records_start_offset < HEADER_LEN:
            raise ValueError(
                f"records_start_offset {self.records_start_offset} overlaps the {HEADER_LEN}-byte header"
            )
        used = self.key_field_length + self.name_field_padding + self.name_field_length
        if self.record_stride < used:
            raise ValueError(f"record_stride {self.record_stride} is smaller than its fields ({used})")

    @property
    def name_field_offset(self) -> int:
        return self.key_field_length + self.name_field_padding

    def to_dict(self) -> dict:
        return asdict(self)


# Edition presets
PES2021 = LayoutDescriptor(
    name_prefix="EN_A1_P0_R",
    records_start_offset=144,
    key_field_length=16,
    name_field_padding=16,
    name_field_length=64,
    record_stride=96,
)

PES2017 = LayoutDescriptor(
    name_prefix="E_A1_P0_R",
    records_start_offset=144,
    key_field_length=16,
    name_field_padding=0,
    name_field_length=64,
    record_stride=80,
)

LAYOUTS = {
    "pes2021": PES2021,
    "pes2017": PES2017,
}

DEFAULT_LAYOUT = "pes2021"


def load_layout(path: Path) -> LayoutDescriptor:
    """Load a layout descriptor from a JSON object keyed by field name."""
    obj = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise ValueError(f"Layout file {path} must contain a JSON object")

    names = {f.name for f in fields(LayoutDescriptor)}
    unknown = sorted(set(obj) - names)
    missing = sorted(names - set(obj))
    if unknown:
        raise ValueError(f"Unknown layout fields: {', '.join(unknown)}")
    if missing:
        raise ValueError(f"Missing layout fields: {', '.join(missing)}")
    return LayoutDescriptor(**obj)


def get_layout(name: str) -> LayoutDescriptor:
    try:
        return LAYOUTS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown layout {name!r} (known: {', '.join(sorted(LAYOUTS))})") from None


def resolve_layout(name: str | None, path: Path | None = None) -> LayoutDescriptor:
    """A JSON layout file wins over a preset name."""
    if path is not None:
        return load_layout(path)
    return get_layout(name or DEFAULT_LAYOUT)
