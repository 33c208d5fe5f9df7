"""SEPD Core - Shared protocol, key derivation and text helpers."""
from .ids import ByKey, ByNumericId, commentary_key, format_id, resolve_key, sort_key
from .protocol import LAYOUTS, PES2017, PES2021, LayoutDescriptor, load_layout

__all__ = [
    "ByKey",
    "ByNumericId",
    "commentary_key",
    "format_id",
    "resolve_key",
    "sort_key",
    "LAYOUTS",
    "PES2017",
    "PES2021",
    "LayoutDescriptor",
    "load_layout",
]
