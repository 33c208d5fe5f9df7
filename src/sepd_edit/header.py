from __future__ import annotations

from sepd_core.errors import InvalidFormatError, TooSmallError
from sepd_core.protocol import MAGIC_SEPD, RESERVED_ZERO, LayoutDescriptor


def header_errors(buf: bytes, layout: LayoutDescriptor) -> list[str]:
    """Return the failed header checks, empty when the header is valid.

    A short buffer gates everything else. Magic and reserved-zero checks are
    both evaluated so a report names every problem at once.
    """
    if len(buf) < layout.records_start_offset:
        return ["E_TOO_SMALL"]

    errors = []
    if bytes(buf[:len(MAGIC_SEPD)]) != MAGIC_SEPD:
        errors.append("E_BAD_MAGIC")
    start, end = RESERVED_ZERO
    if any(buf[start:end]):
        errors.append("E_BAD_METADATA")
    return errors


def is_header_valid(buf: bytes, layout: LayoutDescriptor) -> bool:
    return not header_errors(buf, layout)


def check_header(buf: bytes, layout: LayoutDescriptor) -> None:
    errors = header_errors(buf, layout)
    if errors == ["E_TOO_SMALL"]:
        raise TooSmallError(f"{len(buf)} bytes")
    if errors:
        raise InvalidFormatError(errors)
