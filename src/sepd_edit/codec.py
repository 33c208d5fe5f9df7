"""SEPD commentary list codec.

Decodes a commentary file into header metadata plus an ordered record list,
applies create/update/delete edits, and re-encodes a complete file with a
recomputed count, alphabet index and sorted records.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from warnings import warn

from sepd_core.errors import DuplicateKeyError, InvalidIdError, InvalidNameError, NotFoundError
from sepd_core.ids import RecordRef, commentary_key, resolve_key
from sepd_core.protocol import (
    COUNT_OFFSET,
    INDEX_OFFSET,
    INDEX_STRIDE,
    MAX_ID,
    META_FIRST,
    META_SECOND,
    TOTAL_OFFSETS,
    LayoutDescriptor,
)
from sepd_core.text import encode_field, read_string, u32

from .header import check_header
from .index import cumulative_counts, sort_and_count

META_FIRST_LEN = META_FIRST[1] - META_FIRST[0]
META_SECOND_LEN = META_SECOND[1] - META_SECOND[0]


@dataclass
class Record:
    key: str
    display_name: str


@dataclass(frozen=True)
class FileMetadata:
    """Opaque header spans carried through verbatim."""

    first: bytes
    second: bytes

    def __post_init__(self) -> None:
        if len(self.first) != META_FIRST_LEN or len(self.second) != META_SECOND_LEN:
            raise ValueError(
                f"Metadata spans must be {META_FIRST_LEN} and {META_SECOND_LEN} bytes "
                f"(got {len(self.first)} and {len(self.second)})"
            )


def decode(buf: bytes, layout: LayoutDescriptor) -> tuple[FileMetadata, list[Record]]:
    check_header(buf, layout)

    metadata = FileMetadata(
        first=bytes(buf[META_FIRST[0]:META_FIRST[1]]),
        second=bytes(buf[META_SECOND[0]:META_SECOND[1]]),
    )

    records: list[Record] = []
    offset = layout.records_start_offset
    # A trailing partial stride is not a record.
    while offset + layout.record_stride <= len(buf):
        key = read_string(buf, offset, layout.key_field_length)
        name = read_string(buf, offset + layout.name_field_offset, layout.name_field_length)
        records.append(Record(key=key, display_name=name))
        offset += layout.record_stride

    return metadata, records


def _put(out: bytearray, offset: int, data: bytes) -> None:
    out[offset:offset + len(data)] = data


def _field(text: str, width: int, what: str) -> bytes:
    data = encode_field(text, width)
    if len(data) < len(text.encode("utf-8")):
        warn(f"{what} {text!r} truncated to {width} bytes")
    return data


def encode(metadata: FileMetadata, records: list[Record], layout: LayoutDescriptor) -> bytes:
    count = len(records)
    out = bytearray(layout.records_start_offset + count * layout.record_stride)

    # 1. Header
    _put(out, META_FIRST[0], metadata.first)
    _put(out, COUNT_OFFSET, u32(count))
    _put(out, META_SECOND[0], metadata.second)

    # 2. Alphabet index (cumulative A..Z counts)
    ordered, counts = sort_and_count(records)
    for i, total in enumerate(cumulative_counts(counts)):
        _put(out, INDEX_OFFSET + i * INDEX_STRIDE, u32(total))

    # 3. Legacy totals; the first one shadows the 'Z' slot.
    for off in TOTAL_OFFSETS:
        _put(out, off, u32(count))

    # 4. Records in index order
    pointer = layout.records_start_offset
    for rec in ordered:
        _put(out, pointer, _field(rec.key, layout.key_field_length, "Key"))
        _put(
            out,
            pointer + layout.name_field_offset,
            _field(rec.display_name, layout.name_field_length, "Name"),
        )
        pointer += layout.record_stride

    return bytes(out)


def _find(records: list[Record], key: str) -> int:
    for i, rec in enumerate(records):
        if rec.key == key:
            return i
    return -1


def create_record(records: list[Record], layout: LayoutDescriptor, commentary_id: int, display_name: str) -> Record:
    if not display_name or not display_name.strip():
        raise InvalidNameError()
    if commentary_id < 0 or commentary_id > MAX_ID:
        raise InvalidIdError(str(commentary_id))

    key = commentary_key(layout, commentary_id)
    if _find(records, key) != -1:
        raise DuplicateKeyError(key)

    rec = Record(key=key, display_name=display_name)
    records.append(rec)
    return rec


def update_record(records: list[Record], layout: LayoutDescriptor, ref: RecordRef, display_name: str) -> Record:
    key = resolve_key(ref, layout)
    i = _find(records, key)
    if i == -1:
        raise NotFoundError(key)
    records[i].display_name = display_name
    return records[i]


def delete_record(records: list[Record], layout: LayoutDescriptor, ref: RecordRef) -> Record:
    key = resolve_key(ref, layout)
    i = _find(records, key)
    if i == -1:
        raise NotFoundError(key)
    return records.pop(i)


class CommentaryFile:
    """One decoded commentary file: metadata, records and the layout they use."""

    def __init__(self, metadata: FileMetadata, layout: LayoutDescriptor, records: list[Record] | None = None):
        self.metadata = metadata
        self.layout = layout
        self.records: list[Record] = records if records is not None else []

    @classmethod
    def from_bytes(cls, buf: bytes, layout: LayoutDescriptor) -> CommentaryFile:
        metadata, records = decode(buf, layout)
        return cls(metadata, layout, records)

    @classmethod
    def read(cls, path: Path, layout: LayoutDescriptor) -> CommentaryFile:
        return cls.from_bytes(Path(path).read_bytes(), layout)

    def __len__(self) -> int:
        return len(self.records)

    def get(self, ref: RecordRef) -> Record | None:
        i = _find(self.records, resolve_key(ref, self.layout))
        return self.records[i] if i != -1 else None

    def create(self, commentary_id: int, display_name: str) -> Record:
        return create_record(self.records, self.layout, commentary_id, display_name)

    def update(self, ref: RecordRef, display_name: str) -> Record:
        return update_record(self.records, self.layout, ref, display_name)

    def delete(self, ref: RecordRef) -> Record:
        return delete_record(self.records, self.layout, ref)

    def sorted_records(self) -> list[Record]:
        return sort_and_count(self.records)[0]

    def to_bytes(self) -> bytes:
        return encode(self.metadata, self.records, self.layout)

    def write(self, path: Path) -> None:
        Path(path).write_bytes(self.to_bytes())
