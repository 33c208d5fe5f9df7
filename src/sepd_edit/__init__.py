"""SEPD Edit - decode, edit and re-encode commentary list files."""
from .codec import (
    CommentaryFile,
    FileMetadata,
    Record,
    create_record,
    decode,
    delete_record,
    encode,
    update_record,
)
from .header import check_header, header_errors, is_header_valid
from .index import cumulative_counts, sort_and_count

__all__ = [
    "CommentaryFile",
    "FileMetadata",
    "Record",
    "create_record",
    "decode",
    "delete_record",
    "encode",
    "update_record",
    "check_header",
    "header_errors",
    "is_header_valid",
    "cumulative_counts",
    "sort_and_count",
]
