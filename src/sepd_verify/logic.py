import hashlib
from pathlib import Path

from sepd_core.errors import ERRORS
from sepd_core.protocol import ALPHABET, COUNT_OFFSET, INDEX_OFFSET, INDEX_STRIDE, TOTAL_OFFSETS, LayoutDescriptor
from sepd_core.text import read_u32
from sepd_edit.codec import decode
from sepd_edit.header import header_errors
from sepd_edit.index import cumulative_counts, sort_and_count


def _fail(errors: list, warnings: list | None = None) -> dict:
    return {"status": "FAIL", "error_count": len(errors), "errors": errors, "warnings": warnings or []}


def _err(code: str, **extra) -> dict:
    return {"code": code, "message": ERRORS[code], **extra}


def verify_bytes(buf: bytes, layout: LayoutDescriptor) -> dict:
    errors = [_err(code) for code in header_errors(buf, layout)]
    if errors:
        return _fail(errors)

    _, records = decode(buf, layout)

    # encode rewrites the count field, so a stale one is only a warning.
    warnings = []
    stored = read_u32(buf, COUNT_OFFSET)
    if stored != len(records):
        warnings.append(_err("E_COUNT_MISMATCH", expected=stored, found=len(records)))

    # Slot 'Z' is shadowed by the first legacy total, so only A..Y are comparable.
    _, counts = sort_and_count(records)
    expected_index = cumulative_counts(counts)[:len(ALPHABET) - 1] + [len(records)] * len(TOTAL_OFFSETS)
    stored_index = [read_u32(buf, INDEX_OFFSET + i * INDEX_STRIDE) for i in range(len(ALPHABET) - 1)]
    stored_index += [read_u32(buf, off) for off in TOTAL_OFFSETS]
    if stored_index != expected_index:
        errors.append(_err("E_INDEX_MISMATCH", expected=expected_index, stored=stored_index))

    seen = set()
    for rec in records:
        if rec.key in seen:
            errors.append(_err("E_DUPLICATE_KEY", key=rec.key))
        seen.add(rec.key)

    if errors:
        return _fail(errors, warnings)

    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "warnings": warnings,
        "records": len(records),
        "sha256": hashlib.sha256(buf).hexdigest(),
    }


def verify_file(path: Path, layout: LayoutDescriptor) -> dict:
    path = Path(path)
    if not path.is_file():
        return _fail([_err("E_FILE_MISSING", path=str(path))])
    return verify_bytes(path.read_bytes(), layout)
