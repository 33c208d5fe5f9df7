"""Error taxonomy shared by the editor and the verifier."""
from __future__ import annotations

ERRORS = {
    "E_FILE_MISSING": "Required file missing",
    "E_TOO_SMALL": "File too small",
    "E_INVALID_FORMAT": "Invalid file. Make sure your file is correct",
    "E_BAD_MAGIC": "File missing SEPD magic bytes",
    "E_BAD_METADATA": "Reserved metadata bytes are not zero",
    "E_INVALID_NAME": "Player name cannot be empty",
    "E_INVALID_ID": "Commentary ID must be between 0 and 999999",
    "E_DUPLICATE_KEY": "Commentary key already exists",
    "E_NOT_FOUND": "Commentary key not found",
    "E_COUNT_MISMATCH": "Stored record count does not match file size",
    "E_INDEX_MISMATCH": "Stored alphabet index does not match records",
}


class CommentaryError(ValueError):
    code = "E_INVALID_FORMAT"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = ERRORS[self.code]
        super().__init__(f"{message}: {detail}" if detail else message)


class TooSmallError(CommentaryError):
    code = "E_TOO_SMALL"


class InvalidFormatError(CommentaryError):
    """Header validation failed. ``codes`` lists every failed check."""

    code = "E_INVALID_FORMAT"

    def __init__(self, codes: list[str]):
        self.codes = list(codes)
        super().__init__(", ".join(ERRORS[c] for c in self.codes))


class InvalidNameError(CommentaryError):
    code = "E_INVALID_NAME"


class InvalidIdError(CommentaryError):
    code = "E_INVALID_ID"


class DuplicateKeyError(CommentaryError):
    code = "E_DUPLICATE_KEY"


class NotFoundError(CommentaryError):
    code = "E_NOT_FOUND"
