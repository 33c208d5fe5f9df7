import struct

from .protocol import U32_FMT

# ECMAScript WhiteSpace and LineTerminator: what String.prototype.trim removes.
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def clean_string(raw: bytes) -> str:
    """Decode a fixed-width field: UTF-8, cut at the first NUL, strip whitespace."""
    text = raw.decode("utf-8", errors="replace")
    return text.split("\x00", 1)[0].strip(TRIM_CHARS)


def read_string(buf: bytes, offset: int, length: int) -> str:
    return clean_string(bytes(buf[offset:offset + length]))


def encode_field(text: str, width: int) -> bytes:
    # Byte truncation; may cut a multi-byte character in half.
    return text.encode("utf-8")[:width]


def u32(n: int) -> bytes:
    return struct.pack(U32_FMT, n)


def read_u32(buf: bytes, offset: int) -> int:
    return struct.unpack_from(U32_FMT, buf, offset)[0]
