import struct

import pytest

from sepd_core.protocol import PES2017, PES2021

FIRST = b"SEPD" + bytes(range(1, 13))
SECOND = b"\x07\x00\x00\x00" + bytes(12)


def build_file(layout, records, first=FIRST, second=SECOND, count=None, tail=b""):
    """Lay out a commentary file byte by byte, independent of the encoder."""
    buf = bytearray(layout.records_start_offset + len(records) * layout.record_stride)
    buf[0:16] = first
    buf[16:20] = struct.pack("<I", len(records) if count is None else count)
    buf[20:36] = second
    off = layout.records_start_offset
    for key, name in records:
        k = key.encode("utf-8")
        n = name.encode("utf-8")
        buf[off:off + len(k)] = k
        start = off + layout.key_field_length + layout.name_field_padding
        buf[start:start + len(n)] = n
        off += layout.record_stride
    return bytes(buf) + tail


@pytest.fixture(params=[PES2021, PES2017], ids=["pes2021", "pes2017"])
def layout(request):
    return request.param


@pytest.fixture
def two_players():
    return build_file(PES2021, [("EN_A1_P0_R000001", "Ana"), ("EN_A1_P0_R000002", "Bob")])
