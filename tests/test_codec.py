import struct

import pytest

from sepd_core.errors import InvalidFormatError, TooSmallError
from sepd_core.protocol import PES2017, PES2021
from sepd_edit.codec import CommentaryFile, FileMetadata, Record, decode, encode

from conftest import FIRST, SECOND, build_file


def u32_at(buf, off):
    return struct.unpack_from("<I", buf, off)[0]


def test_decode_two_players(two_players):
    metadata, records = decode(two_players, PES2021)
    assert len(records) == 2
    assert [r.key for r in records] == ["EN_A1_P0_R000001", "EN_A1_P0_R000002"]
    assert [r.display_name for r in records] == ["Ana", "Bob"]
    assert metadata.first == FIRST
    assert metadata.second == SECOND


def test_decode_too_small():
    with pytest.raises(TooSmallError):
        decode(bytes(100), PES2021)


def test_decode_invalid_magic():
    buf = bytearray(build_file(PES2021, []))
    buf[:4] = b"XXXX"
    with pytest.raises(InvalidFormatError):
        decode(bytes(buf), PES2021)


def test_decode_header_only():
    _, records = decode(build_file(PES2021, []), PES2021)
    assert records == []


def test_trailing_partial_stride_ignored(layout):
    key = layout.name_prefix + "000009"
    buf = build_file(layout, [(key, "Zed")], tail=b"\x01" * (layout.record_stride - 1))
    _, records = decode(buf, layout)
    assert records == [Record(key, "Zed")]


def test_decode_cuts_at_first_nul_and_strips():
    buf = bytearray(build_file(PES2017, [("E_A1_P0_R000001", "  Ana")]))
    name_at = 144 + 16
    buf[name_at + 5:name_at + 10] = b"\x00junk"
    _, records = decode(bytes(buf), PES2017)
    assert records[0].display_name == "Ana"


def test_decode_reads_name_after_padding():
    buf = bytearray(build_file(PES2021, [("EN_A1_P0_R000001", "Ana")]))
    # Bytes in the padding gap are not part of either field.
    buf[144 + 16:144 + 20] = b"GAP!"
    _, records = decode(bytes(buf), PES2021)
    assert records[0].display_name == "Ana"


def test_encode_size_and_header(layout):
    p = layout.name_prefix
    records = [Record(p + "000003", "Carla"), Record(p + "000001", "ana"), Record(p + "000002", "Bob")]
    meta = FileMetadata(FIRST, SECOND)
    out = encode(meta, records, layout)

    assert len(out) == layout.records_start_offset + 3 * layout.record_stride
    assert out[0:16] == FIRST
    assert u32_at(out, 16) == 3
    assert out[20:36] == SECOND
    assert u32_at(out, 136) == 3
    assert u32_at(out, 140) == 3


def test_encode_cumulative_index():
    p = PES2021.name_prefix
    names = ["Ana", "alan", "Bob", "Dora", "Zoe", "9ine", "Élodie"]
    records = [Record(p + f"{i:06d}", n) for i, n in enumerate(names)]
    out = encode(FileMetadata(FIRST, SECOND), records, PES2021)

    slots = [u32_at(out, 36 + 4 * i) for i in range(25)]
    assert slots[0] == 2  # A
    assert slots[1] == 3  # B
    assert slots[2] == 3  # C
    assert slots[3] == 4  # D
    assert slots[24] == 4  # Y
    assert slots == sorted(slots)
    # Digits and accented initials count under no letter but are still written.
    assert u32_at(out, 136) == len(names)


def test_encode_sorts_case_and_accent_insensitive():
    p = PES2017.name_prefix
    records = [Record(p + "000001", "bob"), Record(p + "000002", "Élan"), Record(p + "000003", "Adam")]
    out = encode(FileMetadata(FIRST, SECOND), records, PES2017)
    _, decoded = decode(out, PES2017)
    assert [r.display_name for r in decoded] == ["Adam", "bob", "Élan"]


def test_encode_places_name_after_padding():
    rec = Record("EN_A1_P0_R000001", "Ana")
    out = encode(FileMetadata(FIRST, SECOND), [rec], PES2021)
    assert out[144:144 + 16] == b"EN_A1_P0_R000001"
    assert out[160:176] == bytes(16)
    assert out[176:179] == b"Ana"
    assert out[179:240] == bytes(61)


def test_encode_truncates_long_name():
    name = "X" * 70
    with pytest.warns(UserWarning, match="truncated"):
        out = encode(FileMetadata(FIRST, SECOND), [Record("E_A1_P0_R000001", name)], PES2017)
    _, records = decode(out, PES2017)
    assert records[0].display_name == "X" * 64


def test_encode_truncation_can_split_multibyte_character():
    # 63 ASCII bytes then a 2-byte character: only its lead byte fits.
    name = "a" * 63 + "é"
    with pytest.warns(UserWarning):
        out = encode(FileMetadata(FIRST, SECOND), [Record("E_A1_P0_R000001", name)], PES2017)
    assert out[144 + 16 + 63] == 0xC3
    _, records = decode(out, PES2017)
    assert records[0].display_name == "a" * 63 + "\ufffd"


def test_round_trip_preserves_records_and_metadata(layout):
    p = layout.name_prefix
    src = build_file(layout, [(p + "000010", "Zico"), (p + "000011", "Ana Maria"), (p + "123456", "Müller")])
    meta, records = decode(src, layout)
    out = encode(meta, records, layout)
    meta2, records2 = decode(out, layout)

    assert meta2 == meta
    key = lambda r: r.key  # noqa: E731
    assert sorted(records2, key=key) == sorted(records, key=key)


def test_encode_is_stable_after_first_pass(layout):
    p = layout.name_prefix
    src = build_file(layout, [(p + "000002", "Bob"), (p + "000001", "Ana")])
    once = CommentaryFile.from_bytes(src, layout).to_bytes()
    twice = CommentaryFile.from_bytes(once, layout).to_bytes()
    assert once == twice


def test_metadata_lengths_enforced():
    with pytest.raises(ValueError):
        FileMetadata(b"SEPD", SECOND)


def test_read_and_write(tmp_path, two_players):
    src = tmp_path / "commentary.bin"
    src.write_bytes(two_players)
    doc = CommentaryFile.read(src, PES2021)
    assert len(doc) == 2

    doc.create(57123, "Mohamed Salah")
    dst = tmp_path / "out.bin"
    doc.write(dst)
    assert dst.stat().st_size == 144 + 3 * 96
    assert [r.display_name for r in CommentaryFile.read(dst, PES2021).records] == ["Ana", "Bob", "Mohamed Salah"]
