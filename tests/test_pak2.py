import struct
from io import BytesIO

import pytest
from conftest import build_pak2

from PAKLib.Archive import NotRecognized, Recognized
from PAKLib.Cipher import decrypt
from PAKLib.Exceptions import BadDataOffsetException, StructuralException
from PAKLib.Formats import Pak2ArchiveDecoder
from PAKLib.Formats.twilight_frontier_pak2 import entry_key


def test_read_meta(pak2_archive, pak2_files):
    meta = Pak2ArchiveDecoder().read_meta(pak2_archive)
    assert [entry.path for entry in meta] == ["data/script.txt", "画像/立ち絵.bmp", "empty.bin"]
    assert [entry.size for entry in meta] == [len(payload) for _, payload in pak2_files]
    assert not any(entry.compressed for entry in meta)


def test_table_rows_fill_the_table_exactly(pak2_archive):
    raw = pak2_archive.getvalue()
    file_count, table_size = struct.unpack_from("<HI", raw, 0)
    table = bytearray(raw[6 : 6 + table_size])
    decrypt(table, table_size + 6, 0xC5, 0x83, 0x53)

    pos = 0
    for _ in range(file_count):
        pos += 8
        pos += 1 + table[pos]
    assert pos == table_size


def test_read_file_removes_offset_mask(pak2_archive, pak2_files):
    decoder = Pak2ArchiveDecoder()
    meta = decoder.read_meta(pak2_archive)
    for index, (_, payload) in enumerate(pak2_files):
        output_file = decoder.read_file(pak2_archive, meta, index)
        assert output_file.path == meta[index].path
        assert output_file.data == payload


def test_consumed_entry_yields_nothing(pak2_archive):
    decoder = Pak2ArchiveDecoder()
    meta = decoder.read_meta(pak2_archive)
    meta.mark_consumed(0)
    assert decoder.read_file(pak2_archive, meta, 0) is None
    assert meta.pending() == [1, 2]


def test_entry_key():
    assert entry_key(0) == 0x23
    assert entry_key(0x100) == 0xA3
    assert entry_key(0x1FE) == 0xFF


def test_entry_past_end_of_archive(pak2_files):
    archive = BytesIO(build_pak2(pak2_files, offset_override={1: 0xFFFF}))
    decoder = Pak2ArchiveDecoder()
    with pytest.raises(BadDataOffsetException):
        decoder.read_meta(archive)
    assert isinstance(decoder.recognize(archive), NotRecognized)


def test_recognize_returns_meta(pak2_archive):
    pak2_archive.seek(3)
    result = Pak2ArchiveDecoder().recognize(pak2_archive)
    assert isinstance(result, Recognized)
    assert len(result.meta) == 3
    assert pak2_archive.tell() == 3


def test_empty_archive_is_exactly_six_bytes():
    decoder = Pak2ArchiveDecoder()
    assert decoder.is_recognized(BytesIO(struct.pack("<HI", 0, 0)))
    assert len(decoder.read_meta(BytesIO(struct.pack("<HI", 0, 0)))) == 0
    assert not decoder.is_recognized(BytesIO(struct.pack("<HI", 0, 0) + b"\x00"))


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"\x01\x00",
        struct.pack("<HI", 1, 100) + bytes(20),
        struct.pack("<HI", 1, 300) + bytes(400),
        struct.pack("<HI", 2, 0) + bytes(8),
    ],
)
def test_recognize_rejects_bad_headers(raw):
    result = Pak2ArchiveDecoder().recognize(BytesIO(raw))
    assert not result
    assert result.reason


def test_read_meta_reports_header_mismatch_as_structural():
    with pytest.raises(StructuralException):
        Pak2ArchiveDecoder().read_meta(BytesIO(struct.pack("<HI", 0, 0) + b"junk"))
