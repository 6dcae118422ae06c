import struct
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

import pytest
from PIL import Image

from PAKLib.Cipher import decrypt, unxor
from PAKLib.Compression import compress_lzss
from PAKLib.Exceptions import ReconstructionFailureException
from PAKLib.Formats import DICTIONARY_CAPACITY
from PAKLib.Formats.twilight_frontier_pak2 import TABLE_KEY_A, TABLE_KEY_B, TABLE_KEY_DELTA, entry_key


def build_pak2(files: Sequence[Tuple[bytes, bytes]], offset_override: Optional[dict] = None) -> bytes:
    """Build a Twilight Frontier pak from (raw name, payload) pairs."""
    offset_override = offset_override or {}
    table_size = sum(4 + 4 + 1 + len(name) for name, _ in files)
    offset = 6 + table_size

    table = bytearray()
    body = bytearray()
    for i, (name, payload) in enumerate(files):
        table += struct.pack("<IIB", offset_override.get(i, offset), len(payload), len(name)) + name
        body += unxor(payload, entry_key(offset))
        offset += len(payload)

    decrypt(table, table_size + 6, TABLE_KEY_A, TABLE_KEY_B, TABLE_KEY_DELTA)
    return struct.pack("<HI", len(files), table_size) + bytes(table) + bytes(body)


def build_pak1(files: Sequence[Tuple[str, Optional[bytes], bool]], version: int = 1) -> bytes:
    """Build a Leaf pak from (name, payload, compressed) rows; a None payload is a placeholder row."""
    data_offset = 4 + len(files) * 28
    table = bytearray(struct.pack("<I", len(files)))
    body = bytearray()
    for name, payload, compressed in files:
        if payload is None:
            table += name.encode("cp932").ljust(16, b"\x00") + struct.pack("<III", 0, 0, 0)
            continue
        if compressed:
            packed = compress_lzss(payload, DICTIONARY_CAPACITY[version])
            stored = struct.pack("<II", len(packed) + 8, len(payload)) + packed
        else:
            stored = payload
        table += name.encode("cp932").ljust(16, b"\x00")
        table += struct.pack("<III", len(stored), int(compressed), data_offset + len(body))
        body += stored
    return bytes(table) + bytes(body)


class SpriteComposer:
    def __init__(self):
        self.calls: List[Tuple[bytes, Optional[bytes], Optional[bytes]]] = []

    def compose(self, sprite: bytes, palette: Optional[bytes], mask: Optional[bytes]):
        self.calls.append((sprite, palette, mask))
        return Image.new("RGBA", (len(sprite), 1))


class BrokenComposer:
    def compose(self, sprite, palette, mask):
        raise ReconstructionFailureException("unsupported sprite")


@pytest.fixture
def pak2_files():
    return [
        (b"data/script.txt", b"#cutscene 1\nhello\n"),
        ("画像/立ち絵.bmp".encode("cp932"), bytes(range(256)) * 3),
        (b"empty.bin", b""),
    ]


@pytest.fixture
def pak2_archive(pak2_files):
    return BytesIO(build_pak2(pak2_files))


@pytest.fixture
def sprite_rows():
    return [
        ("chara.grp", b"\x01\x02\x03\x04" * 64, True),
        ("chara.c16", bytes(range(32)) * 2, False),
        ("chara.msk", b"\xff\x00" * 40, True),
        ("bg.bmp", b"BM" + b"\x10" * 300, True),
    ]


class PickyComposer(SpriteComposer):
    """Fails for one sprite payload, composes the others."""

    def __init__(self, bad_sprite: bytes):
        super().__init__()
        self.bad_sprite = bad_sprite

    def compose(self, sprite, palette, mask):
        if sprite == self.bad_sprite:
            raise ReconstructionFailureException("unsupported sprite")
        return super().compose(sprite, palette, mask)


@pytest.fixture
def two_sprite_rows():
    return [
        ("alpha.grp", b"\x11" * 50, True),
        ("alpha.c16", bytes(range(64)), True),
        ("beta.grp", b"\x22" * 40, False),
        ("beta.msk", b"\x00\xff" * 10, True),
    ]
