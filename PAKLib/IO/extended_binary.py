import struct
from io import SEEK_END
from typing import BinaryIO

from ..Exceptions import EndOfStreamException


class ExtendedBinaryReader:
    """Little-endian seek-then-read access to an archive stream.

    Every read is exact: a short read raises EndOfStreamException instead of
    returning fewer bytes.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def get_length(self) -> int:
        current = self.stream.tell()
        self.stream.seek(0, SEEK_END)
        length = self.stream.tell()
        self.stream.seek(current)
        return length

    def get_position(self) -> int:
        return self.stream.tell()

    def get_remaining(self) -> int:
        return self.get_length() - self.get_position()

    def jump_to(self, position: int) -> "ExtendedBinaryReader":
        self.stream.seek(position)
        return self

    def read_bytes(self, count: int) -> bytes:
        data = self.stream.read(count)
        if len(data) != count:
            raise EndOfStreamException(count, len(data))
        return data

    def read_to_zero(self, length: int) -> bytes:
        """Read a fixed-size field and cut it at the first NUL."""
        return self.read_bytes(length).split(b"\x00", 1)[0]

    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    def read_uint16(self) -> int:
        return struct.unpack("<H", self.read_bytes(2))[0]

    def read_uint32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]
