from io import BytesIO

from ..Archive.decoder_base import ArchiveDecoder
from ..Archive.meta import ArchiveEntry, ArchiveMeta, VirtualFile
from ..Cipher import decrypt, unxor
from ..Exceptions import BadDataOffsetException, RecognitionMismatchException
from ..IO import ExtendedBinaryReader
from ..Misc import decode_text

# u16 file count + u32 table size, no entries
EMPTY_ARCHIVE_SIZE = 6
# offset, size, name length byte and the longest name the table allows
MAX_TABLE_ROW_SIZE = 4 + 4 + 256 + 1

TABLE_KEY_A = 0xC5
TABLE_KEY_B = 0x83
TABLE_KEY_DELTA = 0x53


def entry_key(offset: int) -> int:
    return ((offset >> 1) | 0x23) & 0xFF


class Pak2ArchiveDecoder(ArchiveDecoder):
    name = "twilight-frontier/pak2"

    def _read_meta(self, reader: ExtendedBinaryReader) -> ArchiveMeta:
        container_size = reader.get_length()

        file_count = reader.read_uint16()
        if not file_count and container_size != EMPTY_ARCHIVE_SIZE:
            raise RecognitionMismatchException("Archive has no entries but is not empty")

        table_size = reader.read_uint32()
        if table_size > reader.get_remaining():
            raise RecognitionMismatchException(f"Table size 0x{table_size:X} exceeds the archive")
        if table_size > file_count * MAX_TABLE_ROW_SIZE:
            raise RecognitionMismatchException(f"Table size 0x{table_size:X} is too large for {file_count} entries")

        table_data = bytearray(reader.read_bytes(table_size))
        decrypt(table_data, table_size + 6, TABLE_KEY_A, TABLE_KEY_B, TABLE_KEY_DELTA)
        table_reader = ExtendedBinaryReader(BytesIO(table_data))

        meta = ArchiveMeta()
        for _ in range(file_count):
            offset = table_reader.read_uint32()
            size = table_reader.read_uint32()
            name_size = table_reader.read_byte()
            path = decode_text(table_reader.read_bytes(name_size), self.encoding)
            if offset + size > container_size:
                raise BadDataOffsetException(path, offset, size, container_size)
            meta.add(ArchiveEntry(path, offset, size))
        return meta

    def _read_file(self, reader: ExtendedBinaryReader, entry: ArchiveEntry) -> VirtualFile:
        data = reader.jump_to(entry.offset).read_bytes(entry.size)
        return VirtualFile(entry.path, unxor(data, entry_key(entry.offset)))


__all__ = ["Pak2ArchiveDecoder", "entry_key"]
