import logging
from typing import BinaryIO, Dict, Optional, Tuple

from ..Archive.decoder_base import ArchiveDecoder
from ..Archive.meta import ArchiveEntry, ArchiveMeta, VirtualFile
from ..Compression import decompress_lzss
from ..Exceptions import BadDataOffsetException, ConfigurationException, RecognitionMismatchException, StructuralException
from ..IO import ExtendedBinaryReader
from ..Misc import DEFAULT_ENCODING, decode_text
from ..Output import file_from_image

log = logging.getLogger(__name__)

NAME_SIZE = 16
COMPRESSION_HEADER_SIZE = 8
DICTIONARY_CAPACITY = {1: 0x1000, 2: 0x800}

SPRITE_EXTENSION = "grp"
PALETTE_EXTENSION = "c16"
MASK_EXTENSION = "msk"


class Pak1ArchiveDecoder(ArchiveDecoder):
    """Leaf PAK archives.

    Sprites are stored as separate .grp / .c16 / .msk entries sharing a stem;
    when a composer is given they are merged into one image before the plain
    extraction pass.
    """

    name = "leaf/pak1"

    def __init__(self, version: Optional[int] = None, composer=None, encoding: str = DEFAULT_ENCODING):
        super().__init__(encoding)
        self.version: Optional[int] = None
        self.composer = composer
        if version is not None:
            self.set_version(version)

    def set_version(self, version: int):
        if version not in DICTIONARY_CAPACITY:
            raise ConfigurationException("PAK version can be either '1' or '2'")
        self.version = version

    def check_options(self):
        if self.version is None:
            raise ConfigurationException("Please choose PAK version with --pak-version switch.")

    def _read_meta(self, reader: ExtendedBinaryReader) -> ArchiveMeta:
        container_size = reader.get_length()
        file_count = reader.read_uint32()

        meta = ArchiveMeta()
        for _ in range(file_count):
            path = decode_text(reader.read_to_zero(NAME_SIZE), self.encoding)
            size = reader.read_uint32()
            compressed = reader.read_uint32() > 0
            offset = reader.read_uint32()
            if not size:
                continue
            if offset + size > container_size:
                raise BadDataOffsetException(path, offset, size, container_size)
            meta.add(ArchiveEntry(path, offset, size, compressed))
        return meta

    def _check_recognized(self, reader: ExtendedBinaryReader, meta: ArchiveMeta):
        if not len(meta):
            raise RecognitionMismatchException("Archive has no entries")
        last_entry = meta[len(meta) - 1]
        if last_entry.offset + last_entry.size != reader.get_length():
            raise RecognitionMismatchException("Last entry does not end at the end of the archive")

    def _read_file(self, reader: ExtendedBinaryReader, entry: ArchiveEntry) -> VirtualFile:
        self.check_options()

        reader.jump_to(entry.offset)
        if not entry.compressed:
            return VirtualFile(entry.path, reader.read_bytes(entry.size))

        size_comp = reader.read_uint32()
        size_orig = reader.read_uint32()
        if size_comp < COMPRESSION_HEADER_SIZE:
            raise StructuralException(f"{entry.path}: compressed size 0x{size_comp:X} is smaller than its header")
        data = reader.read_bytes(size_comp - COMPRESSION_HEADER_SIZE)
        return VirtualFile(entry.path, decompress_lzss(data, size_orig, DICTIONARY_CAPACITY[self.version]))

    def preprocess(self, container: BinaryIO, meta: ArchiveMeta, saver) -> Tuple[int, int]:
        if self.composer is None:
            return 0, 0

        sprite_entries: Dict[str, int] = {}
        palette_entries: Dict[str, int] = {}
        mask_entries: Dict[str, int] = {}
        for index, entry in enumerate(meta):
            if entry.has_extension(PALETTE_EXTENSION):
                palette_entries[entry.stem] = index
            elif entry.has_extension(SPRITE_EXTENSION):
                sprite_entries[entry.stem] = index
            elif entry.has_extension(MASK_EXTENSION):
                mask_entries[entry.stem] = index

        composed = 0
        failed = 0
        for stem in sorted(sprite_entries):
            group = [sprite_entries[stem]]
            palette_index = palette_entries.get(stem)
            mask_index = mask_entries.get(stem)
            try:
                sprite_file = self.read_file(container, meta, group[0])
                palette_file = None
                mask_file = None
                if palette_index is not None:
                    palette_file = self.read_file(container, meta, palette_index)
                    group.append(palette_index)
                if mask_index is not None:
                    mask_file = self.read_file(container, meta, mask_index)
                    group.append(mask_index)

                image = self.composer.compose(
                    sprite_file.data,
                    palette_file.data if palette_file else None,
                    mask_file.data if mask_file else None,
                )
                output_file = file_from_image(image, sprite_file.path)
            except ConfigurationException:
                raise
            except Exception as e:
                log.warning("Could not compose %s, its parts will be extracted as they are: %s", meta[group[0]].path, e)
                continue

            if not saver.save(output_file.path, output_file.data):
                # parts stay pending and are extracted as plain files
                failed += 1
                continue
            for index in group:
                meta.mark_consumed(index)
            composed += 1
        return composed, failed


__all__ = ["Pak1ArchiveDecoder", "DICTIONARY_CAPACITY"]
