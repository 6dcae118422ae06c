import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union

from ..Exceptions import RecognitionMismatchException, StructuralException
from ..IO import ExtendedBinaryReader
from ..Misc import DEFAULT_ENCODING
from .meta import ArchiveEntry, ArchiveMeta, VirtualFile

log = logging.getLogger(__name__)


@dataclass
class Recognized:
    meta: ArchiveMeta

    def __bool__(self):
        return True


@dataclass
class NotRecognized:
    reason: str

    def __bool__(self):
        return False


RecognitionResult = Union[Recognized, NotRecognized]


class ArchiveDecoder:
    """Common surface of the archive decoders.

    Subclasses implement `_read_meta` and `_read_file`; `_check_recognized`
    and `preprocess` are optional.
    """

    name = ""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    def recognize(self, container: BinaryIO) -> RecognitionResult:
        """Parse the whole table to decide whether this decoder owns the container.

        The stream position is restored and nothing is kept on the decoder.
        """
        position = container.tell()
        reader = ExtendedBinaryReader(container)
        try:
            reader.jump_to(0)
            meta = self._read_meta(reader)
            self._check_recognized(reader, meta)
        except (RecognitionMismatchException, StructuralException) as e:
            log.debug("%s: not recognized (%s)", self.name, e)
            return NotRecognized(str(e))
        finally:
            container.seek(position)
        return Recognized(meta)

    def is_recognized(self, container: BinaryIO) -> bool:
        return bool(self.recognize(container))

    def read_meta(self, container: BinaryIO) -> ArchiveMeta:
        reader = ExtendedBinaryReader(container)
        reader.jump_to(0)
        try:
            return self._read_meta(reader)
        except RecognitionMismatchException as e:
            raise StructuralException(f"Not a {self.name} archive: {e.message}") from e

    def read_file(self, container: BinaryIO, meta: ArchiveMeta, index: int) -> Optional[VirtualFile]:
        if meta.is_consumed(index):
            return None
        return self._read_file(ExtendedBinaryReader(container), meta[index])

    def check_options(self):
        """Raise ConfigurationException when extraction cannot start yet."""
        pass

    def preprocess(self, container: BinaryIO, meta: ArchiveMeta, saver) -> Tuple[int, int]:
        """Emit composite files ahead of plain extraction; returns (composed, failed) counts."""
        return 0, 0

    def _read_meta(self, reader: ExtendedBinaryReader) -> ArchiveMeta:
        raise NotImplementedError

    def _check_recognized(self, reader: ExtendedBinaryReader, meta: ArchiveMeta):
        pass

    def _read_file(self, reader: ExtendedBinaryReader, entry: ArchiveEntry) -> VirtualFile:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


__all__ = ["ArchiveDecoder", "Recognized", "NotRecognized", "RecognitionResult"]
