import logging
from typing import BinaryIO, List, Optional, Sequence

from ..Exceptions import UnknownFormatException, UnrecognizedFormatException
from ..Formats import Pak1ArchiveDecoder, Pak2ArchiveDecoder
from .decoder_base import ArchiveDecoder

log = logging.getLogger(__name__)


def default_decoders() -> List[ArchiveDecoder]:
    # pak2 has the stricter header checks, so it is tried first
    return [Pak2ArchiveDecoder(), Pak1ArchiveDecoder()]


class DecoderRegistry:
    def __init__(self, decoders: Optional[Sequence[ArchiveDecoder]] = None):
        self.decoders: List[ArchiveDecoder] = list(decoders) if decoders is not None else default_decoders()

    def names(self) -> List[str]:
        return [decoder.name for decoder in self.decoders]

    def get(self, name: str) -> ArchiveDecoder:
        for decoder in self.decoders:
            if decoder.name == name:
                return decoder
        raise UnknownFormatException(name)

    def detect(self, container: BinaryIO, container_name: str = "input") -> ArchiveDecoder:
        for decoder in self.decoders:
            if decoder.recognize(container):
                log.debug("%s recognized as %s", container_name, decoder.name)
                return decoder
        raise UnrecognizedFormatException(container_name)


__all__ = ["DecoderRegistry", "default_decoders"]
