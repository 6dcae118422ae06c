from .meta import ArchiveEntry, ArchiveMeta, VirtualFile
from .decoder_base import ArchiveDecoder, NotRecognized, Recognized
from .registry import DecoderRegistry, default_decoders
from .unpacker import UnpackSummary, unpack

__all__ = [
    "ArchiveEntry",
    "ArchiveMeta",
    "VirtualFile",
    "ArchiveDecoder",
    "Recognized",
    "NotRecognized",
    "DecoderRegistry",
    "default_decoders",
    "UnpackSummary",
    "unpack",
]
