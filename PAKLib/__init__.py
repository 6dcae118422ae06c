from .Archive import ArchiveDecoder, ArchiveEntry, ArchiveMeta, DecoderRegistry, UnpackSummary, VirtualFile, unpack
from .Formats import Pak1ArchiveDecoder, Pak2ArchiveDecoder
from .Output import FileSaverHdd, FileSaverMemory

__all__ = [
    "ArchiveDecoder",
    "ArchiveEntry",
    "ArchiveMeta",
    "DecoderRegistry",
    "UnpackSummary",
    "VirtualFile",
    "unpack",
    "Pak1ArchiveDecoder",
    "Pak2ArchiveDecoder",
    "FileSaverHdd",
    "FileSaverMemory",
]
