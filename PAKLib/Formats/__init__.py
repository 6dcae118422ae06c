from .leaf_pak1 import DICTIONARY_CAPACITY, Pak1ArchiveDecoder
from .twilight_frontier_pak2 import Pak2ArchiveDecoder

__all__ = ["DICTIONARY_CAPACITY", "Pak1ArchiveDecoder", "Pak2ArchiveDecoder"]
