from .extended_binary import ExtendedBinaryReader

__all__ = ["ExtendedBinaryReader"]
