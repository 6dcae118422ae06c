from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterator, List


@dataclass
class ArchiveEntry:
    path: str
    offset: int
    size: int
    compressed: bool = False

    @property
    def posix_path(self) -> PurePosixPath:
        return PurePosixPath(self.path.replace("\\", "/"))

    @property
    def stem(self) -> str:
        return self.posix_path.stem

    def has_extension(self, extension: str) -> bool:
        return self.posix_path.suffix.lower() == "." + extension.lower().lstrip(".")

    def __str__(self):
        return self.path


@dataclass
class VirtualFile:
    path: str
    data: bytes


class ArchiveMeta:
    """Entries in table order plus the consumed flags, addressed by index."""

    def __init__(self):
        self.entries: List[ArchiveEntry] = []
        self._consumed: List[bool] = []

    def add(self, entry: ArchiveEntry) -> int:
        self.entries.append(entry)
        self._consumed.append(False)
        return len(self.entries) - 1

    def is_consumed(self, index: int) -> bool:
        return self._consumed[index]

    def mark_consumed(self, index: int):
        self._consumed[index] = True

    def pending(self) -> List[int]:
        return [i for i, consumed in enumerate(self._consumed) if not consumed]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> ArchiveEntry:
        return self.entries[index]


__all__ = ["ArchiveEntry", "ArchiveMeta", "VirtualFile"]
