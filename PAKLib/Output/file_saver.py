import logging
from pathlib import Path, PurePosixPath
from typing import List, Tuple, Union

log = logging.getLogger(__name__)


class FileSaver:
    def save(self, path: str, data: bytes) -> bool:
        raise NotImplementedError


class FileSaverHdd(FileSaver):
    """Writes extracted files below `output_dir`, keeping the archive's directory layout."""

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def get_full_path(self, path: str) -> Path:
        relative = PurePosixPath(path.replace("\\", "/"))
        parts = [part for part in relative.parts if part not in ("", "/", ".", "..")]
        if not parts:
            raise ValueError(f"Invalid file name: {path!r}")
        return self.output_dir.joinpath(*parts)

    def save(self, path: str, data: bytes) -> bool:
        try:
            full_path = self.get_full_path(path)
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(data)
        except (OSError, ValueError) as e:
            log.warning("Failed to save %s: %s", path, e)
            return False
        log.debug("Saved %s (%d bytes)", full_path, len(data))
        return True


class FileSaverMemory(FileSaver):
    def __init__(self):
        self.files: List[Tuple[str, bytes]] = []

    def save(self, path: str, data: bytes) -> bool:
        self.files.append((path, bytes(data)))
        return True

    def get_saved(self) -> List[Tuple[str, bytes]]:
        return list(self.files)


__all__ = ["FileSaver", "FileSaverHdd", "FileSaverMemory"]
