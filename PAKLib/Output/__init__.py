from .file_saver import FileSaver, FileSaverHdd, FileSaverMemory
from .image import file_from_image

__all__ = ["FileSaver", "FileSaverHdd", "FileSaverMemory", "file_from_image"]
