from io import BytesIO
from pathlib import PurePosixPath

import numpy as np
from PIL import Image

from ..Archive.meta import VirtualFile


def file_from_image(image, path: str) -> VirtualFile:
    """Encode a composed image as PNG, named after `path` with a .png extension."""
    if isinstance(image, np.ndarray):
        image = Image.fromarray(image)
    if not isinstance(image, Image.Image):
        raise TypeError(f"Expected an image, got {type(image).__name__}")

    buffer = BytesIO()
    image.save(buffer, format="PNG")

    name = str(PurePosixPath(path.replace("\\", "/")).with_suffix(".png"))
    return VirtualFile(name, buffer.getvalue())


__all__ = ["file_from_image"]
