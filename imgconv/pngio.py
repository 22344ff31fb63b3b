"""Reading and writing PNG images as RGBA pixel arrays."""

from __future__ import annotations

from os import PathLike
from typing import Union

import numpy as np
from PIL import Image

__all__ = ["ImageError", "load_rgba", "save_rgba"]

PathType = Union[str, "PathLike[str]"]


class ImageError(Exception):
    """Raised when an image cannot be read or written."""


def load_rgba(path: PathType) -> np.ndarray:
    """Load the image at ``path`` as a ``(height, width, 4)`` uint8 array."""
    try:
        with Image.open(path) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageError(f"{path} - {exc}") from exc
    return np.array(rgba, dtype=np.uint8)


def _as_rgba_bytes(image: np.ndarray) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ImageError(f"forme d'image invalide {arr.shape}, attendu (h, l, 4)")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ImageError("image vide")
    if arr.dtype != np.uint8:
        if not np.issubdtype(arr.dtype, np.integer):
            raise ImageError(f"type de pixel invalide {arr.dtype}")
        if arr.min() < 0 or arr.max() > 255:
            raise ImageError("valeurs de pixel hors de [0, 255]")
        arr = arr.astype(np.uint8)
    return np.ascontiguousarray(arr)


def save_rgba(path: PathType, image: np.ndarray) -> None:
    """Write a ``(height, width, 4)`` RGBA array to ``path`` as a PNG file."""
    arr = _as_rgba_bytes(image)
    try:
        Image.fromarray(arr).save(path, format="PNG")
    except (OSError, ValueError) as exc:
        raise ImageError(f"{path} - {exc}") from exc