"""Convolution of a whole RGBA image over mirrored margins.

The image is extended on every side by ``size // 2`` pixels reflected
symmetrically, with the edge pixel repeated. Each output pixel is the true
convolution of that extended image with the kernel: the kernel is flipped,
so kernel entry ``(size - 1, size - 1)`` weighs the neighbour above and to
the left. The red, green and blue sums are clamped to ``[0, 255]`` and
truncated to integers. Alpha is kept from the input.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from .kernel import Kernel, KernelError

__all__ = ["Layout", "aligned_layout", "mirror_pad", "convolve_mirrored"]

_ALIGNMENT = 16


class Layout(NamedTuple):
    """Column layout of a padded row aligned on 16-pixel boundaries."""

    left: int
    stride: int
    right: int


def _align(value: int) -> int:
    return (value + _ALIGNMENT - 1) & ~(_ALIGNMENT - 1)


def aligned_layout(width: int, margin: int) -> Layout:
    """Return the aligned left margin, total row stride and right padding.

    The left margin is ``margin`` rounded up to a multiple of 16 pixels, and
    the part of the row after it is ``width + margin`` rounded up likewise.
    """
    if width < 0:
        raise ValueError(f"invalid width {width}")
    if margin < 0:
        raise ValueError(f"invalid margin {margin}")
    left = _align(margin)
    stride = left + _align(width + margin)
    return Layout(left, stride, stride - (left + width))


def _as_rgba(image: np.ndarray) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"invalid image shape {arr.shape}, expected (h, w, 4)")
    if arr.dtype != np.uint8:
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"invalid pixel type {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("pixel values outside [0, 255]")
    return arr.astype(np.uint8, copy=True)


def mirror_pad(image: np.ndarray, margin: int) -> np.ndarray:
    """Return ``image`` extended by ``margin`` mirrored pixels on every side.

    Row ``margin - 1 - i`` of the result repeats image row ``i``, and the
    same holds for columns and at the other edges. The margin may not exceed
    the image height or width.
    """
    arr = _as_rgba(image)
    if margin < 0:
        raise ValueError(f"invalid margin {margin}")
    height, width = arr.shape[:2]
    if margin > height or margin > width:
        raise ValueError(
            f"margin {margin} larger than the image ({width} x {height})"
        )
    return np.pad(arr, ((margin, margin), (margin, margin), (0, 0)), mode="symmetric")


def convolve_mirrored(image: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Return a new ``(h, w, 4)`` uint8 image convolved over mirrored margins.

    The input is left untouched. Raises :class:`KernelError` for kernels of
    even size and :class:`ValueError` for malformed images or images smaller
    than the kernel margin.
    """
    if kernel.size % 2 == 0:
        raise KernelError(f"taille de noyau invalide ({kernel.size}, paire).")
    out = _as_rgba(image)
    margin = kernel.size // 2
    padded = mirror_pad(out, margin)
    height, width = out.shape[:2]
    if height == 0 or width == 0:
        return out

    rgb = padded[..., :3].astype(np.float64)
    flipped = kernel.as_array()[::-1, ::-1]
    acc = np.zeros((height, width, 3), dtype=np.float64)
    # Same summation order for every pixel: neighbour rows outer, columns inner.
    for (p, q), weight in np.ndenumerate(flipped):
        acc += rgb[p:p + height, q:q + width] * weight

    acc[np.isnan(acc)] = 0.0
    np.clip(acc, 0.0, 255.0, out=acc)
    out[..., :3] = acc.astype(np.uint8)
    return out