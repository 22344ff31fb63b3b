"""Convolution of the interior of an RGBA image, leaving a copied border.

Every pixel at least ``size // 2`` pixels away from each edge is replaced by
the weighted sum of its neighbourhood. The kernel is applied without flipping:
kernel row 0 weighs the row above the pixel and kernel column 0 the column to
its left. The red, green and blue sums are clamped to ``[0, 255]`` and
truncated to integers. Alpha is kept. Pixels closer to the edge than
``size // 2`` are copied unchanged from the input.
"""

from __future__ import annotations

import numpy as np

from .kernel import Kernel, KernelError

__all__ = ["convolve_interior"]


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


def convolve_interior(image: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Return a new ``(h, w, 4)`` uint8 image with its interior convolved.

    The input is left untouched. Raises :class:`KernelError` for kernels of
    even size, which have no centre, and :class:`ValueError` for images that
    are not ``(h, w, 4)`` arrays of byte values.
    """
    out = _as_rgba(image)
    if kernel.size % 2 == 0:
        raise KernelError(f"taille de noyau invalide ({kernel.size}, paire).")

    half = kernel.size // 2
    height, width = out.shape[:2]
    inner_h = height - 2 * half
    inner_w = width - 2 * half
    if inner_h <= 0 or inner_w <= 0:
        return out

    rgb = out[..., :3].astype(np.float64)
    acc = np.zeros((inner_h, inner_w, 3), dtype=np.float64)
    # Accumulate kernel row by row, column by column: the same summation
    # order for every pixel, so truncation matches a per-pixel loop.
    for (fy, fx), weight in np.ndenumerate(kernel.as_array()):
        acc += rgb[fy:fy + inner_h, fx:fx + inner_w] * weight

    acc[np.isnan(acc)] = 0.0
    np.clip(acc, 0.0, 255.0, out=acc)
    out[half:height - half, half:width - half, :3] = acc.astype(np.uint8)
    return out