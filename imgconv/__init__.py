"""Convolution filtering of RGBA images with square kernels, and PNG input and output."""

__version__ = "0.1.0"
__all__ = ["interior", "kernel", "mirrored", "pngio"]