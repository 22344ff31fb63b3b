"""Square convolution kernels read from plain-text files.

A kernel file holds the kernel size followed by ``size * size`` values in
row-major order. Two readers are provided:

* :func:`parse_kernel` / :func:`load_kernel` validate strictly. The size must
  be odd and between 3 and 255, and every value must be present.
* :func:`parse_loose_kernel` / :func:`load_loose_kernel` read tokens separated
  by spaces and newlines. Numbers are read as leading numeric prefixes, and
  missing values count as zero.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterator, Union

import numpy as np

__all__ = [
    "KernelError",
    "Kernel",
    "parse_kernel",
    "load_kernel",
    "parse_loose_kernel",
    "load_loose_kernel",
]

PathType = Union[str, "PathLike[str]"]

MIN_SIZE = 3
MAX_SIZE = 255

_C_WHITESPACE = " \t\n\v\f\r"
_SKIP_WS = re.compile(r"[ \t\n\v\f\r]*")
_UNSIGNED = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class KernelError(ValueError):
    """Raised when a kernel cannot be read or is malformed."""


@dataclass(frozen=True)
class Kernel:
    """A square kernel of ``size * size`` values stored row by row."""

    size: int
    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if self.size < 0:
            raise KernelError(f"taille de noyau invalide ({self.size}).")
        values = tuple(float(v) for v in self.values)
        if len(values) != self.size * self.size:
            raise KernelError(
                f"un noyau de taille {self.size} demande "
                f"{self.size * self.size} valeurs, {len(values)} fournies."
            )
        object.__setattr__(self, "values", values)

    def at(self, row: int, col: int) -> float:
        """Return the value at ``row``, ``col``."""
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"({row}, {col}) hors du noyau de taille {self.size}")
        return self.values[row * self.size + col]

    def as_array(self) -> np.ndarray:
        """Return the kernel as a ``size x size`` float64 array."""
        return np.array(self.values, dtype=np.float64).reshape(self.size, self.size)


class _Scanner:
    """Reads whitespace-separated numbers the way a formatted stream does."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def read(self, pattern: re.Pattern[str]) -> str | None:
        self._pos = _SKIP_WS.match(self._text, self._pos).end()
        match = pattern.match(self._text, self._pos)
        if match is None:
            return None
        self._pos = match.end()
        return match.group()


def parse_kernel(text: str) -> Kernel:
    """Parse a kernel strictly: odd size in [3, 255] and all values present."""
    scanner = _Scanner(text)
    size_token = scanner.read(_UNSIGNED)
    size = int(size_token) if size_token is not None else 0

    if size < MIN_SIZE or size > MAX_SIZE:
        raise KernelError("taille de noyau invalide (<3 ou >255).")
    if size % 2 == 0:
        raise KernelError("taille de noyau invalide (mod 2 = 0).")

    values = []
    for _ in range(size * size):
        token = scanner.read(_DECIMAL)
        if token is None:
            raise KernelError("il manque des valeurs dans le fichier.")
        values.append(float(token))
    return Kernel(size, tuple(values))


def load_kernel(path: PathType) -> Kernel:
    """Read and strictly parse the kernel file at ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise KernelError(f"{path} - n'a pas pu être ouvert.") from exc
    try:
        return parse_kernel(text)
    except KernelError as exc:
        raise KernelError(f"{path} - {exc}") from exc


def _tokens(text: str) -> Iterator[str]:
    return (token for token in re.split(r"[ \n]+", text) if token)


def _atoi(token: str) -> int:
    match = _INT_PREFIX.match(token.lstrip(_C_WHITESPACE))
    return int(match.group()) if match else 0


def _atof(token: str) -> float:
    match = _FLOAT_PREFIX.match(token.lstrip(_C_WHITESPACE))
    return float(match.group()) if match else 0.0


def parse_loose_kernel(text: str) -> Kernel:
    """Parse a kernel leniently from tokens split on spaces and newlines.

    Each token is read by its numeric prefix; missing values are zero.
    """
    tokens = _tokens(text)
    size = _atoi(next(tokens, ""))
    if size < 0:
        raise KernelError(f"taille de noyau invalide ({size}).")
    values = tuple(_atof(next(tokens, "")) for _ in range(size * size))
    return Kernel(size, values)


def load_loose_kernel(path: PathType) -> Kernel:
    """Read the kernel file at ``path`` with :func:`parse_loose_kernel`."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise KernelError(
            f"Le fichier noyau fourni ({path}) est invalide."
        ) from exc
    return parse_loose_kernel(text)