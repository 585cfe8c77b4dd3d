"""
Colormaps for intensity matrices.

A :class:`ColorMap` is a validated, read-only table of 256 RGBA entries
(floats in [0, 1]) indexed by intensity byte.

Named maps:
    - ``roseus``: perceptually uniform gradient (default)
    - ``gray``: luminance falling from white to black
    - ``igray``: luminance rising from black to white
"""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from fastspec.constants import INTENSITY_LEVELS
from fastspec.exceptions import ConfigurationError, DataError

from ._roseus import ROSEUS

ColorMapSpec = str | Sequence[Sequence[float]] | np.ndarray


def _gray() -> np.ndarray:
    levels = (INTENSITY_LEVELS - 1 - np.arange(INTENSITY_LEVELS)) / INTENSITY_LEVELS
    return np.column_stack([levels, levels, levels, np.ones(INTENSITY_LEVELS)])


def _igray() -> np.ndarray:
    levels = np.arange(INTENSITY_LEVELS) / INTENSITY_LEVELS
    return np.column_stack([levels, levels, levels, np.ones(INTENSITY_LEVELS)])


def _roseus() -> np.ndarray:
    return np.array(ROSEUS, dtype=np.float64)


_NAMED_MAPS = {
    "roseus": _roseus,
    "gray": _gray,
    "igray": _igray,
}


@dataclass(frozen=True, eq=False)
class ColorMap:
    """256-entry RGBA lookup table.

    Attributes:
        name: Map name, or "custom" for explicit tables
        table: Read-only float64 array of shape (256, 4)
    """

    name: str
    table: np.ndarray = field(repr=False)

    @classmethod
    def from_spec(cls, spec: ColorMapSpec | ColorMap | None = None) -> ColorMap:
        """Build a colormap from a name or an explicit table.

        Args:
            spec: Map name, an existing ColorMap, an explicit table of
                256 entries of 4 numbers, or None for the default map

        Returns:
            ColorMap instance

        Raises:
            ConfigurationError: If the name is unknown or the table is malformed
        """
        if spec is None:
            spec = "roseus"
        if isinstance(spec, ColorMap):
            return spec
        if isinstance(spec, str):
            try:
                factory = _NAMED_MAPS[spec]
            except KeyError:
                raise ConfigurationError(
                    f"No such colormap '{spec}'. Supported: {', '.join(_NAMED_MAPS)}"
                ) from None
            return cls(name=spec, table=_freeze(factory()))
        return cls(name="custom", table=_freeze(_validate_table(spec)))

    @staticmethod
    def available() -> list[str]:
        """Names accepted by :meth:`from_spec`."""
        return list(_NAMED_MAPS)

    def map(self, value: int) -> tuple[float, float, float, float]:
        """RGBA color of one intensity byte."""
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise DataError(f"Intensity must be an integer byte, got {value!r}")
        if not 0 <= value < INTENSITY_LEVELS:
            raise DataError(f"Intensity must be in [0, 255], got {value}")
        r, g, b, a = self.table[int(value)]
        return (float(r), float(g), float(b), float(a))

    __call__ = map

    def apply(self, matrix: np.ndarray) -> np.ndarray:
        """Map a whole intensity matrix to RGBA.

        Args:
            matrix: uint8 intensities of any shape

        Returns:
            float64 array with a trailing axis of 4 (r, g, b, a)
        """
        m = np.asarray(matrix)
        if m.dtype != np.uint8:
            if m.size and (m.min() < 0 or m.max() >= INTENSITY_LEVELS):
                raise DataError("Intensities must be in [0, 255]")
            m = m.astype(np.uint8)
        return self.table[m]

    def __len__(self) -> int:
        return INTENSITY_LEVELS


def _validate_table(spec: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    if not hasattr(spec, "__len__"):
        raise ConfigurationError(f"Colormap must be a name or a table, got {spec!r}")
    if len(spec) != INTENSITY_LEVELS:
        raise ConfigurationError(
            f"Colormap must contain {INTENSITY_LEVELS} elements, got {len(spec)}"
        )
    for i, entry in enumerate(spec):
        if isinstance(entry, (str, bytes)) or not hasattr(entry, "__len__"):
            raise ConfigurationError(f"ColorMap entry {i} is not a sequence: {entry!r}")
        if len(entry) != 4:
            raise ConfigurationError(
                f"ColorMap entries must contain 4 values (entry {i} has {len(entry)})"
            )
        for v in entry:
            if isinstance(v, bool) or not isinstance(v, numbers.Real):
                raise ConfigurationError(
                    f"ColorMap entry {i} contains a non-numeric value: {v!r}"
                )
            if not 0.0 <= v <= 1.0:
                raise ConfigurationError(
                    f"ColorMap entry {i} has a component outside [0, 1]: {v!r}"
                )
    return np.array(spec, dtype=np.float64)


def _freeze(table: np.ndarray) -> np.ndarray:
    table.flags.writeable = False
    return table


def get_color_map(spec: ColorMapSpec | ColorMap | None = None) -> ColorMap:
    """Shorthand for :meth:`ColorMap.from_spec`."""
    return ColorMap.from_spec(spec)


__all__ = ["ColorMap", "ColorMapSpec", "get_color_map"]
