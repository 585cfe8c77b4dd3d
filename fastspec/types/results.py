"""Result types for fastspec.

Each result type includes methods for serialization, export, and analysis.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from fastspec.primitives.mel import bin_frequencies
from fastspec.primitives.resample import resample

if TYPE_CHECKING:
    from fastspec.colormaps import ColorMap, ColorMapSpec
    from fastspec.config import SpectrogramConfig


class Result(ABC):
    """Abstract base class for all result types.

    Provides a common interface for serialization and export.
    Subclasses must implement to_dict() and save().

    Example:
        >>> result = fastspec.compute_spectrogram(samples, 44100)
        >>> result.to_dict()  # Get as dictionary
        >>> result.save("frequencies.json")  # Save intensities
        >>> result.to_json("result.json")  # Save everything as JSON
    """

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Convert result to a dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization.
        """
        ...

    @abstractmethod
    def save(self, path: str | Path, **kwargs: Any) -> Path:
        """Save result to a file.

        Args:
            path: Output file path
            **kwargs: Format-specific options

        Returns:
            Path to saved file
        """
        ...

    def to_json(self, path: str | Path, indent: int = 2) -> Path:
        """Save result as JSON file.

        Args:
            path: Output file path
            indent: JSON indentation level

        Returns:
            Path to saved file
        """
        path = Path(path)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=indent, default=str)
        return path

    def __repr__(self) -> str:
        """Default representation."""
        class_name = self.__class__.__name__
        return f"{class_name}(...)"


@dataclass(repr=False, eq=False)
class SpectrogramResult(Result):
    """Result from spectrogram computation.

    Attributes:
        matrices: One uint8 intensity matrix of shape (columns, rows) per
            processed channel
        sample_rate: Sample rate of the analyzed audio
        config: Configuration the matrices were computed with
        peaks: Largest linear magnitude seen in each channel (diagnostic)
        step: Samples between consecutive frame starts
    """

    matrices: list[np.ndarray]
    sample_rate: float
    config: SpectrogramConfig
    peaks: list[float] = field(default_factory=list)
    step: int = 0

    def __len__(self) -> int:
        return len(self.matrices)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.matrices)

    def __getitem__(self, channel: int) -> np.ndarray:
        return self.matrices[channel]

    @property
    def num_columns(self) -> int:
        """Time columns per channel."""
        return self.matrices[0].shape[0] if self.matrices else 0

    @property
    def num_rows(self) -> int:
        """Frequency rows per channel."""
        return self.matrices[0].shape[1] if self.matrices else self.config.num_rows

    @property
    def frame_times(self) -> np.ndarray:
        """Start time in seconds of the frame behind each column."""
        return np.arange(self.num_columns) * (self.step / self.sample_rate)

    def row_frequencies(self) -> np.ndarray:
        """Frequency in Hz represented by each row."""
        return bin_frequencies(
            self.config.scale,
            self.config.frame_size,
            self.sample_rate,
            self.config.mel_filters,
        )

    def frequency_slice(
        self, fmin: float | None = None, fmax: float | None = None
    ) -> slice:
        """Row range whose frequencies lie within ``[fmin, fmax]``.

        Bounds default to the configured display range
        (``frequency_min`` and ``frequency_max`` or Nyquist).

        Example:
            >>> rows = result.frequency_slice()
            >>> visible = result[0][:, rows]
        """
        if fmin is None:
            fmin = self.config.frequency_min
        if fmax is None:
            fmax = self.config.resolve_frequency_max(self.sample_rate)
        freqs = self.row_frequencies()
        start = int(np.searchsorted(freqs, fmin, side="left"))
        stop = int(np.searchsorted(freqs, fmax, side="right"))
        return slice(start, max(start, stop))

    def resample(self, width: int) -> list[np.ndarray]:
        """Every channel rescaled to ``width`` columns."""
        return [resample(m, width) for m in self.matrices]

    def to_rgba(
        self,
        color_map: ColorMap | ColorMapSpec | None = None,
        width: int | None = None,
    ) -> list[np.ndarray]:
        """Map intensities to RGBA floats.

        Args:
            color_map: Colormap to use (None = the configured one)
            width: Resample to this many columns first

        Returns:
            One float64 array of shape (columns, rows, 4) per channel
        """
        from fastspec.colormaps import ColorMap

        cmap = (
            self.config.build_color_map()
            if color_map is None
            else ColorMap.from_spec(color_map)
        )
        matrices = self.matrices if width is None else self.resample(width)
        return [cmap.apply(m) for m in matrices]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sample_rate": self.sample_rate,
            "step": self.step,
            "peaks": list(self.peaks),
            "config": self.config.to_dict(),
            "frequencies": [m.tolist() for m in self.matrices],
        }

    def save(self, path: str | Path, **kwargs: Any) -> Path:
        """Save intensities in the precomputed frequencies format.

        The file can be read back with :func:`fastspec.load_frequencies`.
        """
        from fastspec.io.frequencies import save_frequencies

        return save_frequencies(self.matrices, path)

    def __repr__(self) -> str:
        return (
            f"SpectrogramResult(channels={len(self)}, columns={self.num_columns}, "
            f"rows={self.num_rows}, sample_rate={self.sample_rate})"
        )


__all__ = ["Result", "SpectrogramResult"]
