"""Spectrogram configuration.

Provides the serializable configuration base class and the
:class:`SpectrogramConfig` dataclass that collects every option of the
spectrogram pipeline, validated eagerly on construction.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, ClassVar, Self

import numpy as np

from fastspec.colormaps import ColorMap, ColorMapSpec
from fastspec.constants import (
    DEFAULT_COLOR_MAP,
    DEFAULT_FRAME_SIZE,
    DEFAULT_GAIN_DB,
    DEFAULT_OVERLAP_RATIO,
    DEFAULT_RANGE_DB,
    DEFAULT_SCALE,
    DEFAULT_WINDOW,
    MEL_FILTERS_PER_FRAME_DIVISOR,
)
from fastspec.exceptions import ConfigurationError
from fastspec.primitives._validation import (
    validate_frame_size,
    validate_non_negative,
    validate_positive,
)
from fastspec.primitives.quantize import QUANTIZE_MODES
from fastspec.primitives.window import WindowFunction

_logger = logging.getLogger(__name__)


class BaseConfig:
    """Base class for configurations.

    Provides common serialization methods (from_dict, to_dict, from_json, to_json)
    and preset lookup (from_name).

    Subclasses should be decorated with @dataclass and define their
    configuration fields as class attributes.

    Example:
        >>> @dataclass
        ... class MyConfig(BaseConfig):
        ...     frame_size: int = 512
        ...
        >>> config = MyConfig.from_dict({"frame_size": 1024})
        >>> config.to_dict()
        {'frame_size': 1024}
    """

    # Subclasses can define a mapping of name -> factory method
    # for use with from_name()
    _config_registry: ClassVar[dict[str, str]] = {}

    # Alternative spellings accepted by from_dict()
    _aliases: ClassVar[dict[str, str]] = {}

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Self:
        """Create a config instance from a dictionary.

        Only keys that correspond to valid fields (or their aliases) are
        used. Extra keys are silently ignored.

        Args:
            d: Dictionary of configuration values

        Returns:
            Config instance with values from dictionary
        """
        valid_fields = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in d.items():
            name = cls._aliases.get(key, key)
            if name in valid_fields:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary.

        Returns:
            Dictionary representation of the config
        """
        out = asdict(self)
        for key, value in out.items():
            if isinstance(value, np.ndarray):
                out[key] = value.tolist()
        return out

    @classmethod
    def from_json(cls, path: str | Path) -> Self:
        """Load config from a JSON file.

        Args:
            path: Path to JSON file

        Returns:
            Config instance loaded from file

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)

    def to_json(self, path: str | Path, indent: int = 2) -> None:
        """Save config to a JSON file.

        Args:
            path: Path to save JSON file
            indent: JSON indentation level (default: 2)
        """
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=indent)

    @classmethod
    def from_name(cls, name: str) -> Self:
        """Create config from a preset name.

        Args:
            name: Preset identifier

        Returns:
            Config instance for the specified preset

        Raises:
            ConfigurationError: If name is not recognized
        """
        normalized = name.lower().replace("-", "_")
        if normalized in cls._config_registry:
            return getattr(cls, cls._config_registry[normalized])()
        raise ConfigurationError(
            f"Unknown preset: {name!r}. "
            f"Available: {', '.join(sorted(cls._config_registry))}"
        )

    def _validate(self) -> None:
        """Validate configuration values.

        Override in subclasses to add custom validation logic.
        Called automatically in __post_init__.

        Raises:
            ConfigurationError: If validation fails
        """
        pass

    @staticmethod
    def _validate_one_of(value: Any, name: str, choices: set | list | tuple) -> None:
        if value not in choices:
            raise ConfigurationError(
                f"{name} must be one of {sorted(choices)}, got {value!r}"
            )


@dataclass
class SpectrogramConfig(BaseConfig):
    """Configuration for spectrogram computation.

    Attributes:
        frame_size: FFT frame length in samples (power of two >= 2)
        overlap: Samples shared by consecutive frames. None derives it from
            the display width, or uses 3/4 of a frame when no width is known
        window_func: Window function name
        alpha: Window shape parameter (blackman, gauss)
        frequency_min: Lower display bound in Hz
        frequency_max: Upper display bound in Hz (None = Nyquist)
        scale: Frequency scale, "linear" or "mel"
        num_mel_filters: Mel band count (None = frame_size // 8)
        gain_db: Signals at -gain_db and louder are shown at full intensity
        range_db: Signals below -range_db are shown at zero intensity
        color_map: Colormap name or explicit 256x4 RGBA table
        split_channels: Compute one matrix per channel instead of only the first
        quantize_mode: "linear" or "legacy" byte mapping (see quantize_db)
    """

    frame_size: int = DEFAULT_FRAME_SIZE
    overlap: int | None = None
    window_func: str = DEFAULT_WINDOW
    alpha: float | None = None
    frequency_min: float = 0.0
    frequency_max: float | None = None
    scale: str = DEFAULT_SCALE
    num_mel_filters: int | None = None
    gain_db: float = DEFAULT_GAIN_DB
    range_db: float = DEFAULT_RANGE_DB
    color_map: ColorMapSpec = DEFAULT_COLOR_MAP
    split_channels: bool = False
    quantize_mode: str = "linear"

    _config_registry: ClassVar[dict[str, str]] = {
        "default": "default",
        "linear": "linear",
        "speech": "speech",
        "music": "music",
    }

    _aliases: ClassVar[dict[str, str]] = {
        "frameSize": "frame_size",
        "fftSamples": "frame_size",
        "noverlap": "overlap",
        "windowFunc": "window_func",
        "frequencyMin": "frequency_min",
        "frequencyMax": "frequency_max",
        "numMelFilters": "num_mel_filters",
        "gainDB": "gain_db",
        "rangeDB": "range_db",
        "colorMap": "color_map",
        "splitChannels": "split_channels",
        "quantizeMode": "quantize_mode",
    }

    @classmethod
    def default(cls) -> SpectrogramConfig:
        """512-sample Hann frames on the mel scale."""
        return cls()

    @classmethod
    def linear(cls) -> SpectrogramConfig:
        """Default settings on a linear frequency scale."""
        return cls(scale="linear")

    @classmethod
    def speech(cls) -> SpectrogramConfig:
        """Short frames for speech, linear scale."""
        return cls(frame_size=256, scale="linear", window_func="hamming")

    @classmethod
    def music(cls) -> SpectrogramConfig:
        """Long frames with 128 mel bands."""
        return cls(frame_size=2048, scale="mel", num_mel_filters=128)

    def _validate(self) -> None:
        validate_frame_size(self.frame_size)
        self.frame_size = int(self.frame_size)

        if self.overlap is not None:
            if isinstance(self.overlap, bool) or not isinstance(self.overlap, numbers.Integral):
                raise ConfigurationError(f"overlap must be an integer, got {self.overlap!r}")
            if not 0 <= self.overlap < self.frame_size:
                raise ConfigurationError(
                    f"overlap must be in [0, {self.frame_size}) so that the step "
                    f"size is at least one sample, got {self.overlap}"
                )
            self.overlap = int(self.overlap)

        self.window_func = WindowFunction.from_name(self.window_func).value
        if self.alpha is not None:
            validate_positive(self.alpha, "alpha")

        validate_non_negative(self.frequency_min, "frequency_min")
        if self.frequency_max is not None:
            validate_positive(self.frequency_max, "frequency_max")
            if self.frequency_max <= self.frequency_min:
                raise ConfigurationError(
                    f"frequency_max ({self.frequency_max}) must be greater than "
                    f"frequency_min ({self.frequency_min})"
                )

        self._validate_one_of(self.scale, "scale", ("linear", "mel"))
        if self.num_mel_filters is not None:
            n = self.num_mel_filters
            if isinstance(n, bool) or not isinstance(n, numbers.Integral) or not 1 <= n <= self.frame_size // 2:
                raise ConfigurationError(
                    f"num_mel_filters must be an integer in [1, {self.frame_size // 2}], got {n!r}"
                )
            self.num_mel_filters = int(n)

        if not isinstance(self.gain_db, numbers.Real) or not math.isfinite(self.gain_db):
            raise ConfigurationError(f"gain_db must be a finite number, got {self.gain_db!r}")
        validate_positive(self.range_db, "range_db")

        # Build once to reject malformed tables before any computation
        cmap = ColorMap.from_spec(self.color_map)
        if isinstance(self.color_map, ColorMap):
            self.color_map = cmap.name if cmap.name != "custom" else cmap.table.tolist()

        if not isinstance(self.split_channels, bool):
            raise ConfigurationError(
                f"split_channels must be a bool, got {self.split_channels!r}"
            )
        self._validate_one_of(self.quantize_mode, "quantize_mode", QUANTIZE_MODES)

    @property
    def mel_filters(self) -> int:
        """Resolved mel band count."""
        if self.num_mel_filters is not None:
            return self.num_mel_filters
        return max(1, self.frame_size // MEL_FILTERS_PER_FRAME_DIVISOR)

    @property
    def num_rows(self) -> int:
        """Rows (frequency bins) of every intensity matrix."""
        if self.scale == "mel":
            return self.mel_filters
        return self.frame_size // 2

    def resolve_frequency_max(self, sample_rate: float) -> float:
        """Upper display bound, defaulting to the Nyquist frequency."""
        if self.frequency_max is not None:
            return float(self.frequency_max)
        return sample_rate / 2.0

    def effective_overlap(self, total_samples: int, display_width: int | None = None) -> int:
        """Overlap used for a signal of ``total_samples`` samples.

        An explicit ``overlap`` always wins. Otherwise the overlap is chosen
        so that roughly one frame starts per display column:
        ``max(0, round(frame_size - total_samples / display_width))``.
        Without a display width, 3/4 of a frame is shared.
        """
        if self.overlap is not None:
            return self.overlap
        if display_width is None:
            return int(self.frame_size * DEFAULT_OVERLAP_RATIO)

        validate_positive(display_width, "display_width")
        samples_per_column = total_samples / display_width
        # Round half up
        derived = math.floor(self.frame_size - samples_per_column + 0.5)
        if derived < 0:
            _logger.warning(
                "Display width %d needs %.1f samples per column, more than one "
                "frame of %d; samples between frames will be skipped",
                display_width,
                samples_per_column,
                self.frame_size,
            )
        overlap = max(0, derived)
        _logger.debug(
            "Derived overlap %d from %d samples over %d columns",
            overlap,
            total_samples,
            display_width,
        )
        return overlap

    def step_size(self, total_samples: int, display_width: int | None = None) -> int:
        """Samples between frame starts.

        Raises:
            ConfigurationError: If the step would be less than one sample
        """
        step = self.frame_size - self.effective_overlap(total_samples, display_width)
        if step < 1:
            raise ConfigurationError(
                f"Step size must be at least 1 sample, got {step} "
                f"(frame_size={self.frame_size}, display_width={display_width}, "
                f"total_samples={total_samples})"
            )
        return step

    def build_color_map(self) -> ColorMap:
        """Colormap described by ``color_map``."""
        return ColorMap.from_spec(self.color_map)


__all__ = ["BaseConfig", "SpectrogramConfig"]
