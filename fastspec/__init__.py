"""fastspec: FFT spectrogram core for audio visualization.

Turns per-channel audio samples into quantized time-frequency intensity
matrices (one byte per cell) ready for false-color display.

Quick Start:
    >>> import fastspec
    >>> result = fastspec.compute_spectrogram(samples, 44100, display_width=800)
    >>> result[0].shape  # (columns, rows) of the first channel
    (800, 64)
    >>> rgba = fastspec.render_intensities(result, width=800)
    >>> rgba[0].shape
    (800, 64, 4)

Submodules:
    - fastspec.primitives: Windows, FFT plans, mel filterbanks, quantization, resampling
    - fastspec.colormaps: 256-entry RGBA lookup tables
    - fastspec.config: SpectrogramConfig and presets
    - fastspec.pipeline: SpectrogramBuilder
    - fastspec.io: Precomputed intensity data
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from fastspec._version import __version__

if TYPE_CHECKING:
    import numpy as np

    from fastspec.colormaps import ColorMap, ColorMapSpec
    from fastspec.types import AudioData

# =============================================================================
# HIGH-LEVEL API (One-liner functions)
# =============================================================================


def compute_spectrogram(
    audio: "np.ndarray | Sequence[Sequence[float]] | AudioData",
    sample_rate: float | None = None,
    config: "SpectrogramConfig | None" = None,
    *,
    display_width: int | None = None,
    max_workers: int | None = None,
    **options: Any,
) -> "SpectrogramResult":
    """Compute intensity matrices for audio samples.

    Args:
        audio: Samples as [samples], [channels, samples], per-channel
            sequences, or AudioData
        sample_rate: Sample rate in Hz (taken from AudioData if omitted)
        config: Full configuration (default: SpectrogramConfig())
        display_width: Target column count used to derive the overlap
        max_workers: Process channels on this many threads
        **options: Config fields overriding ``config`` (snake_case or the
            camelCase option names, e.g. ``frameSize=1024``)

    Returns:
        SpectrogramResult with one uint8 (columns, rows) matrix per channel

    Example:
        >>> result = fastspec.compute_spectrogram(samples, 22050, scale="linear")
        >>> result.peaks
        [0.98]
    """
    if options:
        base = config.to_dict() if config is not None else {}
        config = SpectrogramConfig.from_dict({**base, **options})
    builder = SpectrogramBuilder(config)
    return builder.compute(
        audio, sample_rate, display_width=display_width, max_workers=max_workers
    )


def render_intensities(
    matrices: "SpectrogramResult | Sequence[np.ndarray] | np.ndarray",
    width: int | None = None,
    color_map: "ColorMap | ColorMapSpec | None" = None,
) -> "list[np.ndarray]":
    """Resample intensity matrices and map them to RGBA.

    Computed results and precomputed matrices (see :func:`load_frequencies`)
    are handled identically.

    Args:
        matrices: SpectrogramResult, a list of (columns, rows) matrices,
            or a single matrix
        width: Resample every channel to this many columns (None = keep)
        color_map: Colormap (None = the result's configured map, or roseus)

    Returns:
        One float64 array of shape (width, rows, 4) per channel
    """
    import numpy as np

    if isinstance(matrices, SpectrogramResult):
        if color_map is None:
            color_map = matrices.config.build_color_map()
        matrices = matrices.matrices
    elif isinstance(matrices, np.ndarray) and matrices.ndim == 2:
        matrices = [matrices]

    cmap = ColorMap.from_spec(color_map)
    out = []
    for m in matrices:
        if width is not None:
            m = resample(m, width)
        out.append(cmap.apply(m))
    return out


# =============================================================================
# CORE TYPES (Re-exported for convenience)
# =============================================================================
from fastspec.colormaps import ColorMap, get_color_map
from fastspec.config import SpectrogramConfig
from fastspec.exceptions import (
    AudioLoadError,
    ConfigError,
    ConfigurationError,
    DataError,
    FastSpecError,
)
from fastspec.io import load_frequencies, save_frequencies
from fastspec.pipeline import SpectrogramBuilder

# =============================================================================
# PRIMITIVES (Re-exported for convenience)
# =============================================================================
from fastspec.primitives import (
    WindowFunction,
    bin_frequencies,
    build_plan,
    compute_spectrum,
    get_window,
    mel_filterbank,
    quantize_db,
    resample,
)
from fastspec.types import AudioData, SpectrogramResult

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # High-level API
    "compute_spectrogram",
    "render_intensities",
    # Core types
    "SpectrogramConfig",
    "SpectrogramBuilder",
    "SpectrogramResult",
    "AudioData",
    "ColorMap",
    "get_color_map",
    # Precomputed data
    "load_frequencies",
    "save_frequencies",
    # Primitives
    "WindowFunction",
    "get_window",
    "build_plan",
    "compute_spectrum",
    "mel_filterbank",
    "bin_frequencies",
    "quantize_db",
    "resample",
    # Exceptions
    "FastSpecError",
    "ConfigurationError",
    "ConfigError",
    "DataError",
    "AudioLoadError",
]
