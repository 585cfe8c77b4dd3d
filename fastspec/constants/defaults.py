"""Default spectrogram settings.

These values match what the spectrogram view renders when no
option is given.
"""

from __future__ import annotations

DEFAULT_FRAME_SIZE = 512
"""Default FFT frame length in samples."""

DEFAULT_OVERLAP_RATIO = 0.75
"""Fraction of a frame shared by consecutive frames when neither an
explicit overlap nor a display width is known."""

DEFAULT_WINDOW = "hann"
"""Default window function."""

DEFAULT_SCALE = "mel"
"""Default frequency scale."""

MEL_FILTERS_PER_FRAME_DIVISOR = 8
"""Default mel filter count is frame_size // this value."""

DEFAULT_GAIN_DB = 20.0
"""Signals at -gain dB and above are displayed at full intensity."""

DEFAULT_RANGE_DB = 80.0
"""Signals below -range dB are displayed at zero intensity."""

DEFAULT_COLOR_MAP = "roseus"
"""Default colormap name."""

__all__ = [
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_OVERLAP_RATIO",
    "DEFAULT_WINDOW",
    "DEFAULT_SCALE",
    "MEL_FILTERS_PER_FRAME_DIVISOR",
    "DEFAULT_GAIN_DB",
    "DEFAULT_RANGE_DB",
    "DEFAULT_COLOR_MAP",
]
