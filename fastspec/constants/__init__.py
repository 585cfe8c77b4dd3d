"""Constants module for fastspec.

This module centralizes magic numbers and default configuration
values used throughout the codebase.

Submodules:
    spectral: Mel scale, quantization and window shape constants
    defaults: Default spectrogram settings
"""

from __future__ import annotations

from fastspec.constants.defaults import *
from fastspec.constants.spectral import *

__all__ = [
    # Spectral
    "HTK_MEL_FACTOR",
    "HTK_MEL_BASE",
    "INTENSITY_LEVELS",
    "INTENSITY_MAX",
    "DB_FACTOR",
    "BLACKMAN_DEFAULT_ALPHA",
    "GAUSS_DEFAULT_ALPHA",
    # Defaults
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_OVERLAP_RATIO",
    "DEFAULT_WINDOW",
    "DEFAULT_SCALE",
    "MEL_FILTERS_PER_FRAME_DIVISOR",
    "DEFAULT_GAIN_DB",
    "DEFAULT_RANGE_DB",
    "DEFAULT_COLOR_MAP",
]
