"""Spectral analysis constants for mel filterbanks and quantization.

These constants define the mel scale and the decibel window used
when turning magnitudes into intensity bytes.
"""

from __future__ import annotations

# HTK mel formula constants
HTK_MEL_FACTOR = 2595.0
"""HTK mel scale conversion factor."""

HTK_MEL_BASE = 700.0
"""HTK mel scale base frequency."""

# Quantization
INTENSITY_LEVELS = 256
"""Number of distinct intensity values (one byte)."""

INTENSITY_MAX = INTENSITY_LEVELS - 1
"""Largest intensity byte."""

DB_FACTOR = 20.0
"""Amplitude-to-decibel factor (20 * log10)."""

# Window function shape parameters
BLACKMAN_DEFAULT_ALPHA = 0.16
"""Blackman window alpha when none is given (classic Blackman)."""

GAUSS_DEFAULT_ALPHA = 0.25
"""Gaussian window width parameter when none is given."""

__all__ = [
    "HTK_MEL_FACTOR",
    "HTK_MEL_BASE",
    "INTENSITY_LEVELS",
    "INTENSITY_MAX",
    "DB_FACTOR",
    "BLACKMAN_DEFAULT_ALPHA",
    "GAUSS_DEFAULT_ALPHA",
]
