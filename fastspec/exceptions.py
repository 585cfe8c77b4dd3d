"""Custom exception hierarchy for fastspec.

All fastspec specific exceptions inherit from FastSpecError,
making it easy to catch any library-specific error.
"""

from __future__ import annotations


class FastSpecError(Exception):
    """Base exception for all fastspec errors.

    Example:
        try:
            result = fastspec.compute_spectrogram(samples, 44100)
        except FastSpecError as e:
            print(f"fastspec error: {e}")
    """

    pass


class ConfigurationError(FastSpecError, ValueError):
    """Invalid spectrogram, window, filter bank or colormap configuration.

    Raised when:
        - Frame size is not a positive power of two
        - Window function name is not recognized
        - Overlap leaves a step size below one sample
        - A color table does not have 256 entries of 4 components
        - Config parameters are out of valid range
    """

    pass


class DataError(FastSpecError, ValueError):
    """Input data cannot be turned into an intensity matrix.

    Raised when:
        - A channel is empty or shorter than one frame
        - The sample rate is not a positive finite number
        - Precomputed intensity data cannot be read or is malformed
    """

    pass


class AudioLoadError(DataError):
    """Failed to load or decode an audio file.

    Raised when:
        - File does not exist or cannot be read
        - Audio format is unsupported
    """

    pass


# Short name used throughout the documentation for configuration failures.
ConfigError = ConfigurationError


__all__ = [
    "FastSpecError",
    "ConfigurationError",
    "ConfigError",
    "DataError",
    "AudioLoadError",
]
