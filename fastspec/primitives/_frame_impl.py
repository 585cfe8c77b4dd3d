"""
Shared framing implementation.

Splits a signal into overlapping frames using a zero-copy strided view.
Frames start every ``hop_length`` samples; a trailing block shorter than
one frame is dropped.
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from fastspec.exceptions import ConfigurationError, DataError


def num_frames(signal_length: int, frame_length: int, hop_length: int) -> int:
    """Number of whole frames that fit in ``signal_length`` samples."""
    if signal_length < frame_length:
        return 0
    return 1 + (signal_length - frame_length) // hop_length


def frame_signal(
    y: np.ndarray,
    frame_length: int,
    hop_length: int,
) -> np.ndarray:
    """
    Frame a 1D signal into overlapping windows.

    Parameters
    ----------
    y : np.ndarray
        Signal of shape (samples,).
    frame_length : int
        Length of each frame in samples.
    hop_length : int
        Number of samples between frame starts.

    Returns
    -------
    np.ndarray
        Read-only view of shape (n_frames, frame_length).

    Raises
    ------
    ConfigurationError
        If frame_length or hop_length is not positive.
    DataError
        If the signal is not 1D or is shorter than one frame.
    """
    if frame_length <= 0:
        raise ConfigurationError(f"frame_length must be positive, got {frame_length}")
    if hop_length <= 0:
        raise ConfigurationError(f"hop_length must be positive, got {hop_length}")

    y = np.asarray(y)
    if y.ndim != 1:
        raise DataError(f"Expected a 1D signal, got shape {y.shape}")
    if y.shape[0] < frame_length:
        raise DataError(
            f"Signal length ({y.shape[0]}) must be >= frame_length "
            f"({frame_length})."
        )

    return sliding_window_view(y, frame_length)[::hop_length]


__all__ = ["frame_signal", "num_frames"]
