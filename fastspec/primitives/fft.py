"""
Fixed-size Fourier transform engine.

An :class:`FFTPlan` holds everything that depends only on the frame size
and window: the bit-reversal permutation, the twiddle step tables and the
window table. Plans are immutable and can be shared by any number of
frame or channel computations. :func:`compute_spectrum` runs an iterative
radix-2 decimation-in-time transform against a plan and returns the
magnitude of bins ``0 .. N/2 - 1``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from fastspec.exceptions import DataError

from ._validation import validate_frame_size, validate_positive
from .window import WindowFunction, get_window

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FFTPlan:
    """Precomputed tables for one (frame_size, window, alpha) combination.

    Attributes:
        frame_size: Transform length N (power of two >= 2)
        sample_rate: Sample rate in Hz of the frames fed to the plan
        window: Resolved window function
        alpha: Window shape parameter (None = window default)
        window_table: Window weights, shape (N,)
        reverse_table: Bit-reversal permutation, shape (N,)
        sin_table: ``sin(-pi / i)`` for i in 0..N-1
        cos_table: ``cos(-pi / i)`` for i in 0..N-1

    Entry 0 of the trig tables is NaN (the angle has a zero denominator).
    The transform only reads entries at stage sizes 1, 2, 4, ..., N/2, so
    that entry is never used.
    """

    frame_size: int
    sample_rate: float
    window: WindowFunction
    alpha: float | None
    window_table: np.ndarray = field(repr=False)
    reverse_table: np.ndarray = field(repr=False)
    sin_table: np.ndarray = field(repr=False)
    cos_table: np.ndarray = field(repr=False)

    @property
    def num_bins(self) -> int:
        """Number of output magnitude bins (N/2)."""
        return self.frame_size >> 1

    @property
    def bin_frequencies(self) -> np.ndarray:
        """Frequency in Hz of each output bin."""
        return np.arange(self.num_bins) * (self.sample_rate / self.frame_size)


def _reverse_bits_table(n: int) -> np.ndarray:
    table = np.zeros(n, dtype=np.intp)
    limit = 1
    bit = n >> 1
    while limit < n:
        table[limit : limit << 1] = table[:limit] + bit
        limit <<= 1
        bit >>= 1
    return table


def _trig_tables(n: int) -> tuple[np.ndarray, np.ndarray]:
    i = np.arange(n, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        angle = -np.pi / i
        return np.sin(angle), np.cos(angle)


def _freeze(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


def build_plan(
    frame_size: int,
    sample_rate: float,
    window: str | WindowFunction | None = "hann",
    alpha: float | None = None,
) -> FFTPlan:
    """
    Build an immutable transform plan.

    Parameters
    ----------
    frame_size : int
        Transform length. Must be a power of two >= 2.
    sample_rate : float
        Sample rate of the signal in Hz.
    window : str or WindowFunction, default='hann'
        Window applied to every frame.
    alpha : float, optional
        Window shape parameter.

    Returns
    -------
    FFTPlan

    Raises
    ------
    ConfigurationError
        If frame_size is not a power of two, sample_rate is not positive
        or the window name is unknown.
    """
    validate_frame_size(frame_size)
    validate_positive(sample_rate, "sample_rate")
    frame_size = int(frame_size)

    resolved = WindowFunction.from_name(window)
    window_table = get_window(resolved, frame_size, alpha)
    sin_table, cos_table = _trig_tables(frame_size)

    _logger.debug(
        "Built FFT plan: frame_size=%d window=%s alpha=%s",
        frame_size,
        resolved.value,
        alpha,
    )
    return FFTPlan(
        frame_size=frame_size,
        sample_rate=float(sample_rate),
        window=resolved,
        alpha=alpha,
        window_table=window_table,
        reverse_table=_freeze(_reverse_bits_table(frame_size)),
        sin_table=_freeze(sin_table),
        cos_table=_freeze(cos_table),
    )


def _stage_twiddles(step_re: float, step_im: float, half: int) -> tuple[np.ndarray, np.ndarray]:
    """Twiddle factors of one stage, advanced by repeated complex multiplication."""
    w_re = np.empty(half)
    w_im = np.empty(half)
    cur_re, cur_im = 1.0, 0.0
    for k in range(half):
        w_re[k] = cur_re
        w_im[k] = cur_im
        cur_re, cur_im = (
            cur_re * step_re - cur_im * step_im,
            cur_re * step_im + cur_im * step_re,
        )
    return w_re, w_im


def compute_spectrum(
    plan: FFTPlan,
    frame: np.ndarray,
    *,
    return_peak: bool = False,
) -> np.ndarray | tuple[np.ndarray, float | np.ndarray]:
    """
    Compute the magnitude spectrum of one frame (or a batch of frames).

    Parameters
    ----------
    plan : FFTPlan
        Plan built by :func:`build_plan`. It is only read.
    frame : np.ndarray
        Samples of shape (N,) or (n_frames, N).
    return_peak : bool, default=False
        If True, also return the largest magnitude of each frame. The
        peak is frame-local; callers reduce it themselves.

    Returns
    -------
    np.ndarray or tuple
        Magnitudes ``(2/N) * |X[k]|`` for k in 0..N/2-1 with shape (N/2,)
        or (n_frames, N/2). With ``return_peak`` a ``(spectrum, peak)``
        tuple, where peak is a float for a single frame and an array of
        shape (n_frames,) for a batch.

    Raises
    ------
    DataError
        If the last axis of ``frame`` is not N long.
    """
    n = plan.frame_size
    frames = np.asarray(frame, dtype=np.float64)
    single = frames.ndim == 1
    if single:
        frames = frames[np.newaxis, :]
    if frames.ndim != 2 or frames.shape[-1] != n:
        raise DataError(
            f"Expected frames of {n} samples, got array of shape {np.shape(frame)}"
        )

    rev = plan.reverse_table
    n_frames = frames.shape[0]

    # Windowing and bit-reversal reordering in one gather
    real = np.ascontiguousarray(frames[:, rev] * plan.window_table[rev])
    imag = np.zeros_like(real)

    half = 1
    while half < n:
        w_re, w_im = _stage_twiddles(plan.cos_table[half], plan.sin_table[half], half)

        # [frame, block, even/odd, k]: even index = block*2h + k, odd = even + h
        re = real.reshape(n_frames, n // (half << 1), 2, half)
        im = imag.reshape(n_frames, n // (half << 1), 2, half)
        odd_re = re[:, :, 1, :]
        odd_im = im[:, :, 1, :]
        tr = w_re * odd_re - w_im * odd_im
        ti = w_re * odd_im + w_im * odd_re

        re[:, :, 1, :] = re[:, :, 0, :] - tr
        im[:, :, 1, :] = im[:, :, 0, :] - ti
        re[:, :, 0, :] += tr
        im[:, :, 0, :] += ti

        half <<= 1

    nyquist = n >> 1
    spectrum = (2.0 / n) * np.hypot(real[:, :nyquist], imag[:, :nyquist])

    if single:
        spectrum = spectrum[0]
    if not return_peak:
        return spectrum

    peak = spectrum.max(axis=-1)
    return spectrum, (float(peak) if single else peak)


__all__ = ["FFTPlan", "build_plan", "compute_spectrum"]
