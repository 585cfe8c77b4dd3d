"""
Decibel quantization of magnitudes into intensity bytes.

A magnitude ``m`` is converted to ``dB = 20 * log10(m)`` and mapped onto
one byte using a display window defined by ``gain_db`` and ``range_db``:

- ``dB < -range_db`` maps to 0
- ``dB > -gain_db`` maps to 255
- anything in between is mapped linearly and truncated toward zero

Silence (``m == 0``) gives ``-inf`` dB and lands in the first branch.
NaN magnitudes also map to 0.
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from fastspec.constants import DB_FACTOR, INTENSITY_MAX
from fastspec.exceptions import ConfigurationError

from ._validation import validate_positive

QuantizeMode = Literal["linear", "legacy"]

QUANTIZE_MODES: tuple[str, ...] = ("linear", "legacy")


def amplitude_to_db(magnitudes: np.ndarray) -> np.ndarray:
    """``20 * log10(m)`` with ``-inf`` for zeros and no floating-point warnings."""
    magnitudes = np.asarray(magnitudes, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        return DB_FACTOR * np.log10(magnitudes)


def quantize_db(
    magnitudes: np.ndarray,
    gain_db: float = 20.0,
    range_db: float = 80.0,
    mode: QuantizeMode = "linear",
) -> np.ndarray:
    """
    Quantize magnitudes to intensity bytes.

    Parameters
    ----------
    magnitudes : np.ndarray
        Non-negative magnitudes of any shape.
    gain_db : float, default=20.0
        Values at ``-gain_db`` dB and above are displayed at full intensity.
    range_db : float, default=80.0
        Values below ``-range_db`` dB are displayed at zero intensity.
    mode : {'linear', 'legacy'}, default='linear'
        ``'linear'`` maps the middle branch with
        ``255 + (dB + gain_db) / range_db * 255`` clipped to [0, 255], so
        the value reaches 255 exactly at ``-gain_db`` and never leaves the
        byte range. ``'legacy'`` uses ``+256`` instead of ``+255`` and wraps
        the result modulo 256, which reproduces byte-for-byte output of
        older renderers (including the wrap of ``-gain_db`` itself to 0).

    Returns
    -------
    np.ndarray
        uint8 array with the same shape as ``magnitudes``.

    Raises
    ------
    ConfigurationError
        If range_db is not positive or mode is unknown.
    """
    validate_positive(range_db, "range_db")
    if mode not in QUANTIZE_MODES:
        raise ConfigurationError(
            f"Unknown quantize mode: '{mode}'. Supported: {', '.join(QUANTIZE_MODES)}"
        )

    db = amplitude_to_db(magnitudes)
    shape = db.shape
    db = db.reshape(-1)
    # NaN compares False everywhere, route it to the floor explicitly
    db = np.where(np.isnan(db), -np.inf, db)

    low = db < -range_db
    high = (db > -gain_db) & ~low
    mid = ~(low | high)

    out = np.zeros(db.shape, dtype=np.uint8)
    out[high] = INTENSITY_MAX

    scaled = (db[mid] + gain_db) / range_db * INTENSITY_MAX
    if mode == "linear":
        values = np.clip(scaled + INTENSITY_MAX, 0, INTENSITY_MAX)
        out[mid] = np.trunc(values).astype(np.uint8)
    else:
        values = np.trunc(scaled + INTENSITY_MAX + 1).astype(np.int64)
        out[mid] = np.mod(values, INTENSITY_MAX + 1).astype(np.uint8)
    return out.reshape(shape)


__all__ = ["QuantizeMode", "QUANTIZE_MODES", "amplitude_to_db", "quantize_db"]
