"""Numeric primitives for spectrogram computation.

Window tables, the fixed-size FFT engine, mel filterbanks, decibel
quantization and box-filter resampling. Everything here operates on
NumPy arrays and has no rendering dependency.
"""

from fastspec.primitives._frame_impl import frame_signal, num_frames
from fastspec.primitives.fft import FFTPlan, build_plan, compute_spectrum
from fastspec.primitives.mel import (
    MelFilterBank,
    apply_mel,
    bin_frequencies,
    hz_to_mel,
    mel_filterbank,
    mel_to_hz,
)
from fastspec.primitives.quantize import (
    QUANTIZE_MODES,
    QuantizeMode,
    amplitude_to_db,
    quantize_db,
)
from fastspec.primitives.resample import resample
from fastspec.primitives.window import WindowFunction, get_window

__all__ = [
    # Windows
    "WindowFunction",
    "get_window",
    # FFT
    "FFTPlan",
    "build_plan",
    "compute_spectrum",
    # Framing
    "frame_signal",
    "num_frames",
    # Mel
    "MelFilterBank",
    "mel_filterbank",
    "apply_mel",
    "bin_frequencies",
    "hz_to_mel",
    "mel_to_hz",
    # Quantization
    "QuantizeMode",
    "QUANTIZE_MODES",
    "amplitude_to_db",
    "quantize_db",
    # Resampling
    "resample",
]
