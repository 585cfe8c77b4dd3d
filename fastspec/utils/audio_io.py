"""Audio file I/O utilities.

Decodes audio files into per-channel sample arrays for the
spectrogram pipeline.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from fastspec.exceptions import AudioLoadError
from fastspec.utils.dependencies import require_scipy, require_soundfile

_logger = logging.getLogger(__name__)


def load_audio_file(
    path: str | Path,
    target_sr: int | None = None,
    mono: bool = False,
) -> tuple[np.ndarray, int]:
    """Load an audio file with soundfile.

    Args:
        path: Path to audio file
        target_sr: Target sample rate for resampling (None to keep original)
        mono: Whether to average all channels into one

    Returns:
        Tuple of (audio array [channels, samples] float32, sample rate)

    Raises:
        ImportError: If soundfile (or scipy, when resampling) is not installed
        AudioLoadError: If the file does not exist or cannot be decoded
    """
    sf = require_soundfile()

    path = Path(path)
    if not path.exists():
        raise AudioLoadError(f"Audio file not found: {path}")

    try:
        audio, sr = sf.read(str(path), dtype="float32", always_2d=True)
    except RuntimeError as e:
        raise AudioLoadError(f"Cannot decode audio file {path}: {e}") from e

    # soundfile returns [samples, channels]
    audio = np.ascontiguousarray(audio.T)

    if mono and audio.shape[0] > 1:
        audio = audio.mean(axis=0, keepdims=True)

    if target_sr is not None and sr != target_sr:
        audio = resample_audio(audio, sr, target_sr)
        sr = target_sr

    _logger.debug("Loaded %s: %d channel(s), %d samples at %d Hz", path, *audio.shape, sr)
    return audio, int(sr)


def resample_audio(
    audio: np.ndarray,
    orig_sr: int,
    target_sr: int,
) -> np.ndarray:
    """Resample audio to a target sample rate.

    Args:
        audio: Audio array with shape [channels, samples]
        orig_sr: Original sample rate
        target_sr: Target sample rate

    Returns:
        Resampled float32 audio array
    """
    if orig_sr == target_sr:
        return audio

    signal = require_scipy()
    return signal.resample_poly(audio, target_sr, orig_sr, axis=-1).astype(np.float32)


__all__ = ["load_audio_file", "resample_audio"]
