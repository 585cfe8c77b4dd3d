"""Audio data types and utilities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from fastspec.exceptions import DataError


@dataclass
class AudioData:
    """Container for multi-channel audio.

    Attributes:
        array: Audio samples, shape [channels, samples]
        sample_rate: Sample rate in Hz
    """

    array: np.ndarray
    sample_rate: int

    @classmethod
    def from_file(cls, path: str | Path, mono: bool = False) -> AudioData:
        """Decode an audio file (requires soundfile)."""
        from fastspec.utils.audio_io import load_audio_file

        audio, sr = load_audio_file(path, mono=mono)
        return cls(array=audio, sample_rate=sr)

    def to_mono(self) -> AudioData:
        """Convert to mono by averaging channels."""
        if self.channels == 1:
            return self
        return AudioData(
            array=self.array.mean(axis=0, keepdims=True),
            sample_rate=self.sample_rate,
        )

    def channel(self, index: int) -> np.ndarray:
        """Samples of one channel."""
        return as_channels(self.array)[index]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.array.shape[-1] / self.sample_rate

    @property
    def channels(self) -> int:
        """Number of channels."""
        if self.array.ndim == 1:
            return 1
        return self.array.shape[0]

    def __len__(self) -> int:
        """Number of samples."""
        return self.array.shape[-1]


def as_channels(audio: np.ndarray | Sequence[Sequence[float]] | AudioData) -> list[np.ndarray]:
    """Normalize audio input to a list of 1D float64 channel arrays.

    Accepts a 1D array or flat sequence of numbers (one channel), a 2D
    [channels, samples] array, a sequence of per-channel sequences
    (channels may differ in length) or an :class:`AudioData`.

    Raises:
        DataError: If there are no channels or a channel is not 1D
    """
    if isinstance(audio, AudioData):
        audio = audio.array

    if isinstance(audio, np.ndarray):
        if audio.ndim == 1:
            channels = [audio]
        elif audio.ndim == 2:
            channels = list(audio)
        else:
            raise DataError(f"Expected [samples] or [channels, samples], got shape {audio.shape}")
    elif isinstance(audio, Sequence) and not isinstance(audio, (str, bytes)):
        try:
            flat = np.asarray(audio)
        except ValueError:
            # Ragged channels
            flat = None
        if (
            flat is not None
            and flat.ndim == 1
            and flat.size
            and np.issubdtype(flat.dtype, np.number)
        ):
            channels = [flat]
        else:
            channels = list(audio)
    else:
        raise DataError(
            f"Unsupported audio input type: {type(audio).__name__}. "
            "Expected np.ndarray, a sequence of channels, or AudioData."
        )

    if not channels:
        raise DataError("Audio input has no channels")

    out = []
    for i, ch in enumerate(channels):
        try:
            arr = np.asarray(ch, dtype=np.float64)
        except (ValueError, TypeError) as e:
            raise DataError(f"Channel {i} is not numeric: {e}") from e
        if arr.ndim != 1:
            raise DataError(f"Channel {i} must be 1D, got shape {arr.shape}")
        out.append(arr)
    return out


__all__ = ["AudioData", "as_channels"]
