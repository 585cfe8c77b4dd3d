"""Type definitions for fastspec."""

from fastspec.types.audio import AudioData, as_channels
from fastspec.types.results import Result, SpectrogramResult

__all__ = [
    "AudioData",
    "as_channels",
    "Result",
    "SpectrogramResult",
]
