"""Utility functions for fastspec.

Submodules:
    dependencies: Optional dependency import helpers
    audio_io: Audio file loading utilities
"""

from __future__ import annotations

from fastspec.utils.audio_io import load_audio_file, resample_audio
from fastspec.utils.dependencies import (
    require_dependency,
    require_scipy,
    require_soundfile,
)

__all__ = [
    # Dependencies
    "require_dependency",
    "require_soundfile",
    "require_scipy",
    # Audio I/O
    "load_audio_file",
    "resample_audio",
]
