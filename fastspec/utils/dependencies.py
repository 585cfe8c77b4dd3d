"""Optional dependency loading.

The core pipeline needs only numpy. Decoding audio files and converting
sample rates pull in soundfile and scipy, both shipped in the
``fastspec[audio]`` extra and imported lazily through these helpers.
"""

from __future__ import annotations

import importlib
from typing import Any

AUDIO_EXTRA = "audio"


def require_dependency(
    package: str,
    install_name: str | None = None,
    purpose: str | None = None,
    extra: str | None = None,
) -> Any:
    """Import an optional package or explain how to install it.

    Args:
        package: Module to import (e.g., "scipy.signal")
        install_name: Distribution name on the index if it differs
        purpose: What fastspec needs the package for
        extra: fastspec extra that provides the package

    Returns:
        The imported module

    Raises:
        ImportError: If the package is missing. The message names the
            fastspec extra when one is given.

    Example:
        >>> sf = require_dependency("soundfile", purpose="audio file I/O", extra="audio")
    """
    install_name = install_name or package
    try:
        return importlib.import_module(package)
    except ImportError as e:
        purpose_msg = f" for {purpose}" if purpose else ""
        if extra:
            hint = f"pip install 'fastspec[{extra}]' (or pip install {install_name})"
        else:
            hint = f"pip install {install_name}"
        raise ImportError(f"{package} is required{purpose_msg}. Install with: {hint}") from e


def require_soundfile() -> Any:
    """soundfile, for decoding audio files."""
    return require_dependency("soundfile", purpose="audio file I/O", extra=AUDIO_EXTRA)


def require_scipy() -> Any:
    """scipy.signal, for sample rate conversion on load."""
    return require_dependency(
        "scipy.signal",
        install_name="scipy",
        purpose="sample rate conversion",
        extra=AUDIO_EXTRA,
    )


__all__ = [
    "AUDIO_EXTRA",
    "require_dependency",
    "require_soundfile",
    "require_scipy",
]
