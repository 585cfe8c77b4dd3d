"""Precomputed intensity data.

Intensity matrices computed elsewhere can replace the FFT pipeline
entirely. The exchange format is JSON with the layout
``[channel][column][row]`` of integers in [0, 255]; the resampling and
colormap stages accept the loaded matrices exactly like computed ones.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np

from fastspec.constants import INTENSITY_MAX
from fastspec.exceptions import DataError

_logger = logging.getLogger(__name__)

FrequenciesSource = str | Path | Sequence[Any] | np.ndarray


def _read_source(source: str | Path) -> Any:
    if isinstance(source, str):
        text = source.strip()
        if text.startswith("["):
            try:
                return json.loads(text)
            except json.JSONDecodeError as e:
                raise DataError(f"Invalid frequencies JSON: {e}") from e
        if text.startswith(("http://", "https://")):
            raise DataError(
                f"Cannot load frequencies from {source!r}: download the data "
                "and pass the file path or decoded JSON instead"
            )

    path = Path(source)
    try:
        with open(path) as f:
            return json.load(f)
    except OSError as e:
        raise DataError(f"Unable to read frequencies data from {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DataError(f"Invalid frequencies JSON in {path}: {e}") from e


def _to_matrix(channel: Any, index: int) -> np.ndarray:
    try:
        m = np.array(channel, dtype=np.float64)
    except (ValueError, TypeError) as e:
        raise DataError(f"Channel {index} is not a rectangular numeric matrix: {e}") from e
    if m.ndim != 2 or m.shape[0] == 0:
        raise DataError(
            f"Channel {index} must be a non-empty [column][row] matrix, got shape {m.shape}"
        )
    if not np.all(np.isfinite(m)) or np.any(m != np.trunc(m)):
        raise DataError(f"Channel {index} contains non-integer intensities")
    if m.min() < 0 or m.max() > INTENSITY_MAX:
        raise DataError(f"Channel {index} contains intensities outside [0, 255]")
    return m.astype(np.uint8)


def load_frequencies(source: FrequenciesSource) -> list[np.ndarray]:
    """Load precomputed intensity matrices.

    Args:
        source: Path to a JSON file, a JSON string, decoded nested lists
            laid out as [channel][column][row], or a NumPy array of shape
            (channels, columns, rows) or (columns, rows)

    Returns:
        One uint8 matrix of shape (columns, rows) per channel

    Raises:
        DataError: If the data cannot be read or is malformed

    Example:
        >>> matrices = load_frequencies("spectrogram.json")
        >>> matrices[0].shape
        (1200, 64)
    """
    if isinstance(source, np.ndarray):
        if source.ndim == 2:
            data: Any = [source]
        elif source.ndim == 3:
            data = list(source)
        else:
            raise DataError(f"Expected a 2D or 3D array, got shape {source.shape}")
    elif isinstance(source, (str, Path)):
        data = _read_source(source)
    else:
        data = source

    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence) or len(data) == 0:
        raise DataError("Frequencies data must be a non-empty list of channels")

    matrices = [_to_matrix(channel, i) for i, channel in enumerate(data)]
    _logger.debug(
        "Loaded precomputed frequencies: %d channel(s), shapes %s",
        len(matrices),
        [m.shape for m in matrices],
    )
    return matrices


def save_frequencies(matrices: Sequence[np.ndarray], path: str | Path) -> Path:
    """Write intensity matrices in the format read by :func:`load_frequencies`.

    Args:
        matrices: One (columns, rows) matrix per channel
        path: Output JSON file

    Returns:
        Path to saved file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [np.asarray(m, dtype=np.uint8).tolist() for m in matrices]
    with open(path, "w") as f:
        json.dump(payload, f)
    return path


__all__ = ["FrequenciesSource", "load_frequencies", "save_frequencies"]
