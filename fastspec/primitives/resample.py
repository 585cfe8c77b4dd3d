"""
Box-filter resampling of intensity matrices along the time axis.

Each input column covers ``[c / old, (c + 1) / old)`` of normalized time
and each output column covers ``[o / new, (o + 1) / new)``. An output
column is the sum of the input columns weighted by how much of the
output span they cover, so average energy (not the peak) is preserved.
Spans are compared on the integer grid ``old * new``, where the overlaps
are integers that sum to ``old`` for every output column, and the
weighted sums are evaluated in integer arithmetic.
"""

from __future__ import annotations

import numpy as np

from fastspec.exceptions import ConfigurationError, DataError


def _as_matrix(matrix: np.ndarray) -> np.ndarray:
    try:
        m = np.asarray(matrix)
    except ValueError as e:
        raise DataError(f"Intensity matrix is ragged: {e}") from e
    if m.ndim != 2:
        raise DataError(f"Expected a 2D (columns, rows) matrix, got shape {m.shape}")
    if m.shape[0] == 0:
        raise DataError("Intensity matrix has no columns")
    return m


def column_overlaps(old_width: int, new_width: int, column: int) -> tuple[int, np.ndarray]:
    """Input columns feeding one output column.

    Returns ``(first_input_column, overlaps)`` where ``overlaps[i]`` is the
    length of the shared span of input column ``first + i`` and the output
    column on the ``old_width * new_width`` grid. The weight of an input
    column is ``overlap / old_width``.
    """
    new_start = column * old_width
    new_end = new_start + old_width
    first = new_start // new_width
    last = -(-new_end // new_width)  # ceil
    starts = np.arange(first, last, dtype=np.int64) * new_width
    overlap = np.minimum(starts + new_width, new_end) - np.maximum(starts, new_start)
    return first, np.maximum(overlap, 0)


def resample(matrix: np.ndarray, width: int) -> np.ndarray:
    """
    Rescale the column count of an intensity matrix.

    Parameters
    ----------
    matrix : np.ndarray
        Intensity matrix of shape (columns, rows). Nested sequences are
        accepted.
    width : int
        Target number of columns.

    Returns
    -------
    np.ndarray
        uint8 matrix of shape (width, rows). Weighted sums are truncated,
        not rounded. ``width == columns`` returns an exact copy.

    Raises
    ------
    ConfigurationError
        If width is not a positive integer.
    DataError
        If the matrix is not 2D, has no columns, or holds values outside
        [0, 255].
    """
    if isinstance(width, bool) or int(width) != width or width < 1:
        raise ConfigurationError(f"width must be a positive integer, got {width!r}")
    width = int(width)

    m = _as_matrix(matrix)
    if m.size and (m.min() < 0 or m.max() > 255):
        raise DataError("Intensity matrix values must be in [0, 255]")
    old_width, rows = m.shape
    values = m.astype(np.int64)

    out = np.empty((width, rows), dtype=np.uint8)
    for o in range(width):
        first, overlaps = column_overlaps(old_width, width, o)
        out[o] = (overlaps @ values[first : first + len(overlaps)]) // old_width
    return out


__all__ = ["resample", "column_overlaps"]
