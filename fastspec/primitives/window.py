"""
Window functions.

Provides the closed set of tapering windows applied to each frame
before the Fourier transform. A window is selected once by name,
resolved to a :class:`WindowFunction` member, and evaluated into a
read-only table.
"""

from __future__ import annotations

import enum
from functools import lru_cache

import numpy as np

from fastspec.constants import BLACKMAN_DEFAULT_ALPHA, GAUSS_DEFAULT_ALPHA
from fastspec.exceptions import ConfigurationError

from ._validation import validate_positive


class WindowFunction(str, enum.Enum):
    """Supported window shapes.

    Value ranges of the generated tables (for frame sizes >= 2):

    ============== ==================== ==========
    name           range                symmetric
    ============== ==================== ==========
    bartlett       [0, 1]               yes
    bartlettHann   [0, 1]               yes
    blackman       [-1e-12, 1]          yes
    cosine         [0, 1]               yes
    gauss          (0, 1]               yes
    hamming        [0.08, 1]            yes
    hann           [0, 1]               yes
    lanczos        [0, 1]               yes
    rectangular    {1}                  yes
    triangular     (0, 1]               yes
    ============== ==================== ==========
    """

    BARTLETT = "bartlett"
    BARTLETT_HANN = "bartlettHann"
    BLACKMAN = "blackman"
    COSINE = "cosine"
    GAUSS = "gauss"
    HAMMING = "hamming"
    HANN = "hann"
    LANCZOS = "lanczos"
    RECTANGULAR = "rectangular"
    TRIANGULAR = "triangular"

    @classmethod
    def from_name(cls, name: str | WindowFunction | None) -> WindowFunction:
        """Resolve a window name, raising ConfigurationError if unknown.

        ``None`` selects the Hann window. Snake-case spellings
        (``"bartlett_hann"``) and the historical ``"lanczoz"`` spelling
        are accepted.
        """
        if name is None:
            return cls.HANN
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            key = _ALIASES.get(name, name)
            for member in cls:
                if member.value == key:
                    return member
        raise ConfigurationError(
            f"No such window function '{name}'. "
            f"Supported: {', '.join(m.value for m in cls)}"
        )

    @property
    def value_range(self) -> tuple[float, float]:
        """Documented (min, max) of the table values."""
        return _VALUE_RANGES[self]


_ALIASES = {
    "bartlett_hann": "bartlettHann",
    "bartletthann": "bartlettHann",
    "lanczoz": "lanczos",
    "rect": "rectangular",
    "boxcar": "rectangular",
}

_VALUE_RANGES = {
    WindowFunction.BARTLETT: (0.0, 1.0),
    WindowFunction.BARTLETT_HANN: (0.0, 1.0),
    WindowFunction.BLACKMAN: (-1e-12, 1.0),
    WindowFunction.COSINE: (0.0, 1.0),
    WindowFunction.GAUSS: (0.0, 1.0),
    WindowFunction.HAMMING: (0.08, 1.0),
    WindowFunction.HANN: (0.0, 1.0),
    WindowFunction.LANCZOS: (0.0, 1.0),
    WindowFunction.RECTANGULAR: (1.0, 1.0),
    WindowFunction.TRIANGULAR: (0.0, 1.0),
}


def _bartlett(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    m = n - 1
    return (2.0 / m) * (m / 2.0 - np.abs(i - m / 2.0))


def _bartlett_hann(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    m = n - 1
    return 0.62 - 0.48 * np.abs(i / m - 0.5) - 0.38 * np.cos(2.0 * np.pi * i / m)


def _blackman(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    a = BLACKMAN_DEFAULT_ALPHA if alpha is None else alpha
    m = n - 1
    return (
        (1.0 - a) / 2.0
        - 0.5 * np.cos(2.0 * np.pi * i / m)
        + (a / 2.0) * np.cos(4.0 * np.pi * i / m)
    )


def _cosine(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    return np.cos(np.pi * i / (n - 1) - np.pi / 2.0)


def _gauss(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    a = GAUSS_DEFAULT_ALPHA if alpha is None else alpha
    m = n - 1
    return np.exp(-0.5 * ((i - m / 2.0) / (a * m / 2.0)) ** 2)


def _hamming(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    return 0.54 - 0.46 * np.cos(2.0 * np.pi * i / (n - 1))


def _hann(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * i / (n - 1)))


def _lanczos(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    # np.sinc is the normalized sinc, sin(pi x) / (pi x), with sinc(0) = 1
    return np.sinc(2.0 * i / (n - 1) - 1.0)


def _rectangular(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    return np.ones_like(i)


def _triangular(i: np.ndarray, n: int, alpha: float | None) -> np.ndarray:
    return (2.0 / n) * (n / 2.0 - np.abs(i - (n - 1) / 2.0))


_FORMULAS = {
    WindowFunction.BARTLETT: _bartlett,
    WindowFunction.BARTLETT_HANN: _bartlett_hann,
    WindowFunction.BLACKMAN: _blackman,
    WindowFunction.COSINE: _cosine,
    WindowFunction.GAUSS: _gauss,
    WindowFunction.HAMMING: _hamming,
    WindowFunction.HANN: _hann,
    WindowFunction.LANCZOS: _lanczos,
    WindowFunction.RECTANGULAR: _rectangular,
    WindowFunction.TRIANGULAR: _triangular,
}


@lru_cache(maxsize=32)
def _window_table(window: WindowFunction, size: int, alpha: float | None) -> np.ndarray:
    i = np.arange(size, dtype=np.float64)
    table = _FORMULAS[window](i, size, alpha).astype(np.float64)
    table.flags.writeable = False
    return table


def get_window(
    name: str | WindowFunction | None,
    size: int,
    alpha: float | None = None,
) -> np.ndarray:
    """
    Build a window table.

    Results are cached for repeated calls with identical parameters.

    Parameters
    ----------
    name : str or WindowFunction, optional
        Window name (see :class:`WindowFunction`). None selects ``hann``.
    size : int
        Number of samples in the window. Must be at least 2.
    alpha : float, optional
        Shape parameter for ``blackman`` (default 0.16) and ``gauss``
        (default 0.25). Ignored by the other windows.

    Returns
    -------
    np.ndarray
        Read-only float64 array of shape (size,).

    Raises
    ------
    ConfigurationError
        If the name is unknown, size < 2, or alpha is not positive.
    """
    window = WindowFunction.from_name(name)
    if isinstance(size, bool) or int(size) != size or size < 2:
        raise ConfigurationError(f"Window size must be an integer >= 2, got {size!r}")
    if alpha is not None:
        validate_positive(alpha, "alpha")
        alpha = float(alpha)
    return _window_table(window, int(size), alpha)


__all__ = ["WindowFunction", "get_window"]
