"""Argument validation helpers shared by the primitives."""

from __future__ import annotations

import math
import numbers

from fastspec.exceptions import ConfigurationError


def validate_positive(value: float, name: str) -> None:
    """Raise ConfigurationError unless ``value`` is a finite number > 0."""
    if not isinstance(value, numbers.Real) or not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value!r}")


def validate_non_negative(value: float, name: str) -> None:
    """Raise ConfigurationError unless ``value`` is a finite number >= 0."""
    if not isinstance(value, numbers.Real) or not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value!r}")


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def validate_frame_size(frame_size: int, name: str = "frame_size") -> None:
    """Frame sizes must be integer powers of two, at least 2."""
    if (
        isinstance(frame_size, bool)
        or not isinstance(frame_size, numbers.Integral)
        or frame_size < 2
        or not is_power_of_two(frame_size)
    ):
        raise ConfigurationError(
            f"{name} must be a power of two >= 2, got {frame_size!r}"
        )


__all__ = [
    "validate_positive",
    "validate_non_negative",
    "validate_frame_size",
    "is_power_of_two",
]
