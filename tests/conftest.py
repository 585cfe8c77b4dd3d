"""Pytest configuration and fixtures for fastspec tests."""

import numpy as np
import pytest

_TEST_SEED = 42


@pytest.fixture
def random_audio():
    """Random audio signal for testing."""
    rng = np.random.default_rng(_TEST_SEED)
    return rng.standard_normal(22050).astype(np.float32)


@pytest.fixture
def stereo_audio():
    """Random stereo audio for testing."""
    rng = np.random.default_rng(_TEST_SEED)
    return rng.standard_normal((2, 44100)).astype(np.float32)


@pytest.fixture
def sine_wave():
    """One second of a 440 Hz sine wave at 22050 Hz."""
    sr = 22050
    t = np.arange(sr) / sr
    return (0.5 * np.sin(2 * np.pi * 440.0 * t)).astype(np.float32), sr


@pytest.fixture
def silence():
    """All-zero signal for testing."""
    return np.zeros(8192, dtype=np.float32)


@pytest.fixture
def intensity_matrix():
    """Random uint8 intensity matrix of shape (columns, rows)."""
    rng = np.random.default_rng(_TEST_SEED)
    return rng.integers(0, 256, size=(40, 16), dtype=np.uint8)
