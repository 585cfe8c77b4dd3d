"""Tests for signal framing."""

import numpy as np
import pytest

from fastspec.exceptions import ConfigurationError, DataError
from fastspec.primitives import frame_signal, num_frames


class TestFrameSignal:
    """Tests for frame_signal and num_frames."""

    def test_frame_count(self):
        """Test frames are taken while a whole frame fits."""
        assert num_frames(10, 4, 2) == 4
        assert num_frames(11, 4, 2) == 4
        assert num_frames(4, 4, 1) == 1
        assert num_frames(3, 4, 1) == 0

    def test_last_frame_ends_at_signal_end(self):
        """Test a frame ending exactly at the last sample is kept."""
        y = np.arange(12)
        frames = frame_signal(y, 4, 4)

        assert frames.shape == (3, 4)
        np.testing.assert_array_equal(frames[-1], [8, 9, 10, 11])

    def test_trailing_partial_frame_dropped(self):
        """Test trailing samples shorter than a frame are dropped."""
        frames = frame_signal(np.arange(14), 4, 4)
        assert frames.shape == (3, 4)

    def test_overlapping_frames(self):
        """Test hop smaller than frame length gives overlapping frames."""
        frames = frame_signal(np.arange(8), 4, 2)
        np.testing.assert_array_equal(frames, [[0, 1, 2, 3], [2, 3, 4, 5], [4, 5, 6, 7]])

    def test_shape_matches_num_frames(self, random_audio):
        """Test frame_signal agrees with num_frames."""
        frames = frame_signal(random_audio, 512, 128)
        assert frames.shape == (num_frames(len(random_audio), 512, 128), 512)

    def test_short_signal(self):
        """Test signals shorter than one frame raise DataError."""
        with pytest.raises(DataError):
            frame_signal(np.zeros(3), 4, 1)

    def test_not_1d(self):
        """Test multi-dimensional input raises DataError."""
        with pytest.raises(DataError):
            frame_signal(np.zeros((2, 16)), 4, 1)

    @pytest.mark.parametrize("frame_length,hop_length", [(0, 1), (4, 0), (4, -1)])
    def test_invalid_lengths(self, frame_length, hop_length):
        """Test non-positive lengths raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            frame_signal(np.zeros(16), frame_length, hop_length)
