"""Tests for decibel quantization."""

import numpy as np
import pytest

from fastspec.exceptions import ConfigurationError
from fastspec.primitives import amplitude_to_db, quantize_db


def _db_to_mag(db):
    return 10.0 ** (np.asarray(db, dtype=np.float64) / 20.0)


class TestAmplitudeToDb:
    """Tests for amplitude_to_db."""

    def test_values(self):
        """Test 20 * log10 conversion."""
        np.testing.assert_allclose(amplitude_to_db([1.0, 0.1, 0.01]), [0.0, -20.0, -40.0])

    def test_zero_is_negative_infinity(self):
        """Test log of zero gives -inf without warnings."""
        with np.errstate(all="raise"):
            assert amplitude_to_db(0.0) == -np.inf


class TestQuantizeLinear:
    """Tests for the default linear quantization mode."""

    def test_branches(self):
        """Test floor, ceiling and mid-range branches."""
        mags = _db_to_mag([-100.0, -70.0, -50.0, -10.0, 0.0])
        out = quantize_db(mags, gain_db=20.0, range_db=80.0)

        assert out.dtype == np.uint8
        assert out[0] == 0
        # -70 dB: 255 + (-50 / 80) * 255 = 95.625
        assert out[1] == 95
        # -50 dB: 255 + (-30 / 80) * 255 = 159.375
        assert out[2] == 159
        assert out[3] == 255
        assert out[4] == 255

    def test_gain_edge_is_full_intensity(self):
        """Test a value exactly at -gain_db maps to 255."""
        assert quantize_db(np.array([1.0]), gain_db=0.0, range_db=80.0)[0] == 255

    def test_silence_maps_to_zero(self):
        """Test zero magnitude maps to byte 0."""
        np.testing.assert_array_equal(quantize_db(np.zeros(10)), np.zeros(10, dtype=np.uint8))

    def test_nan_maps_to_zero(self):
        """Test NaN magnitudes never leak into the output."""
        out = quantize_db(np.array([np.nan, 1.0]))
        np.testing.assert_array_equal(out, [0, 255])

    def test_monotonic(self):
        """Test larger magnitudes never give smaller bytes."""
        mags = _db_to_mag(np.linspace(-120.0, 20.0, 5001))
        out = quantize_db(mags, gain_db=20.0, range_db=80.0)

        assert np.all(np.diff(out.astype(int)) >= 0)

    @pytest.mark.parametrize("gain_db,range_db", [(0.0, 60.0), (40.0, 30.0), (-10.0, 90.0)])
    def test_monotonic_other_windows(self, gain_db, range_db):
        """Test monotonicity holds for other gain and range settings."""
        mags = _db_to_mag(np.linspace(-150.0, 30.0, 2001))
        out = quantize_db(mags, gain_db=gain_db, range_db=range_db)

        assert np.all(np.diff(out.astype(int)) >= 0)

    def test_preserves_shape(self):
        """Test output shape equals input shape."""
        assert quantize_db(np.ones((3, 4, 5))).shape == (3, 4, 5)
        assert quantize_db(np.float64(0.5)).shape == ()


class TestQuantizeLegacy:
    """Tests for the legacy quantization mode."""

    def test_offset_and_wrap(self):
        """Test the +256 offset and 8-bit wraparound."""
        mags = _db_to_mag([-70.0, -50.0])
        out = quantize_db(mags, gain_db=20.0, range_db=80.0, mode="legacy")

        # -70 dB: 256 - 159.375 = 96.625
        assert out[0] == 96
        # -50 dB: 256 - 95.625 = 160.375
        assert out[1] == 160

        # Exactly -gain_db: 256 wraps to 0
        assert quantize_db(np.array([1.0]), gain_db=0.0, mode="legacy")[0] == 0

    def test_floor_and_ceiling_match_linear(self):
        """Test clamp branches are shared with the linear mode."""
        mags = _db_to_mag([-120.0, 0.0])
        np.testing.assert_array_equal(
            quantize_db(mags, mode="legacy"), quantize_db(mags, mode="linear")
        )

    def test_unknown_mode(self):
        """Test unknown modes raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            quantize_db(np.ones(3), mode="cubic")

    def test_invalid_range(self):
        """Test non-positive range_db raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            quantize_db(np.ones(3), range_db=0.0)
