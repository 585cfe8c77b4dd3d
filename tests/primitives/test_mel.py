"""Tests for mel filterbank primitives."""

import numpy as np
import pytest

from fastspec.exceptions import ConfigurationError, DataError
from fastspec.primitives import (
    apply_mel,
    bin_frequencies,
    hz_to_mel,
    mel_filterbank,
    mel_to_hz,
)


class TestMelConversion:
    """Tests for hz_to_mel and mel_to_hz."""

    def test_reference_points(self):
        """Test HTK mel values at known frequencies."""
        assert hz_to_mel(0.0) == pytest.approx(0.0)
        assert hz_to_mel(700.0) == pytest.approx(2595.0 * np.log10(2.0))
        assert hz_to_mel(1000.0) == pytest.approx(999.99, abs=0.1)

    def test_inverse(self):
        """Test mel_to_hz inverts hz_to_mel."""
        freqs = np.array([0.0, 100.0, 1000.0, 8000.0, 22050.0])
        np.testing.assert_allclose(mel_to_hz(hz_to_mel(freqs)), freqs, atol=1e-6)


class TestMelFilterbank:
    """Tests for mel_filterbank."""

    def test_shape(self):
        """Test filterbank shape is (num_filters, frame_size // 2 + 1)."""
        bank = mel_filterbank(64, 44100, 512)

        assert bank.weights.shape == (64, 257)
        assert bank.boundaries_hz.shape == (66,)
        assert bank.center_frequencies.shape == (64,)

    def test_non_negative(self):
        """Test all weights are non-negative."""
        bank = mel_filterbank(40, 16000, 1024)
        assert np.all(bank.weights >= 0)

    def test_single_filter_spans_full_range(self):
        """Test one filter covers the whole range from 0 Hz to Nyquist."""
        bank = mel_filterbank(1, 16000, 512)

        assert bank.weights.shape == (1, 257)
        assert bank.boundaries_hz[0] == pytest.approx(0.0)
        assert bank.boundaries_hz[-1] == pytest.approx(8000.0)
        assert np.all(bank.weights >= 0)
        # Non-zero everywhere strictly inside the support
        assert np.all(bank.weights[0, 1:-1] > 0)
        assert bank.weights[0, 0] == pytest.approx(0.0)

    def test_triangle_peaks(self):
        """Test each filter peaks near its center frequency."""
        sr, n = 16000, 2048
        bank = mel_filterbank(20, sr, n)
        bin_hz = sr / n

        for row, center in zip(bank.weights, bank.center_frequencies):
            peak_hz = np.argmax(row) * bin_hz
            assert abs(peak_hz - center) <= bin_hz
            assert row.max() <= 1.0 + 1e-12

    def test_boundaries_evenly_spaced_in_mel(self):
        """Test boundary points are evenly spaced on the mel scale."""
        bank = mel_filterbank(10, 22050, 512)
        np.testing.assert_allclose(np.diff(hz_to_mel(bank.boundaries_hz)),
                                   np.diff(hz_to_mel(bank.boundaries_hz))[0])

    @pytest.mark.parametrize("num_filters", [0, -1, 257, 2.5])
    def test_invalid_num_filters(self, num_filters):
        """Test out-of-range filter counts raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            mel_filterbank(num_filters, 44100, 512)

    def test_cached(self):
        """Test repeated builds share the same weight table."""
        a = mel_filterbank(32, 44100, 512)
        b = mel_filterbank(32, 44100, 512)
        assert a.weights is b.weights


class TestApplyMel:
    """Tests for apply_mel."""

    def test_dot_product(self, random_audio):
        """Test each output is the dot product with one filter row."""
        bank = mel_filterbank(16, 22050, 256)
        spectrum = np.abs(random_audio[:128]).astype(np.float64)

        mel = apply_mel(spectrum, bank)

        assert mel.shape == (16,)
        np.testing.assert_allclose(mel, bank.weights[:, :128] @ spectrum)

    def test_batch(self):
        """Test batched spectra give one mel row per frame."""
        bank = mel_filterbank(8, 8000, 64)
        assert apply_mel(np.ones((5, 32)), bank).shape == (5, 8)

    def test_too_many_bins(self):
        """Test spectra wider than the filterbank raise DataError."""
        bank = mel_filterbank(8, 8000, 64)
        with pytest.raises(DataError):
            apply_mel(np.ones(40), bank)


class TestBinFrequencies:
    """Tests for bin_frequencies."""

    def test_linear(self):
        """Test linear rows map to FFT bin frequencies."""
        freqs = bin_frequencies("linear", 8, 8000)
        np.testing.assert_allclose(freqs, [0, 1000, 2000, 3000])

    def test_mel(self):
        """Test mel rows map to filter centers."""
        freqs = bin_frequencies("mel", 512, 16000, 10)
        assert freqs.shape == (10,)
        assert np.all(np.diff(freqs) > 0)

    def test_mel_requires_count(self):
        """Test the mel scale needs a filter count."""
        with pytest.raises(ConfigurationError):
            bin_frequencies("mel", 512, 16000)

    def test_unknown_scale(self):
        """Test unknown scales raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            bin_frequencies("log", 512, 16000)
