"""Tests for audio file loading."""

import numpy as np
import pytest

from fastspec.exceptions import AudioLoadError
from fastspec.types import AudioData
from fastspec.utils import load_audio_file

sf = pytest.importorskip("soundfile")


@pytest.fixture
def stereo_wav(tmp_path, stereo_audio):
    path = tmp_path / "stereo.wav"
    sf.write(str(path), stereo_audio.T * 0.1, 44100)
    return path


class TestLoadAudioFile:
    """Tests for load_audio_file."""

    def test_channels_first(self, stereo_wav):
        """Test audio is returned as [channels, samples] float32."""
        audio, sr = load_audio_file(stereo_wav)

        assert sr == 44100
        assert audio.shape == (2, 44100)
        assert audio.dtype == np.float32

    def test_mono(self, stereo_wav):
        """Test mono averages the channels."""
        audio, _ = load_audio_file(stereo_wav, mono=True)
        assert audio.shape == (1, 44100)

    def test_resample(self, stereo_wav):
        """Test resampling to a target rate."""
        pytest.importorskip("scipy")
        audio, sr = load_audio_file(stereo_wav, target_sr=22050)

        assert sr == 22050
        assert audio.shape == (2, 22050)

    def test_missing_file(self, tmp_path):
        """Test missing files raise AudioLoadError."""
        with pytest.raises(AudioLoadError, match="not found"):
            load_audio_file(tmp_path / "missing.wav")

    def test_undecodable_file(self, tmp_path):
        """Test garbage files raise AudioLoadError."""
        path = tmp_path / "noise.wav"
        path.write_bytes(b"not audio at all")
        with pytest.raises(AudioLoadError):
            load_audio_file(path)

    def test_audio_data_from_file(self, stereo_wav):
        """Test AudioData.from_file wraps load_audio_file."""
        audio = AudioData.from_file(stereo_wav)
        assert audio.channels == 2
        assert audio.sample_rate == 44100

