"""Tests for the command-line interface."""

import json

import numpy as np
import pytest

from fastspec.cli import build_parser, config_from_args, main
from fastspec.colormaps import get_color_map
from fastspec.io import load_frequencies, save_frequencies
from fastspec.primitives import resample


class TestConfigFromArgs:
    """Tests for CLI configuration resolution."""

    def test_defaults(self):
        """Test no options give the default config."""
        config = config_from_args(build_parser().parse_args(["in.wav"]))
        assert config.frame_size == 512
        assert config.scale == "mel"

    def test_overrides(self):
        """Test CLI options override config fields."""
        args = build_parser().parse_args(
            ["in.wav", "--frame-size", "1024", "--window", "hamming", "--scale", "linear",
             "--gain-db", "10", "--split-channels"]
        )
        config = config_from_args(args)

        assert config.frame_size == 1024
        assert config.window_func == "hamming"
        assert config.scale == "linear"
        assert config.gain_db == 10.0
        assert config.split_channels is True

    def test_preset_then_override(self):
        """Test overrides apply on top of a preset."""
        args = build_parser().parse_args(["in.wav", "--preset", "music", "--mel-filters", "64"])
        config = config_from_args(args)

        assert config.frame_size == 2048
        assert config.num_mel_filters == 64

    def test_config_file(self, tmp_path):
        """Test a JSON config file is the base."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"frameSize": 256, "scale": "linear"}))

        config = config_from_args(build_parser().parse_args(["in.wav", "--config", str(path)]))
        assert config.frame_size == 256


class TestMain:
    """Tests for the CLI entry point."""

    def test_precomputed_resample(self, tmp_path, intensity_matrix):
        """Test precomputed data is resampled and written."""
        src = save_frequencies([intensity_matrix], tmp_path / "in.json")
        out = tmp_path / "out.json"

        code = main([str(src), "--precomputed", "--width", "10", "--output", str(out)])

        assert code == 0
        assert load_frequencies(out)[0].shape == (10, 16)

    def test_precomputed_summary(self, tmp_path, intensity_matrix, capsys):
        """Test a summary is printed without --output."""
        src = save_frequencies([intensity_matrix], tmp_path / "in.json")

        assert main([str(src), "--precomputed"]) == 0
        assert "channel 0: 40 columns x 16 rows" in capsys.readouterr().out

    def test_invalid_precomputed_exit_code(self, tmp_path, capsys):
        """Test library errors exit with code 2."""
        src = tmp_path / "bad.json"
        src.write_text("[[[300]]]")

        assert main([str(src), "--precomputed"]) == 2
        assert "error" in capsys.readouterr().err

    def test_invalid_config_exit_code(self, tmp_path):
        """Test configuration errors exit with code 2."""
        assert main([str(tmp_path / "in.wav"), "--frame-size", "100"]) == 2

    def test_audio_file(self, tmp_path, sine_wave):
        """Test an audio file is decoded and analyzed."""
        sf = pytest.importorskip("soundfile")
        samples, sr = sine_wave
        wav = tmp_path / "tone.wav"
        sf.write(str(wav), np.stack([samples, samples], axis=1), sr)
        out = tmp_path / "out.json"

        code = main([str(wav), "--scale", "linear", "--split-channels", "--width", "100",
                     "-o", str(out)])

        assert code == 0
        matrices = load_frequencies(out)
        assert len(matrices) == 2
        assert matrices[0].shape == (100, 256)

    def test_missing_audio_file(self, tmp_path):
        """Test missing audio files exit with code 2."""
        pytest.importorskip("soundfile")
        assert main([str(tmp_path / "missing.wav")]) == 2


class TestRgbaOutput:
    """Tests for colormapped RGBA output."""

    def test_color_map_selects_table(self, tmp_path, intensity_matrix):
        """Test --color-map picks the table used for the RGBA dump."""
        src = save_frequencies([intensity_matrix], tmp_path / "in.json")
        out = tmp_path / "rgba.npz"

        assert main([str(src), "--precomputed", "--color-map", "gray", "--rgba", str(out)]) == 0

        with np.load(out) as data:
            rgba = data["arr_0"]
        np.testing.assert_array_equal(rgba, get_color_map("gray").apply(intensity_matrix))
        assert not np.array_equal(rgba, get_color_map("igray").apply(intensity_matrix))

    def test_default_color_map_and_width(self, tmp_path, intensity_matrix):
        """Test RGBA output uses roseus by default and honors --width."""
        src = save_frequencies([intensity_matrix, intensity_matrix], tmp_path / "in.json")
        out = tmp_path / "rgba.npz"

        assert main([str(src), "--precomputed", "--width", "20", "--rgba", str(out)]) == 0

        with np.load(out) as data:
            assert sorted(data.files) == ["arr_0", "arr_1"]
            assert data["arr_1"].shape == (20, 16, 4)
            expected = get_color_map("roseus").apply(resample(intensity_matrix, 20))
            np.testing.assert_array_equal(data["arr_0"], expected)

    def test_unknown_color_map_exit_code(self, tmp_path, intensity_matrix):
        """Test an unknown colormap name exits with code 2."""
        src = save_frequencies([intensity_matrix], tmp_path / "in.json")
        code = main([str(src), "--precomputed", "--color-map", "nope", "--rgba", str(tmp_path / "x.npz")])
        assert code == 2
