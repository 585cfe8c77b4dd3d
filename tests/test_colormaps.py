"""Tests for colormaps."""

import numpy as np
import pytest

from fastspec.colormaps import ColorMap, get_color_map
from fastspec.exceptions import ConfigurationError, DataError


class TestColorMapConstruction:
    """Tests for ColorMap.from_spec."""

    @pytest.mark.parametrize("name", ["roseus", "gray", "igray"])
    def test_named_maps(self, name):
        """Test named maps have 256 RGBA entries in [0, 1]."""
        cmap = ColorMap.from_spec(name)

        assert cmap.name == name
        assert cmap.table.shape == (256, 4)
        assert np.all((cmap.table >= 0) & (cmap.table <= 1))
        assert len(cmap) == 256

    def test_default_is_roseus(self):
        """Test None selects roseus."""
        assert get_color_map().name == "roseus"

    def test_gray_decreasing(self):
        """Test gray luminance falls from white to black."""
        table = ColorMap.from_spec("gray").table

        assert table[0, 0] == pytest.approx(255 / 256)
        assert table[255, 0] == pytest.approx(0.0)
        assert np.all(np.diff(table[:, 0]) < 0)
        np.testing.assert_array_equal(table[:, 3], 1.0)

    def test_igray_increasing(self):
        """Test igray luminance rises from black to white."""
        table = ColorMap.from_spec("igray").table

        assert table[0, 0] == pytest.approx(0.0)
        assert table[255, 0] == pytest.approx(255 / 256)
        assert np.all(np.diff(table[:, 1]) > 0)

    def test_custom_table(self):
        """Test a well-formed 256x4 table is accepted."""
        table = [[i / 255, 0.0, 1 - i / 255, 1.0] for i in range(256)]
        cmap = ColorMap.from_spec(table)

        assert cmap.name == "custom"
        assert cmap(255) == pytest.approx((1.0, 0.0, 0.0, 1.0))

    def test_custom_ndarray(self):
        """Test a NumPy table is accepted."""
        cmap = ColorMap.from_spec(np.full((256, 4), 0.5))
        assert cmap.map(7) == (0.5, 0.5, 0.5, 0.5)

    def test_rejects_255_entries(self):
        """Test tables with 255 entries are rejected."""
        with pytest.raises(ConfigurationError, match="256"):
            ColorMap.from_spec([[0.0, 0.0, 0.0, 1.0]] * 255)

    def test_rejects_three_components(self):
        """Test entries with 3 components are rejected."""
        table = [[0.0, 0.0, 0.0, 1.0]] * 256
        table[10] = [0.0, 0.0, 0.0]
        with pytest.raises(ConfigurationError, match="4 values"):
            ColorMap.from_spec(table)

    def test_rejects_out_of_range(self):
        """Test components outside [0, 1] are rejected."""
        table = [[0.0, 0.0, 0.0, 1.0]] * 256
        table[3] = [0.0, 2.0, 0.0, 1.0]
        with pytest.raises(ConfigurationError):
            ColorMap.from_spec(table)

    def test_rejects_non_numeric(self):
        """Test non-numeric components are rejected."""
        table = [[0.0, 0.0, 0.0, 1.0]] * 256
        table[0] = [0.0, "red", 0.0, 1.0]
        with pytest.raises(ConfigurationError):
            ColorMap.from_spec(table)

    def test_rejects_unknown_name(self):
        """Test unknown names are rejected."""
        with pytest.raises(ConfigurationError, match="No such colormap"):
            ColorMap.from_spec("viridis")

    def test_table_is_read_only(self):
        """Test tables cannot be modified after construction."""
        cmap = ColorMap.from_spec("gray")
        with pytest.raises(ValueError):
            cmap.table[0, 0] = 0.5


class TestColorMapLookup:
    """Tests for map and apply."""

    def test_map_byte(self):
        """Test map returns the table row."""
        cmap = ColorMap.from_spec("roseus")
        assert cmap.map(128) == tuple(cmap.table[128])

    @pytest.mark.parametrize("value", [-1, 256, 1.5])
    def test_map_rejects_invalid(self, value):
        """Test non-byte intensities raise DataError."""
        with pytest.raises(DataError):
            ColorMap.from_spec("gray").map(value)

    def test_apply_matrix(self, intensity_matrix):
        """Test apply maps every cell to RGBA."""
        cmap = ColorMap.from_spec("igray")
        rgba = cmap.apply(intensity_matrix)

        assert rgba.shape == (40, 16, 4)
        np.testing.assert_allclose(rgba[..., 0], intensity_matrix / 256)
