"""Tests for the exception hierarchy."""

import pytest

import fastspec
from fastspec.exceptions import (
    AudioLoadError,
    ConfigError,
    ConfigurationError,
    DataError,
    FastSpecError,
)


class TestExceptionHierarchy:
    """Tests for exception base classes."""

    @pytest.mark.parametrize("cls", [ConfigurationError, DataError, AudioLoadError])
    def test_library_base(self, cls):
        """Test every error derives from FastSpecError."""
        assert issubclass(cls, FastSpecError)

    @pytest.mark.parametrize("cls", [ConfigurationError, DataError])
    def test_value_error(self, cls):
        """Test errors can be caught as ValueError."""
        assert issubclass(cls, ValueError)

    def test_audio_load_is_data_error(self):
        """Test AudioLoadError is a DataError."""
        assert issubclass(AudioLoadError, DataError)

    def test_config_error_alias(self):
        """Test ConfigError names ConfigurationError."""
        assert ConfigError is ConfigurationError

    def test_top_level_exports(self):
        """Test exceptions are exported from the package."""
        assert fastspec.ConfigError is ConfigurationError
        assert fastspec.DataError is DataError
