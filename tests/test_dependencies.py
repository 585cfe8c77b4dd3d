"""Tests for optional dependency helpers."""

import pytest

from fastspec.utils import require_dependency


class TestRequireDependency:
    """Tests for require_dependency."""

    def test_installed(self):
        """Test installed packages are returned."""
        assert require_dependency("json").dumps([]) == "[]"

    def test_missing(self):
        """Test missing packages raise ImportError with install hint."""
        with pytest.raises(ImportError, match="pip install fastspec-missing"):
            require_dependency("fastspec_missing_pkg", install_name="fastspec-missing")

    def test_missing_names_extra(self):
        """Test the install hint names the fastspec extra."""
        with pytest.raises(ImportError, match=r"fastspec\[audio\].*pip install fastspec-missing"):
            require_dependency(
                "fastspec_missing_pkg",
                install_name="fastspec-missing",
                purpose="audio file I/O",
                extra="audio",
            )

    def test_missing_chains_cause(self):
        """Test the original ImportError is kept as the cause."""
        with pytest.raises(ImportError) as exc_info:
            require_dependency("fastspec_missing_pkg")
        assert isinstance(exc_info.value.__cause__, ImportError)
