"""Tests for flowerstall package exports and metadata."""

import pytest

import flowerstall


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(flowerstall.__version__, str)
        assert "0.1.0" in flowerstall.__version__

    def test_free_threading_declaration(self) -> None:
        assert flowerstall._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in flowerstall.__all__:
            assert getattr(flowerstall, name) is not None

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            flowerstall.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
