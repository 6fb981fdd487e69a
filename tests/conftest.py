"""Test configuration and fixtures for ringwar."""

import pytest

from ringwar.config import BuildConfig


@pytest.fixture
def make_config(tmp_path):
    """Return a factory building a BuildConfig rooted at tmp_path."""

    def factory(ring=None, **project):
        data = {"name": "myapp", "version": "0.1.0", "ring": {"handler": "myapp.core/handler"}}
        if ring is not None:
            data["ring"] = {"handler": "myapp.core/handler", **ring}
        data.update(project)
        return BuildConfig.from_mapping(data, tmp_path)

    return factory


@pytest.fixture
def project_dir(tmp_path):
    """Create a small project: one compiled class, one resource, an empty war-resources tree."""
    (tmp_path / "target" / "classes" / "myapp").mkdir(parents=True)
    (tmp_path / "target" / "classes" / "myapp" / "core.class").write_bytes(b"\xca\xfe\xba\xbe")
    (tmp_path / "resources" / "public").mkdir(parents=True)
    (tmp_path / "resources" / "public" / "index.html").write_text("<h1>Hello</h1>")
    (tmp_path / "war-resources").mkdir()
    return tmp_path
