"""Test configuration and shared fixtures for ptree tests."""

import pytest

from ptree.codec.ppath import PathCodec
from ptree.core import config as core_config
from ptree.core.config import PairtreeConfig, reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from ~/.ptree and PTREE_* variables."""
    for name in ("PTREE_CONFIG", "PTREE_SEGMENT_LENGTH", "PTREE_PATH_SEPARATOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(core_config, "CONFIG_FILE", tmp_path / "no-such-config.yaml")
    reset_config()
    yield
    reset_config()


@pytest.fixture
def codec():
    """Default-width codec using '/' regardless of platform."""
    return PathCodec(PairtreeConfig(segment_length=2, path_separator="/"))


@pytest.fixture
def make_codec():
    """Factory for codecs with a given width and separator."""
    def _make(segment_length: int = 2, separator: str = "/") -> PathCodec:
        return PathCodec(PairtreeConfig(segment_length=segment_length, path_separator=separator))
    return _make
