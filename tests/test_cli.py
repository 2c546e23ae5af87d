"""Tests for the ptree command line interface."""

import pytest
from typer.testing import CliRunner

from ptree.cli.main import app


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(app, ["--separator", "/", *args])


class TestCodecCommands:
    """Test the encode/decode style commands."""

    def test_clean(self, runner):
        """Test cleaning an identifier."""
        result = invoke(runner, "clean", 'ab"cd')
        assert result.exit_code == 0
        assert result.output.strip() == "ab^22cd"

    def test_unclean(self, runner):
        """Test uncleaning an identifier."""
        result = invoke(runner, "unclean", "ark+=13030=xt12t3")
        assert result.exit_code == 0
        assert result.output.strip() == "ark:/13030/xt12t3"

    def test_unclean_malformed(self, runner):
        """Test a broken escape exits with an error."""
        result = invoke(runner, "unclean", "^zz")
        assert result.exit_code == 1
        assert "Invalid hex digits" in result.output

    def test_encode(self, runner):
        """Test encoding with and without extras."""
        result = invoke(runner, "encode", "ark:/13030/xt12t3")
        assert result.exit_code == 0
        assert result.output.strip() == "ar/k+/=1/30/30/=x/t1/2t/3"

        result = invoke(runner, "encode", "abc", "--base", "/store", "--dir", "obj")
        assert result.output.strip() == "/store/ab/c/obj"

    def test_encode_segment_length(self, runner):
        """Test the global segment length option."""
        result = runner.invoke(app, ["-n", "3", "-s", "/", "encode", "abcdefg"])
        assert result.exit_code == 0
        assert result.output.strip() == "abc/def/g"

    def test_decode(self, runner):
        """Test decoding a path."""
        result = invoke(runner, "decode", "/store/ar/k+/=1/30/30/=x/t1/2t/3/obj", "--base", "/store")
        assert result.exit_code == 0
        assert result.output.strip() == "ark:/13030/xt12t3"

    def test_decode_invalid(self, runner):
        """Test a malformed path exits with an error."""
        result = invoke(runner, "decode", "abc")
        assert result.exit_code == 1
        assert "contains no shorties" in result.output

    def test_inspect(self, runner):
        """Test inspecting a path with an encapsulating directory."""
        result = invoke(runner, "inspect", "ab/cd/manifest")
        assert result.exit_code == 0
        assert "identifier: abcd" in result.output
        assert "encapsulating directory: manifest" in result.output

    def test_inspect_plain(self, runner):
        """Test inspecting a path without an encapsulating directory."""
        result = invoke(runner, "inspect", "ab/cd")
        assert "encapsulating directory: none" in result.output

    def test_inspect_invalid(self, runner):
        """Test inspecting a malformed path."""
        result = invoke(runner, "inspect", "a/bc/def")
        assert result.exit_code == 1
        assert "incorrect segment length" in result.output


class TestOptions:
    """Test global options and configuration."""

    def test_bad_separator(self, runner):
        """Test an invalid separator is reported."""
        result = runner.invoke(app, ["--separator", "ab", "clean", "x"])
        assert result.exit_code == 1
        assert "single character" in result.output

    def test_config_file(self, runner, tmp_path):
        """Test settings come from a config file."""
        config = tmp_path / "config.yaml"
        config.write_text("segment_length: 4\npath_separator: /\n")
        result = runner.invoke(app, ["--config", str(config), "encode", "abcdefgh"])
        assert result.exit_code == 0
        assert result.output.strip() == "abcd/efgh"

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "ptree version:" in result.output


class TestMkobj:
    """Test object directory creation."""

    def test_creates_object(self, runner, tmp_path):
        """Test the object directory is created under pairtree_root."""
        result = invoke(runner, "mkobj", str(tmp_path), "abc")
        assert result.exit_code == 0
        assert (tmp_path / "pairtree_root" / "ab" / "c" / "obj").is_dir()
        assert "Object ready" in result.output

    def test_with_prefix(self, runner, tmp_path):
        """Test the store prefix is stripped."""
        result = invoke(runner, "mkobj", str(tmp_path), "ark:/13030/xt12t3", "--prefix", "ark:/13030/")
        assert result.exit_code == 0
        assert (tmp_path / "pairtree_root" / "xt" / "12" / "t3" / "obj").is_dir()


class TestVersion:
    """Test version lookup."""

    def test_from_metadata(self, monkeypatch):
        """Test the installed distribution version is reported."""
        from ptree import _version

        monkeypatch.setattr(_version, "version", lambda name: "1.2.3")
        assert _version.get_version() == "1.2.3"

    def test_not_installed(self, monkeypatch):
        """Test a placeholder is used without package metadata."""
        from importlib.metadata import PackageNotFoundError

        from ptree import _version

        def missing(name):
            raise PackageNotFoundError(name)

        monkeypatch.setattr(_version, "version", missing)
        assert _version.get_version() == "0.0.0-unknown"
