"""Installed version of ptree."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Version from package metadata, or a placeholder for source checkouts."""
    try:
        return version("ptree")
    except PackageNotFoundError:
        return "0.0.0-unknown"


__version__ = get_version()
