"""ptree - Pairtree identifier-to-path mapping."""

from ._version import __version__
from .codec import (
    EncapsulatingDir,
    InvalidPpath,
    NoEncapsulatingDir,
    PathCodec,
    clean,
    get_codec,
    unclean,
)
from .core import PairtreeConfig, configure, get_config
from .errors import (
    ConfigError,
    InvalidPathError,
    MalformedEscapeError,
    PairtreeError,
    StorageError,
)
from .storage import PairtreeObject, PairtreeRoot


def map_to_path(identifier, base_path=None, encapsulating_dir=None):
    """Map an identifier to a ppath using the process configuration."""
    return get_codec().map_to_path(identifier, base_path, encapsulating_dir)


def map_to_id(path, base_path=None):
    """Recover an identifier from a ppath using the process configuration."""
    return get_codec().map_to_id(path, base_path)


def extract_encapsulating_dir(path, base_path=None):
    """Encapsulating directory name of a ppath, or None."""
    return get_codec().extract_encapsulating_dir(path, base_path)


__all__ = [
    "ConfigError",
    "EncapsulatingDir",
    "InvalidPathError",
    "InvalidPpath",
    "MalformedEscapeError",
    "NoEncapsulatingDir",
    "PairtreeConfig",
    "PairtreeError",
    "PairtreeObject",
    "PairtreeRoot",
    "PathCodec",
    "StorageError",
    "__version__",
    "clean",
    "configure",
    "extract_encapsulating_dir",
    "get_codec",
    "get_config",
    "map_to_id",
    "map_to_path",
    "unclean",
]
