"""Filesystem layer for pairtree stores."""

from .root import PairtreeObject, PairtreeRoot
from .utils import ensure_dir

__all__ = ["PairtreeObject", "PairtreeRoot", "ensure_dir"]
