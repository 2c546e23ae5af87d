"""Pairtree identifier and path codec."""

from .clean import clean, unclean
from .ppath import (
    EncapsulatingDir,
    InvalidPpath,
    NoEncapsulatingDir,
    PathCodec,
    PpathLayout,
    get_codec,
)

__all__ = [
    "EncapsulatingDir",
    "InvalidPpath",
    "NoEncapsulatingDir",
    "PathCodec",
    "PpathLayout",
    "clean",
    "get_codec",
    "unclean",
]
