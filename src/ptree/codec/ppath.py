"""Identifier <-> pairtree path (ppath) mapping.

A cleaned identifier is cut left to right into shorties of
``segment_length`` characters and joined with the path separator::

    ark:/13030/xt12t3  ->  ar/k+/=1/30/30/=x/t1/2t/3

A ppath may carry a base path in front and an encapsulating directory
after the last shorty. The encapsulating directory is never marked
explicitly; :meth:`PathCodec.parse` recognises it from segment lengths.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Union

from ..core.config import PairtreeConfig, get_config
from ..core.messages import format_message
from ..errors import InvalidPathError
from .clean import clean, unclean

logger = logging.getLogger(__name__)

REASON_NO_SHORTIES = "no shorties"
REASON_SEGMENT_LENGTH = "incorrect segment length"
REASON_EMPTY_DIR = "empty encapsulating directory"

_REASON_MESSAGES = {
    REASON_NO_SHORTIES: "pt.no_shorties",
    REASON_SEGMENT_LENGTH: "pt.bad_segment_length",
    REASON_EMPTY_DIR: "pt.empty_encapsulating_dir",
}


@dataclass(frozen=True)
class NoEncapsulatingDir:
    """Every segment of the path is a shorty."""


@dataclass(frozen=True)
class EncapsulatingDir:
    """The last segment names an encapsulating directory."""

    name: str


@dataclass(frozen=True)
class InvalidPpath:
    """The path breaks the shorty segment-length rules."""

    reason: str


PpathLayout = Union[NoEncapsulatingDir, EncapsulatingDir, InvalidPpath]


class PathCodec:
    """Maps identifiers to pairtree paths and back.

    The configuration is captured at construction; a codec never sees
    later changes to the process-wide settings.
    """

    def __init__(self, config: PairtreeConfig | None = None):
        self.config = config if config is not None else get_config()
        self.segment_length = self.config.segment_length
        self.separator = self.config.path_separator

    def __repr__(self) -> str:
        return f"PathCodec(segment_length={self.segment_length}, separator={self.separator!r})"

    clean = staticmethod(clean)
    unclean = staticmethod(unclean)

    def shorties(self, identifier: str) -> list[str]:
        """Cleaned identifier cut into shorties (``[""]`` for an empty id)."""
        cleaned = clean(identifier)
        n = self.segment_length
        if not cleaned:
            return [""]
        return [cleaned[i:i + n] for i in range(0, len(cleaned), n)]

    def concat(self, *paths: str | None) -> str:
        """Join path pieces, skipping ``None`` and avoiding doubled separators.

        A separator is added before a piece unless the previous piece
        already ends with one.
        """
        out: list[str] = []
        previous: str | None = None
        for piece in paths:
            if piece is None:
                continue
            if previous is not None and not previous.endswith(self.separator):
                out.append(self.separator)
            out.append(piece)
            previous = piece
        return "".join(out)

    def map_to_path(
        self,
        identifier: str,
        base_path: str | None = None,
        encapsulating_dir: str | None = None,
    ) -> str:
        """Map an identifier to its ppath.

        Args:
            identifier: Any Unicode identifier
            base_path: Optional prefix joined in front of the shorties
            encapsulating_dir: Optional directory name appended after the
                shorties, unsplit

        Returns:
            The ppath string
        """
        ppath = self.separator.join(self.shorties(identifier))
        return self.concat(base_path, ppath, encapsulating_dir)

    def remove_base_path(self, base_path: str, path: str) -> str:
        """Strip ``base_path`` (and one following separator) from ``path``.

        A path that does not start with the base path is returned as is.
        """
        if not path.startswith(base_path):
            return path
        stripped = path[len(base_path):]
        if stripped.startswith(self.separator):
            stripped = stripped[1:]
        return stripped

    def _strip_trailing_separator(self, path: str) -> str:
        if path.endswith(self.separator):
            return path[:-1]
        return path

    def _layout(self, ppath: str) -> PpathLayout:
        n = self.segment_length
        segments = ppath.split(self.separator)

        if len(segments) == 1:
            if len(segments[0]) <= n:
                return NoEncapsulatingDir()
            return InvalidPpath(REASON_NO_SHORTIES)

        if any(len(segment) != n for segment in segments[:-2]):
            return InvalidPpath(REASON_SEGMENT_LENGTH)

        previous, last = segments[-2], segments[-1]

        if len(previous) > n:
            return InvalidPpath(REASON_SEGMENT_LENGTH)
        if len(previous) == n:
            if len(last) > n:
                return EncapsulatingDir(last)
            return NoEncapsulatingDir()
        # A short final shorty can only be followed by a directory name.
        if not last:
            return InvalidPpath(REASON_EMPTY_DIR)
        return EncapsulatingDir(last)

    def parse(self, path: str, base_path: str | None = None) -> PpathLayout:
        """Classify a ppath without raising.

        Returns:
            NoEncapsulatingDir, EncapsulatingDir(name) or InvalidPpath(reason)
        """
        if base_path is not None:
            path = self.remove_base_path(base_path, path)
        return self._layout(self._strip_trailing_separator(path))

    def _invalid(self, path: str, layout: InvalidPpath) -> InvalidPathError:
        message = format_message(_REASON_MESSAGES[layout.reason], path)
        logger.debug(message)
        return InvalidPathError(path, layout.reason, message)

    def extract_encapsulating_dir(self, path: str, base_path: str | None = None) -> str | None:
        """Name of the encapsulating directory at the end of ``path``, if any.

        Raises:
            InvalidPathError: If the path breaks the segment-length rules
        """
        layout = self.parse(path, base_path)
        if isinstance(layout, InvalidPpath):
            raise self._invalid(path, layout)
        if isinstance(layout, EncapsulatingDir):
            return layout.name
        return None

    def map_to_id(self, path: str, base_path: str | None = None) -> str:
        """Recover the identifier a ppath was generated from.

        Args:
            path: The ppath, optionally with base path and encapsulating dir
            base_path: Prefix to strip first (ignored if ``path`` lacks it)

        Raises:
            InvalidPathError: If the path breaks the segment-length rules
            MalformedEscapeError: If a shorty holds a broken ``^`` escape
        """
        original = path
        if base_path is not None:
            path = self.remove_base_path(base_path, path)
        ppath = self._strip_trailing_separator(path)

        layout = self._layout(ppath)
        if isinstance(layout, InvalidPpath):
            raise self._invalid(original, layout)
        if isinstance(layout, EncapsulatingDir):
            ppath = ppath[:-len(layout.name)]

        return unclean(ppath.replace(self.separator, ""))


@lru_cache(maxsize=1)
def get_codec() -> PathCodec:
    """Codec bound to the process-wide configuration."""
    return PathCodec(get_config())


__all__ = [
    "EncapsulatingDir",
    "InvalidPpath",
    "NoEncapsulatingDir",
    "PathCodec",
    "PpathLayout",
    "get_codec",
]
