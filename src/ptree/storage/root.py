"""Pairtree directory structure on the local filesystem.

Layout of a store created under ``parent``::

    parent/
      pairtree_version0_1        marker file
      pairtree_prefix            optional, holds the identifier prefix
      pairtree_root/
        ar/k+/=1/30/30/=x/t1/2t/3/obj/    object directory

Every object lives in a terminator directory one character longer than
a shorty, so a directory that only lies on the way to other objects is
never taken for an object.
"""

import logging
import os
from pathlib import Path

from ..codec.ppath import PathCodec, get_codec
from ..core.messages import format_message
from ..errors import ConfigError, InvalidPathError, StorageError
from .utils import atomic_write_text, ensure_dir

logger = logging.getLogger(__name__)

ROOT_DIR_NAME = "pairtree_root"
VERSION_FILE_NAME = "pairtree_version0_1"
PREFIX_FILE_NAME = "pairtree_prefix"
TERMINATOR_BASE = "obj"
VERSION_FILE_CONTENT = (
    "This directory conforms to Pairtree Version 0.1. Updated spec: "
    "http://www.cdlib.org/inside/diglib/pairtree/pairtreespec.html\n"
)


class PairtreeObject:
    """An object directory inside a pairtree root.

    ``path`` is the terminator directory that holds the object's content.
    """

    def __init__(self, root: "PairtreeRoot", id: str, path: Path):
        self.root = root
        self.id = id
        self.path = path

    def exists(self) -> bool:
        return self.path.is_dir()

    def __fspath__(self) -> str:
        return str(self.path)

    def __str__(self) -> str:
        return str(self.path.absolute())

    def __repr__(self) -> str:
        return f"PairtreeObject(id={self.id!r}, path={str(self.path)!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PairtreeObject):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)


class PairtreeRoot:
    """A pairtree store rooted at ``<parent>/pairtree_root``.

    Creates the root directory, version marker and (when given) prefix
    file on construction. Reopening an existing store without a prefix
    picks the prefix up from the ``pairtree_prefix`` file.
    """

    def __init__(
        self,
        parent: str | Path,
        prefix: str | None = None,
        codec: PathCodec | None = None,
    ):
        self.codec = codec if codec is not None else get_codec()
        if self.codec.separator not in {os.sep, "/"}:
            raise ConfigError(format_message("pt.bad_separator", repr(self.codec.separator)))

        self.parent = ensure_dir(parent)
        self.path = self.parent / ROOT_DIR_NAME
        created = not self.path.exists()
        ensure_dir(self.path)

        version_file = self.parent / VERSION_FILE_NAME
        if not version_file.exists():
            if not created:
                logger.warning(format_message("pt.bad_version_file", self.path))
            atomic_write_text(version_file, VERSION_FILE_CONTENT)

        self.prefix = self._resolve_prefix(prefix)

        if created:
            logger.info(format_message("pt.root_created", self.path))

    def _resolve_prefix(self, prefix: str | None) -> str | None:
        prefix_file = self.parent / PREFIX_FILE_NAME
        stored = None
        if prefix_file.exists():
            stored = prefix_file.read_text(encoding="utf-8").removesuffix("\n")

        if prefix is None:
            return stored or None
        if stored is not None and stored != prefix:
            raise StorageError(format_message("pt.prefix_mismatch", self.path, stored, prefix))
        if stored is None:
            atomic_write_text(prefix_file, prefix + "\n")
        return prefix

    @property
    def terminator(self) -> str:
        """Object directory name, one character longer than a shorty."""
        length = self.codec.segment_length + 1
        return "".join(TERMINATOR_BASE[i % len(TERMINATOR_BASE)] for i in range(length))

    def _relative_id(self, id: str) -> str:
        relative = id
        if self.prefix and id.startswith(self.prefix):
            relative = id[len(self.prefix):]
        if not relative:
            raise StorageError(format_message("pt.empty_id", id, self.path))
        return relative

    def object_path(self, id: str) -> Path:
        """Filesystem path an identifier maps to (nothing is created).

        Raises:
            StorageError: If nothing of the identifier is left once the
                store prefix is removed
        """
        return Path(self.codec.map_to_path(
            self._relative_id(id), base_path=str(self.path), encapsulating_dir=self.terminator
        ))

    def exists(self, id: str) -> bool:
        return self.object_path(id).is_dir()

    def get_object(self, id: str) -> PairtreeObject:
        """Return the object for ``id``, creating its directories if needed.

        Raises:
            StorageError: If the object directory cannot be created
        """
        path = ensure_dir(self.object_path(id))
        obj = PairtreeObject(self, id, path)

        if self.prefix:
            logger.debug(format_message("pt.object_retrieved2", obj, self.prefix, id))
        else:
            logger.debug(format_message("pt.object_retrieved1", obj, id))
        return obj

    def find_object(self, id: str) -> PairtreeObject | None:
        """Return the object for ``id`` if it has been created."""
        path = self.object_path(id)
        if not path.is_dir():
            return None
        return PairtreeObject(self, id, path)

    def id_for_path(self, path: str | Path) -> str:
        """Identifier of the object whose directory is ``path``.

        Raises:
            InvalidPathError: If the path is not a well-formed ppath ending
                in this store's terminator directory
        """
        path = str(path)
        if self.codec.extract_encapsulating_dir(path, base_path=str(self.path)) != self.terminator:
            raise InvalidPathError(path, "not an object directory",
                                   format_message("pt.not_object_dir", path))
        id = self.codec.map_to_id(path, base_path=str(self.path))
        if self.prefix:
            return self.prefix + id
        return id

    def __repr__(self) -> str:
        return f"PairtreeRoot(path={str(self.path)!r}, prefix={self.prefix!r})"


__all__ = ["PairtreeObject", "PairtreeRoot"]
