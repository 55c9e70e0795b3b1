"""
Directory Cursor Module

Sequential reader over the names of a directory, in the manner of
opendir/readdir/seekdir.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, List, Iterator, TYPE_CHECKING

from .entry import Entry
from pymemfs.exceptions import ClosedResourceError

if TYPE_CHECKING:
    from .vfs import FileSystem


class DirectoryCursor:
    """
    Cursor over a directory's entry names, '.' and '..' included.

    ``read()`` hands out one name per call. ``seek()`` can only move
    back to positions already reached by ``read()``.

    Example:
        >>> with fs.opendir('/tmp') as cursor:
        ...     cursor.read()
        '.'
    """

    def __init__(self, fs: 'FileSystem', path: str):
        self._fs = fs
        self.entry: Entry = fs.find_directory(path)
        self._requested_path = path
        self._pos = 0
        self._max_seek = 0
        self._closed = False

    def __repr__(self) -> str:
        return f"DirectoryCursor(path={self._requested_path!r}, pos={self._pos})"

    def __enter__(self) -> 'DirectoryCursor':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if not self._closed:
            self.close()

    def __iter__(self) -> Iterator[str]:
        return iter(self.entry.entry_names())

    @property
    def path(self) -> str:
        return self._fs.path_of(self.entry)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pos(self) -> int:
        return self._pos

    @pos.setter
    def pos(self, position: int) -> None:
        self.seek(position)

    def tell(self) -> int:
        return self._pos

    def read(self) -> Optional[str]:
        """
        Return the name at the current position and advance.

        Returns:
            The name, or None once past the last entry
        """
        names = self.entry.entry_names()
        name = names[self._pos] if self._pos < len(names) else None

        self._pos += 1
        self._max_seek = max(self._max_seek, self._pos)

        return name

    def seek(self, position: int) -> 'DirectoryCursor':
        """Move to ``position`` if it has already been reached; otherwise stay put."""
        if 0 <= position <= self._max_seek:
            self._pos = position
        return self

    def rewind(self) -> 'DirectoryCursor':
        self._pos = 0
        return self

    def children(self) -> List[str]:
        """Entry names without '.' and '..'."""
        return [name for name in self.entry.entry_names() if name not in ('.', '..')]

    def close(self) -> None:
        """
        Close the cursor.

        Raises:
            ClosedResourceError: If the cursor is already closed
        """
        if self._closed:
            raise ClosedResourceError(self._requested_path, resource="directory")
        self._closed = True
