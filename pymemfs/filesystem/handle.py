"""
File Handle Module

Open-file objects for the in-memory filesystem:
- Mode strings ('r', 'w+', 'ab', ...) and numeric os.O_* flags
- Capability checks on read and write
- Seeking relative to the start, the cursor or the end
- Line iteration and context manager support

Author: YSNRFD
Version: 1.0.0
"""

import os
import re
from typing import Optional, Any, List, Iterator, Union, TYPE_CHECKING

from .entry import Entry
from pymemfs.exceptions import (
    IOCapabilityError,
    ClosedResourceError,
    InvalidArgumentError,
    IsDirectoryError,
    OperationNotPermittedError,
)

if TYPE_CHECKING:
    from .filestat import Stat
    from .vfs import FileSystem


RDONLY = os.O_RDONLY
WRONLY = os.O_WRONLY
RDWR = os.O_RDWR
CREAT = os.O_CREAT
TRUNC = os.O_TRUNC
APPEND = os.O_APPEND
ACCESS_MODE_MASK = RDONLY | WRONLY | RDWR

SEEK_SET = os.SEEK_SET
SEEK_CUR = os.SEEK_CUR
SEEK_END = os.SEEK_END

MODE_MAP = {
    'r': RDONLY,
    'r+': RDWR,
    'w': CREAT | TRUNC | WRONLY,
    'w+': CREAT | TRUNC | RDWR,
    'a': CREAT | APPEND | WRONLY,
    'a+': CREAT | APPEND | RDWR,
}

_MODE_PATTERN = re.compile(r'\A([rwa]\+?)([bt])?\Z')

ENCODING = 'utf-8'


def parse_mode(mode: Union[str, int]) -> tuple[int, bool]:
    """
    Translate an open mode into os.O_* flags.

    Args:
        mode: Mode string such as 'r', 'w+' or 'ab', or numeric flags

    Returns:
        Tuple of (flags, binary)

    Raises:
        InvalidArgumentError: If the mode string is not recognized
    """
    if isinstance(mode, int):
        return mode, False

    match = _MODE_PATTERN.match(mode)
    if match is None:
        raise InvalidArgumentError(f"invalid access mode {mode}", argument=mode)

    return MODE_MAP[match.group(1)], match.group(2) == 'b'


class FileHandle:
    """
    An open file.

    The read cursor belongs to the file's content, so handles opened on
    the same file (or on hard links to it) share it. Opening resets it
    to the start. Writes always append.

    Example:
        >>> with fs.open('/tmp/log', 'a') as handle:
        ...     handle.puts('started')
    """

    def __init__(self, fs: 'FileSystem', path: str, mode: Union[str, int] = 'r'):
        self._fs = fs
        self.path = path
        self._closed = False
        self._flags, self.binary = parse_mode(mode)

        if self._flags & CREAT:
            fs.touch(path)

        self._entry: Entry = fs.dereference(fs.find_or_raise(path))

        if self._entry.is_directory:
            raise IsDirectoryError(path)
        if not self._entry.is_file:
            raise OperationNotPermittedError(path, operation="open")

        self._entry.content.pos = 0

        if self._flags & TRUNC:
            self._entry.content.clear()

    def __repr__(self) -> str:
        return f"FileHandle(path={self.path!r}, flags={self._flags:#o}, closed={self._closed})"

    def __enter__(self) -> 'FileHandle':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[Union[str, bytes]]:
        self._check_readable()
        while True:
            line = self._entry.content.readline()
            if not line:
                return
            yield self._encode(line)

    @property
    def flags(self) -> int:
        return self._flags

    @property
    def readable(self) -> bool:
        return (self._flags & ACCESS_MODE_MASK) in (RDONLY, RDWR)

    @property
    def writable(self) -> bool:
        return bool(self._flags & (WRONLY | RDWR))

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ClosedResourceError(self.path)

    def _check_readable(self) -> None:
        self._check_open()
        if not self.readable:
            raise IOCapabilityError(self.path, operation="reading")

    def _check_writable(self) -> None:
        self._check_open()
        if not self.writable:
            raise IOCapabilityError(self.path, operation="writing")

    def _encode(self, text: Optional[str]) -> Optional[Union[str, bytes]]:
        if text is None or not self.binary:
            return text
        return text.encode(ENCODING)

    def _decode(self, data: Any) -> Any:
        if isinstance(data, (bytes, bytearray)):
            return bytes(data).decode(ENCODING)
        return data

    def read(self, length: Optional[int] = None) -> Optional[Union[str, bytes]]:
        """
        Read from the cursor.

        Args:
            length: Maximum number of characters, or None for the rest

        Returns:
            The data read. At the end of the file, an empty string when
            no length was given and None when one was.
        """
        self._check_readable()
        return self._encode(self._entry.content.read(length))

    def readline(self) -> Union[str, bytes]:
        self._check_readable()
        return self._encode(self._entry.content.readline())

    def readlines(self) -> List[Union[str, bytes]]:
        return list(self)

    def write(self, data: Any) -> int:
        """
        Append data to the file.

        Returns:
            Number of characters (bytes for bytes input) written
        """
        self._check_writable()
        written = self._entry.content.write(self._decode(data))
        self._entry.touch()

        if isinstance(data, (bytes, bytearray)):
            return len(data)
        return written

    def __lshift__(self, data: Any) -> 'FileHandle':
        self.write(data)
        return self

    def puts(self, *lines: Any) -> None:
        """Write each line followed by a newline, unless it already ends with one."""
        self._check_writable()
        self._entry.content.puts(*(self._decode(line) for line in lines))
        self._entry.touch()

    def seek(self, amount: int, whence: int = SEEK_SET) -> int:
        """
        Move the cursor.

        Args:
            amount: Offset in characters
            whence: SEEK_SET, SEEK_CUR or SEEK_END

        Returns:
            0

        Raises:
            InvalidArgumentError: On an unknown whence or a negative result
        """
        self._check_open()
        content = self._entry.content

        if whence == SEEK_SET:
            position = amount
        elif whence == SEEK_CUR:
            position = content.pos + amount
        elif whence == SEEK_END:
            position = content.size + amount
        else:
            raise InvalidArgumentError(f"invalid whence {whence}", path=self.path, argument=whence)

        if position < 0:
            raise InvalidArgumentError(
                f"invalid seek position {position}", path=self.path, argument=amount
            )

        content.pos = position
        return 0

    def tell(self) -> int:
        return self._entry.content.pos

    @property
    def pos(self) -> int:
        return self._entry.content.pos

    @pos.setter
    def pos(self, position: int) -> None:
        self.seek(position)

    def rewind(self) -> int:
        return self.seek(0)

    def truncate(self, length: int) -> None:
        self._check_writable()
        self._entry.content.truncate(length)
        self._entry.touch()

    def flush(self) -> None:
        self._check_open()

    def close(self) -> None:
        """Close the handle; closing twice is harmless."""
        self._closed = True

    @property
    def size(self) -> int:
        return self._entry.size

    def stat(self) -> 'Stat':
        return self._fs.stat(self.path)

    def lstat(self) -> 'Stat':
        return self._fs.lstat(self.path)

    def chmod(self, mode: int) -> int:
        self._fs.chmod(mode, self.path)
        return 0

    def chown(self, uid: Optional[int], gid: Optional[int] = None) -> int:
        self._fs.chown(uid, gid, self.path)
        return 0

    @property
    def atime(self) -> float:
        return self._entry.atime

    @property
    def mtime(self) -> float:
        return self._entry.mtime

    @property
    def ctime(self) -> float:
        return self._entry.ctime

    @property
    def birthtime(self) -> float:
        return self._entry.birthtime
