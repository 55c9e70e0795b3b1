"""
Content Module

The character buffer backing regular files. A Content is not tied to
a single entry: hard links share one instance, so writes through one
name are visible through the other.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Any, Iterator, Optional

from pymemfs.exceptions import InvalidArgumentError


LINE_SEPARATOR = '\n'


class Content:
    """
    Append-on-write character buffer with a read cursor.

    Writes always go to the end regardless of the cursor; reads start
    at the cursor and advance it.

    Example:
        >>> content = Content()
        >>> content.write('hello')
        5
        >>> content.read(2)
        'he'
    """

    def __init__(self, initial: Any = ''):
        self._data = str(initial)
        self.pos = 0

    def __str__(self) -> str:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Content({self._data!r}, pos={self.pos})"

    @property
    def size(self) -> int:
        return len(self._data)

    def write(self, data: Any) -> int:
        """
        Append data to the end of the buffer.

        Args:
            data: Text to append; other objects are converted with str()

        Returns:
            Number of characters written
        """
        text = data if isinstance(data, str) else str(data)
        self._data += text
        return len(text)

    def __lshift__(self, data: Any) -> 'Content':
        self.write(data)
        return self

    def puts(self, *lines: Any) -> None:
        """Append each line, adding a line separator unless it already ends with one."""
        for line in lines:
            text = line if isinstance(line, str) else str(line)
            self._data += text
            if not text.endswith(LINE_SEPARATOR):
                self._data += LINE_SEPARATOR

    def read(self, length: Optional[int] = None) -> Optional[str]:
        """
        Read from the cursor and advance it.

        Args:
            length: Maximum number of characters, or None for the rest

        Returns:
            The characters read. At the end of the buffer, ``''`` when no
            length was given and None when one was.
        """
        if length is not None and length < 0:
            raise InvalidArgumentError(f"negative length {length} given", argument=length)

        if length is None:
            chunk = self._data[self.pos:]
        else:
            chunk = self._data[self.pos:self.pos + length]

        self.pos += len(chunk)

        if length is not None and not chunk and self.pos >= len(self._data):
            return None
        return chunk

    def readline(self, separator: str = LINE_SEPARATOR) -> str:
        """Read up to and including the next separator; ``''`` at the end."""
        end = self._data.find(separator, self.pos)
        if end == -1:
            end = len(self._data)
        else:
            end += len(separator)

        chunk = self._data[self.pos:end]
        self.pos = max(self.pos, end)
        return chunk

    def truncate(self, length: int) -> None:
        """Discard everything beyond the first ``length`` characters."""
        if length < 0:
            raise InvalidArgumentError(f"negative length {length} given", argument=length)

        self._data = self._data[:length]
        self.pos = min(self.pos, len(self._data))

    def clear(self) -> None:
        self._data = ''
        self.pos = 0

    def lines(self, separator: str = LINE_SEPARATOR) -> Iterator[str]:
        """Iterate over lines, each keeping its trailing separator."""
        start = 0
        while start < len(self._data):
            end = self._data.find(separator, start)
            if end == -1:
                yield self._data[start:]
                return
            end += len(separator)
            yield self._data[start:end]
            start = end
