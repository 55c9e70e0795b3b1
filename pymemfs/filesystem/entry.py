"""
Entry Module

Implements the entry record of the in-memory filesystem. Every node of
the tree (directory, regular file, device file or symbolic link) is an
Entry tagged with its EntryKind; the owning FileSystem keeps them in a
table addressed by inode number, and entries refer to each other only
through those numbers.

Author: YSNRFD
Version: 1.0.0
"""

import stat as stat_bits
import time
from enum import Enum, Flag
from typing import Optional, Any, List

from .content import Content


class EntryKind(Enum):
    """Kinds of entries; the value is the ftype string."""
    UNKNOWN = 'unknown'
    FILE = 'file'
    DIRECTORY = 'directory'
    LINK = 'link'
    BLOCK_SPECIAL = 'blockSpecial'
    CHARACTER_SPECIAL = 'characterSpecial'


# Kinds that own a Content buffer
FILE_KINDS = (EntryKind.FILE, EntryKind.BLOCK_SPECIAL, EntryKind.CHARACTER_SPECIAL)

# Format tag OR'd into every mode value
FORMAT_TAGS = {
    EntryKind.UNKNOWN: stat_bits.S_IFREG,
    EntryKind.FILE: stat_bits.S_IFREG,
    EntryKind.DIRECTORY: stat_bits.S_IFDIR,
    EntryKind.LINK: stat_bits.S_IFLNK,
    EntryKind.BLOCK_SPECIAL: stat_bits.S_IFBLK,
    EntryKind.CHARACTER_SPECIAL: stat_bits.S_IFCHR,
}

PERMISSION_MASK = 0o7777


class Permission(Flag):
    """File permission bits."""
    # Owner permissions
    OWNER_READ = 0o400
    OWNER_WRITE = 0o200
    OWNER_EXEC = 0o100

    # Group permissions
    GROUP_READ = 0o040
    GROUP_WRITE = 0o020
    GROUP_EXEC = 0o010

    # Other permissions
    OTHER_READ = 0o004
    OTHER_WRITE = 0o002
    OTHER_EXEC = 0o001

    # Special bits
    STICKY = 0o1000
    SETGID = 0o2000
    SETUID = 0o4000

    # Default permissions (before the umask is applied)
    DEFAULT_FILE = 0o666
    DEFAULT_DIR = 0o777
    DEFAULT_LINK = 0o777


class Entry:
    """
    A node of the in-memory tree.

    Stores metadata about a file, directory or symlink:
    - Kind and permission bits (``mode`` carries both)
    - Owner and group
    - Timestamps
    - Parent inode number (None for the root)
    - Directory table, file content or link target, depending on kind

    A directory's table maps names to inode numbers, always starting
    with '.' (itself) and '..' (its parent, None for the root).
    """

    def __init__(
        self,
        ino: int,
        kind: EntryKind,
        name: str,
        mode: int = 0o644,
        uid: int = 0,
        gid: int = 0,
        target: Optional[str] = None,
        content: Optional[Content] = None
    ):
        self.ino = ino
        self.kind = kind
        self.name = name
        self.uid = uid
        self.gid = gid
        self.parent: Optional[int] = None
        self.mode = mode

        timestamp = time.time()
        self.atime = timestamp
        self.mtime = timestamp
        self.ctime = timestamp
        self.birthtime = timestamp

        self.entries: Optional[dict[str, Optional[int]]] = None
        self.content: Optional[Content] = None
        self.target: Optional[str] = None

        if kind == EntryKind.DIRECTORY:
            self.entries = {'.': ino, '..': None}
        elif kind in FILE_KINDS:
            self.content = content if content is not None else Content()
        elif kind == EntryKind.LINK:
            self.target = target

    def __repr__(self) -> str:
        return f"Entry(ino={self.ino}, kind={self.kind.name}, name={self.name!r})"

    @property
    def mode(self) -> int:
        return self._mode

    @mode.setter
    def mode(self, permissions: int) -> None:
        self._mode = FORMAT_TAGS[self.kind] | (permissions & PERMISSION_MASK)

    @property
    def permissions(self) -> int:
        """Permission bits without the format tag."""
        return self._mode & PERMISSION_MASK

    @property
    def ftype(self) -> str:
        return self.kind.value

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind in FILE_KINDS

    @property
    def is_symlink(self) -> bool:
        return self.kind == EntryKind.LINK

    @property
    def block_device(self) -> bool:
        return self.kind == EntryKind.BLOCK_SPECIAL

    @block_device.setter
    def block_device(self, value: bool) -> None:
        self._set_device_kind(EntryKind.BLOCK_SPECIAL, value)

    @property
    def character_device(self) -> bool:
        return self.kind == EntryKind.CHARACTER_SPECIAL

    @character_device.setter
    def character_device(self, value: bool) -> None:
        self._set_device_kind(EntryKind.CHARACTER_SPECIAL, value)

    def _set_device_kind(self, kind: EntryKind, value: bool) -> None:
        if not self.is_file:
            raise ValueError(f"Only file entries can be device files: {self.name}")
        permissions = self.permissions
        if value:
            self.kind = kind
        elif self.kind == kind:
            self.kind = EntryKind.FILE
        self.mode = permissions

    @property
    def size(self) -> int:
        return self.content.size if self.content is not None else 0

    def has_permission(self, uid: int, gid: int, owner_bit: Permission) -> bool:
        """
        Check a permission for a user.

        The owner class is used if ``uid`` owns the entry, the group
        class if ``gid`` matches, and the other class otherwise.

        Args:
            uid: User ID
            gid: Group ID
            owner_bit: One of OWNER_READ, OWNER_WRITE, OWNER_EXEC

        Returns:
            True if permission is granted
        """
        bit = owner_bit.value

        if uid == self.uid:
            pass
        elif gid == self.gid:
            bit >>= 3
        else:
            bit >>= 6

        return (self._mode & bit) != 0

    def can_read(self, uid: int, gid: int) -> bool:
        return self.has_permission(uid, gid, Permission.OWNER_READ)

    def can_write(self, uid: int, gid: int) -> bool:
        return self.has_permission(uid, gid, Permission.OWNER_WRITE)

    def can_execute(self, uid: int, gid: int) -> bool:
        return self.has_permission(uid, gid, Permission.OWNER_EXEC)

    def touch(self) -> None:
        """Update access and modification times."""
        timestamp = time.time()
        self.atime = timestamp
        self.mtime = timestamp

    def duplicate(self, ino: int, name: str) -> 'Entry':
        """
        Copy this entry's metadata into a new entry.

        A file's Content is shared with the copy rather than copied,
        which is what makes a hard link.
        """
        copy = Entry(
            ino=ino,
            kind=self.kind,
            name=name,
            mode=self.permissions,
            uid=self.uid,
            gid=self.gid,
            target=self.target,
            content=self.content
        )
        copy.atime = self.atime
        copy.mtime = self.mtime
        copy.ctime = self.ctime
        copy.birthtime = self.birthtime
        return copy

    # Directory operations

    def add_entry(self, name: str, ino: int) -> None:
        """Add a directory entry."""
        if not self.is_directory:
            raise ValueError("Not a directory")
        self.entries[name] = ino

    def remove_entry(self, name: str) -> Optional[int]:
        """Remove a directory entry."""
        if not self.is_directory:
            raise ValueError("Not a directory")
        return self.entries.pop(name, None)

    def get_entry(self, name: str) -> Optional[int]:
        """Get the inode number for a directory entry."""
        if not self.is_directory:
            return None
        return self.entries.get(name)

    def entry_names(self) -> List[str]:
        """Names in insertion order, '.' and '..' included."""
        if not self.is_directory:
            return []
        return list(self.entries.keys())

    def is_empty(self) -> bool:
        """True if a directory holds nothing besides '.' and '..'."""
        return all(name in ('.', '..') for name in self.entry_names())

    def to_dict(self) -> dict[str, Any]:
        """Convert entry to dictionary for display."""
        return {
            'ino': self.ino,
            'type': self.ftype,
            'name': self.name,
            'mode': oct(self.mode),
            'uid': self.uid,
            'gid': self.gid,
            'size': self.size,
            'atime': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.atime)),
            'mtime': time.strftime('%Y-%m-%d %H:%M', time.localtime(self.mtime)),
        }
