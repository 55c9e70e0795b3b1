"""
File Status Module

Read-only view of an entry's metadata, the in-memory counterpart of
``os.stat_result`` with predicate helpers on top.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, TYPE_CHECKING

from .entry import Entry, EntryKind, Permission

if TYPE_CHECKING:
    from .vfs import FileSystem


class Stat:
    """
    Metadata of one entry.

    Attributes are read through to the entry, so a Stat reflects later
    changes made to it.

    Args:
        fs: Filesystem holding the entry
        path: Path to look up
        dereference: Follow symlinks to the entry they designate

    Raises:
        EntryNotFoundError: If ``path`` does not exist, or it is a
            dangling symlink and ``dereference`` is set
    """

    def __init__(self, fs: 'FileSystem', path: str, dereference: bool = False):
        self._fs = fs
        self.path = path

        entry = fs.find_or_raise(path)
        self.entry: Entry = fs.dereference(entry) if dereference else entry

    def __repr__(self) -> str:
        return (
            f"Stat(path={self.path!r}, ftype={self.ftype!r}, "
            f"mode={oct(self.mode)}, size={self.size})"
        )

    @property
    def mode(self) -> int:
        return self.entry.mode

    @property
    def uid(self) -> int:
        return self.entry.uid

    @property
    def gid(self) -> int:
        return self.entry.gid

    @property
    def atime(self) -> float:
        return self.entry.atime

    @property
    def mtime(self) -> float:
        return self.entry.mtime

    @property
    def ctime(self) -> float:
        return self.entry.ctime

    @property
    def birthtime(self) -> float:
        return self.entry.birthtime

    @property
    def dev(self) -> int:
        return self._fs.device

    @property
    def ino(self) -> int:
        return self.entry.ino

    @property
    def blksize(self) -> int:
        return self._fs.block_size

    @property
    def size(self) -> int:
        return self.entry.size

    @property
    def ftype(self) -> str:
        return self.entry.ftype

    # os.stat_result-style names
    st_mode = mode
    st_ino = ino
    st_dev = dev
    st_uid = uid
    st_gid = gid
    st_size = size
    st_atime = atime
    st_mtime = mtime
    st_ctime = ctime
    st_blksize = blksize

    # Type predicates

    @property
    def is_directory(self) -> bool:
        return self.entry.kind == EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.entry.is_file

    @property
    def is_symlink(self) -> bool:
        return self.entry.kind == EntryKind.LINK

    @property
    def is_blockdev(self) -> bool:
        return self.entry.kind == EntryKind.BLOCK_SPECIAL

    @property
    def is_chardev(self) -> bool:
        return self.entry.kind == EntryKind.CHARACTER_SPECIAL

    @property
    def is_pipe(self) -> bool:
        return False

    @property
    def is_socket(self) -> bool:
        return False

    # Mode bit predicates

    @property
    def is_sticky(self) -> bool:
        return bool(self.mode & Permission.STICKY.value)

    @property
    def is_setuid(self) -> bool:
        return bool(self.mode & Permission.SETUID.value)

    @property
    def is_setgid(self) -> bool:
        return bool(self.mode & Permission.SETGID.value)

    @property
    def is_zero(self) -> bool:
        return self.size == 0

    # Ownership and access

    @property
    def is_owned(self) -> bool:
        """True if the effective user owns the entry."""
        return self.entry.uid == self._fs.identity.euid

    @property
    def is_grpowned(self) -> bool:
        """True if the effective group owns the entry."""
        return self.entry.gid == self._fs.identity.egid

    @property
    def is_readable(self) -> bool:
        identity = self._fs.identity
        return self.entry.can_read(identity.euid, identity.egid)

    @property
    def is_readable_real(self) -> bool:
        identity = self._fs.identity
        return self.entry.can_read(identity.uid, identity.gid)

    @property
    def is_writable(self) -> bool:
        identity = self._fs.identity
        return self.entry.can_write(identity.euid, identity.egid)

    @property
    def is_writable_real(self) -> bool:
        identity = self._fs.identity
        return self.entry.can_write(identity.uid, identity.gid)

    @property
    def is_executable(self) -> bool:
        identity = self._fs.identity
        return self.entry.can_execute(identity.euid, identity.egid)

    @property
    def is_executable_real(self) -> bool:
        identity = self._fs.identity
        return self.entry.can_execute(identity.uid, identity.gid)

    @property
    def world_readable(self) -> Optional[int]:
        """Permission bits if others may read the entry, else None."""
        if self.mode & Permission.OTHER_READ.value:
            return self.mode & 0o777
        return None

    @property
    def world_writable(self) -> Optional[int]:
        """Permission bits if others may write the entry, else None."""
        if self.mode & Permission.OTHER_WRITE.value:
            return self.mode & 0o777
        return None
