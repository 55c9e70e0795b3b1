"""
pymemfs Filesystem Module

Provides the in-memory filesystem implementation:
- Entry tree addressed by inode number
- POSIX-like permissions and ownership
- Symbolic and hard links
- File handles, directory cursors and stat records
- Glob matching over the whole tree
"""

from .content import Content
from .entry import Entry, EntryKind, Permission, FILE_KINDS
from .identity import Identity
from .path_resolver import PathResolver, ParsedPath, GlobFlag
from .vfs import FileSystem
from .filestat import Stat
from .cursor import DirectoryCursor
from .handle import FileHandle, MODE_MAP, SEEK_SET, SEEK_CUR, SEEK_END

__all__ = [
    # Entries
    'Content',
    'Entry',
    'EntryKind',
    'Permission',
    'FILE_KINDS',
    'Identity',
    # Path Resolver
    'PathResolver',
    'ParsedPath',
    'GlobFlag',
    # Filesystem
    'FileSystem',
    'Stat',
    'DirectoryCursor',
    'FileHandle',
    'MODE_MAP',
    'SEEK_SET',
    'SEEK_CUR',
    'SEEK_END',
]
