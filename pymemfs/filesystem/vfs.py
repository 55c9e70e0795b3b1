"""
Virtual File System (VFS) Module

Implements the in-memory filesystem coordinator:
- Entry table addressed by inode number, rooted at '/'
- Path resolution, with and without symlink dereferencing
- Directory, file, link and symlink creation and removal
- Ownership and permission changes
- Working directory management, persistent or scoped
- Recursive path listing and glob matching

Author: YSNRFD
Version: 1.0.0
"""

import itertools
import time
from contextlib import contextmanager
from typing import Optional, Any, List, Callable, Iterable, Iterator, Union

from .entry import Entry, EntryKind, Permission
from .identity import Identity
from .path_resolver import PathResolver, GlobFlag
from pymemfs.core.config_loader import FilesystemConfig, get_config
from pymemfs.exceptions import (
    FileSystemException,
    EntryNotFoundError,
    EntryExistsError,
    NotDirectoryError,
    IsDirectoryError,
    DirectoryNotEmptyError,
    OperationNotPermittedError,
    InvalidArgumentError,
    SymlinkLoopError,
)
from pymemfs.logger import get_logger


class FileSystem:
    """
    In-memory filesystem.

    Owns every entry of the tree and the current working directory.
    Paths are '/'-separated strings; absolute paths are resolved from
    the root and relative ones from the working directory.

    Example:
        >>> fs = FileSystem()
        >>> fs.mkdir('/home')
        >>> fs.touch('/home/notes.txt')
        >>> fs.entries('/home')
        ['.', '..', 'notes.txt']
    """

    _device_numbers = itertools.count(1)

    def __init__(
        self,
        identity: Optional[Identity] = None,
        config: Optional[FilesystemConfig] = None
    ):
        self._config = config or get_config().filesystem
        self.identity = identity or Identity.current()
        self._logger = get_logger('filesystem')

        if self._config.device is not None:
            self.device = self._config.device
        else:
            self.device = next(FileSystem._device_numbers)

        self._umask = self._config.umask
        self._entries: dict[int, Entry] = {}
        self._next_ino = 1
        self._root_ino = 1
        self._cwd: Optional[Entry] = None
        self._resolution_depth = 0

        self.clear()

    def clear(self) -> None:
        """Drop every entry and start over with '/' and the temp directory."""
        self._entries = {}
        self._next_ino = 1

        root = self._new_entry(
            EntryKind.DIRECTORY, '/', Permission.DEFAULT_DIR.value & ~self._umask
        )
        self._root_ino = root.ino
        self._cwd = root

        tmp_dir = self._config.tmp_dir
        if tmp_dir and PathResolver.normalize(tmp_dir) != '/':
            current = ''
            for component in PathResolver.parse(PathResolver.normalize(tmp_dir)).components:
                current = f"{current}/{component}"
                if self.find(current) is None:
                    self.mkdir(current)
            self.chmod(0o1777, current)

        self.chdir('/')
        self._logger.info("Filesystem cleared", context={'device': self.device})

    @property
    def config(self) -> FilesystemConfig:
        return self._config

    @property
    def block_size(self) -> int:
        return self._config.block_size

    @property
    def root(self) -> Entry:
        return self._entries[self._root_ino]

    @property
    def working_directory(self) -> Entry:
        """
        The current directory.

        Held by reference, so it stays usable after being removed from
        the tree by rmdir or rename.
        """
        return self._cwd

    def _generate_ino(self) -> int:
        ino = self._next_ino
        self._next_ino += 1
        return ino

    def _new_entry(self, kind: EntryKind, name: str, mode: int, target: Optional[str] = None) -> Entry:
        entry = Entry(
            ino=self._generate_ino(),
            kind=kind,
            name=name,
            mode=mode,
            uid=self.identity.euid,
            gid=self.identity.egid,
            target=target
        )
        self._entries[entry.ino] = entry
        return entry

    def get_entry(self, ino: Optional[int]) -> Optional[Entry]:
        """Look up an entry by inode number."""
        if ino is None:
            return None
        return self._entries.get(ino)

    def parent_of(self, entry: Entry) -> Optional[Entry]:
        return self.get_entry(entry.parent)

    def path_of(self, entry: Entry) -> str:
        """Absolute path of an entry, rebuilt from its parent chain."""
        if entry.ino == self._root_ino:
            return '/'

        names: List[str] = []
        current: Optional[Entry] = entry
        while current is not None and current.ino != self._root_ino:
            names.append(current.name)
            current = self.parent_of(current)

        return '/' + '/'.join(reversed(names))

    def _attach(self, directory: Entry, entry: Entry) -> None:
        directory.add_entry(entry.name, entry.ino)
        entry.parent = directory.ino
        if entry.is_directory:
            entry.entries['..'] = directory.ino

    def _detach(self, entry: Entry) -> None:
        parent = self.parent_of(entry)
        if parent is not None and parent.get_entry(entry.name) == entry.ino:
            parent.remove_entry(entry.name)

    def _discard(self, entry: Entry) -> None:
        """Remove an entry and, for directories, everything below it from the table."""
        # The parent id is kept so a removed entry still has a path
        if entry.is_directory:
            for name, ino in list(entry.entries.items()):
                child = self.get_entry(ino)
                if name not in ('.', '..') and child is not None:
                    self._discard(child)
        self._entries.pop(entry.ino, None)

    # Path resolution

    def find(self, path: str) -> Optional[Entry]:
        """
        Find the entry at a path without dereferencing it.

        Args:
            path: Absolute path, or path relative to the working directory

        Returns:
            The entry, or None if nothing exists there

        Raises:
            NotDirectoryError: If the path walks through a regular file
        """
        if not path:
            return None
        if PathResolver.is_absolute(path):
            return self._find_in(self.root, path)
        return self._find_in(self.working_directory, path)

    def find_or_raise(self, path: str) -> Entry:
        """Like :meth:`find`, but raise EntryNotFoundError instead of returning None."""
        entry = self.find(path)
        if entry is None:
            raise EntryNotFoundError(path)
        return entry

    def find_directory(self, path: str) -> Entry:
        """
        Find the directory at a path, following symlinks.

        Raises:
            EntryNotFoundError: If the path or its symlink chain is dangling
            NotDirectoryError: If the path does not designate a directory
        """
        entry = self.dereference(self.find_or_raise(path))

        if not entry.is_directory:
            raise NotDirectoryError(path)

        return entry

    def find_parent(self, path: str) -> Entry:
        """Find the directory that holds (or would hold) ``path``."""
        return self.find_directory(PathResolver.dirname(path))

    def _find_in(self, entry: Entry, path: str) -> Optional[Entry]:
        if entry.kind == EntryKind.DIRECTORY:
            return self._find_in_directory(entry, path)
        if entry.kind == EntryKind.LINK:
            return self._find_through_link(entry, path)
        raise NotDirectoryError(self.path_of(entry))

    def _find_in_directory(self, directory: Entry, path: str) -> Optional[Entry]:
        path = path.strip('/')
        if not path:
            return directory

        if path in directory.entries:
            ino = directory.entries[path]
            return directory if ino == directory.ino else self.get_entry(ino)

        head, _, tail = path.partition('/')
        if head in directory.entries:
            child = self.get_entry(directory.entries[head])
            if child is None:
                return None
            return self._find_in(child, tail)

        return None

    def _find_through_link(self, link: Entry, path: str) -> Optional[Entry]:
        # A dangling link makes the lookup fail softly
        try:
            target = self.dereference(link)
        except EntryNotFoundError:
            return None
        return self._find_in(target, path)

    def dereference(self, entry: Entry) -> Entry:
        """
        Follow a symlink chain to the entry it designates.

        Relative targets are resolved from the directory holding the
        link. Non-links are returned unchanged.

        Raises:
            EntryNotFoundError: If the end of the chain does not exist
            SymlinkLoopError: If the chain (or a lookup nested inside it)
                takes more than ``max_symlink_hops`` steps
        """
        hops = 0
        limit = self._config.max_symlink_hops

        while entry.kind == EntryKind.LINK:
            hops += 1
            if hops + self._resolution_depth > limit:
                raise SymlinkLoopError(self.path_of(entry), hops=hops)

            self._resolution_depth += 1
            try:
                entry = self._resolve_target(entry)
            finally:
                self._resolution_depth -= 1

        return entry

    def _resolve_target(self, link: Entry) -> Entry:
        target = link.target
        if PathResolver.is_absolute(target):
            found = self._find_in(self.root, target)
        else:
            parent = self.parent_of(link) or self.working_directory
            found = self._find_in(parent, target) if target else None

        if found is None:
            raise EntryNotFoundError(target)
        return found

    # Queries

    def exists(self, path: str) -> bool:
        try:
            return self.find(path) is not None
        except FileSystemException:
            return False

    def _query(self, path: str, predicate: Callable[[Entry], bool], follow: bool = True) -> bool:
        try:
            entry = self.find(path)
            if entry is None:
                return False
            return predicate(self.dereference(entry) if follow else entry)
        except FileSystemException:
            return False

    def is_directory(self, path: str) -> bool:
        """True if the path designates a directory (symlinks followed)."""
        return self._query(path, lambda entry: entry.is_directory)

    def is_file(self, path: str) -> bool:
        """True if the path designates a file (symlinks followed)."""
        return self._query(path, lambda entry: entry.is_file)

    def is_symlink(self, path: str) -> bool:
        """True if the path itself is a symlink."""
        return self._query(path, lambda entry: entry.is_symlink, follow=False)

    def is_empty_directory(self, path: str) -> bool:
        return self._query(path, lambda entry: entry.is_directory and entry.is_empty())

    def identical(self, path1: str, path2: str) -> bool:
        """
        True if both paths designate the same file.

        Hard links count as the same file since they share content.
        """
        try:
            first = self.dereference(self.find_or_raise(path1))
            second = self.dereference(self.find_or_raise(path2))
        except EntryNotFoundError:
            return False

        if first is second:
            return True
        return first.content is not None and first.content is second.content

    def getwd(self) -> str:
        """Path of the current working directory."""
        return self.path_of(self.working_directory)

    pwd = getwd

    def entries(self, path: str) -> List[str]:
        """Names in the directory at ``path``, including '.' and '..'."""
        return self.find_directory(path).entry_names()

    def children(self, path: str) -> List[str]:
        """Names in the directory at ``path``, without '.' and '..'."""
        return [name for name in self.entries(path) if name not in ('.', '..')]

    def paths(self) -> List[str]:
        """Every path in the tree, depth first, parents before children."""
        return list(self._walk_paths(self.root))

    def _walk_paths(self, entry: Entry) -> Iterator[str]:
        yield self.path_of(entry)
        if not entry.is_directory:
            return
        for name, ino in entry.entries.items():
            if name in ('.', '..'):
                continue
            child = self.get_entry(ino)
            if child is not None:
                yield from self._walk_paths(child)

    def glob(self, patterns: Union[str, Iterable[str]], flags: int = 0) -> List[str]:
        """
        Paths matching any of the glob patterns.

        Patterns use pathname semantics ('*' stays inside one directory,
        '**/' spans directories) and '{a,b}' alternation. Relative
        patterns are anchored at the working directory.

        Args:
            patterns: One pattern or several
            flags: Extra GlobFlag values (DOTMATCH, CASEFOLD, NOESCAPE)

        Returns:
            Matching absolute paths in tree order
        """
        if isinstance(patterns, str):
            patterns = [patterns]

        cwd = self.getwd()
        anchored = [
            pattern if PathResolver.is_absolute(pattern) else PathResolver.join(cwd, pattern)
            for pattern in patterns
        ]

        flags = int(flags) | GlobFlag.PATHNAME | GlobFlag.EXTGLOB
        matches = PathResolver.glob_filter(anchored, self.paths(), flags)

        if '/' not in anchored:
            matches = [path for path in matches if path != '/']

        return matches

    def readlink(self, path: str) -> str:
        """Target of the symlink at ``path``."""
        entry = self.find_or_raise(path)

        if not entry.is_symlink:
            raise InvalidArgumentError(f"Not a symbolic link: {path}", path=path)

        return entry.target

    def realpath(self, path: str) -> str:
        """Absolute path of the entry ``path`` designates, all symlinks resolved."""
        return self.path_of(self.dereference(self.find_or_raise(path)))

    def realdirpath(self, path: str) -> str:
        """Like :meth:`realpath`, but the last component need not exist."""
        directory = self.realpath(PathResolver.dirname(path))
        fallback = PathResolver.join(directory, PathResolver.basename(path))

        entry = self.find(path)
        if entry is None:
            return fallback

        try:
            return self.path_of(self.dereference(entry))
        except EntryNotFoundError:
            return fallback

    def size(self, path: str) -> int:
        return self.dereference(self.find_or_raise(path)).size

    def umask(self, mask: Optional[int] = None) -> int:
        """
        Get or set the mask applied to new entries' permissions.

        Returns:
            The mask in effect before the call
        """
        previous = self._umask
        if mask is not None:
            self._umask = mask & 0o777
        return previous

    def stat(self, path: str) -> 'Stat':
        """Metadata of the entry ``path`` designates (symlinks followed)."""
        from .filestat import Stat
        return Stat(self, path, dereference=True)

    def lstat(self, path: str) -> 'Stat':
        """Metadata of the entry at ``path`` itself."""
        from .filestat import Stat
        return Stat(self, path)

    # Mutations

    def mkdir(self, path: str, mode: int = 0o777) -> Entry:
        """
        Create a directory.

        Args:
            path: Path for the new directory
            mode: Permission bits, before the umask is applied

        Returns:
            The new directory entry

        Raises:
            EntryExistsError: If something already exists at ``path``
            EntryNotFoundError: If the parent directory does not exist
            NotDirectoryError: If the parent is not a directory
        """
        if self.find(path) is not None:
            raise EntryExistsError(path)

        parent = self.find_parent(path)
        directory = self._new_entry(
            EntryKind.DIRECTORY, PathResolver.basename(path), mode & ~self._umask
        )
        self._attach(parent, directory)

        self._logger.debug(
            "Created directory",
            context={'path': path, 'ino': directory.ino, 'mode': oct(directory.mode)}
        )

        return directory

    def touch(self, *paths: str) -> None:
        """
        Create empty files, or refresh the timestamps of existing entries.

        An existing entry is never replaced.
        """
        for path in paths:
            entry = self.find(path)

            if entry is None:
                parent = self.find_parent(path)
                entry = self._new_entry(
                    EntryKind.FILE,
                    PathResolver.basename(path),
                    Permission.DEFAULT_FILE.value & ~self._umask
                )
                self._attach(parent, entry)
                self._logger.debug("Created file", context={'path': path, 'ino': entry.ino})

            entry.touch()

    def chmod(self, mode: Optional[int], path: str) -> None:
        """
        Change the permission bits of the entry at ``path``.

        Symlinks are not followed. None or -1 leaves the mode unchanged.
        """
        entry = self.find_or_raise(path)
        if mode is None or mode == -1:
            return
        entry.mode = mode
        self._changed(entry)

        self._logger.debug("Changed mode", context={'path': path, 'mode': oct(entry.mode)})

    lchmod = chmod

    def chown(self, uid: Optional[int], gid: Optional[int], path: str) -> None:
        """
        Change the owner and group of the entry ``path`` designates.

        Symlinks are followed. None or -1 leaves the field unchanged.
        """
        entry = self.dereference(self.find_or_raise(path))
        self._apply_owner(entry, uid, gid, path)

    def lchown(self, uid: Optional[int], gid: Optional[int], path: str) -> None:
        """Like :meth:`chown`, but change a symlink itself."""
        self._apply_owner(self.find_or_raise(path), uid, gid, path)

    def _apply_owner(self, entry: Entry, uid: Optional[int], gid: Optional[int], path: str) -> None:
        if uid is not None and uid != -1:
            entry.uid = uid
        if gid is not None and gid != -1:
            entry.gid = gid
        self._changed(entry)

        self._logger.debug(
            "Changed owner",
            context={'path': path, 'uid': entry.uid, 'gid': entry.gid}
        )

    @staticmethod
    def _changed(entry: Entry) -> None:
        entry.ctime = time.time()

    def utime(self, atime: float, mtime: float, *paths: str) -> int:
        """Set access and modification times; returns the number of paths."""
        for path in paths:
            entry = self.dereference(self.find_or_raise(path))
            entry.atime = atime
            entry.mtime = mtime
        return len(paths)

    def truncate(self, path: str, length: int) -> None:
        """Truncate the file ``path`` designates to ``length`` characters."""
        entry = self.dereference(self.find_or_raise(path))

        if entry.is_directory:
            raise IsDirectoryError(path)
        if not entry.is_file:
            raise OperationNotPermittedError(path, operation="truncate")

        entry.content.truncate(length)
        entry.mtime = entry.ctime = time.time()
        self._logger.debug("Truncated file", context={'path': path, 'length': length})

    def link(self, old_path: str, new_path: str) -> Entry:
        """
        Create a hard link.

        The new entry copies the metadata of the one at ``old_path`` and
        shares its content; later metadata changes stay independent.

        Raises:
            EntryNotFoundError: If ``old_path`` does not exist
            EntryExistsError: If ``new_path`` already exists
            OperationNotPermittedError: If ``old_path`` is a directory
        """
        entry = self.find_or_raise(old_path)

        if self.find(new_path) is not None:
            raise EntryExistsError(new_path, context={'source': old_path})

        if entry.is_directory:
            raise OperationNotPermittedError(old_path, operation="link")

        parent = self.find_parent(new_path)
        link = entry.duplicate(self._generate_ino(), PathResolver.basename(new_path))
        self._entries[link.ino] = link
        self._attach(parent, link)

        self._logger.debug(
            "Created hard link",
            context={'path': new_path, 'source': old_path, 'ino': link.ino}
        )

        return link

    def symlink(self, old_path: str, new_path: str) -> Entry:
        """
        Create a symbolic link at ``new_path`` pointing to ``old_path``.

        The target does not need to exist.
        """
        if self.find(new_path) is not None:
            raise EntryExistsError(new_path)

        parent = self.find_parent(new_path)
        link = self._new_entry(
            EntryKind.LINK,
            PathResolver.basename(new_path),
            Permission.DEFAULT_LINK.value,
            target=old_path
        )
        self._attach(parent, link)

        self._logger.debug("Created symlink", context={'path': new_path, 'target': old_path})

        return link

    def unlink(self, path: str) -> None:
        """
        Remove a file or symlink.

        Raises:
            EntryNotFoundError: If nothing exists at ``path``
            OperationNotPermittedError: If ``path`` is a directory
        """
        entry = self.find_or_raise(path)

        if entry.is_directory:
            raise OperationNotPermittedError(path, operation="unlink")

        self._detach(entry)
        self._discard(entry)

        self._logger.debug("Deleted file", context={'path': path})

    def rmdir(self, path: str) -> None:
        """
        Remove an empty directory.

        Raises:
            EntryNotFoundError: If nothing exists at ``path``
            NotDirectoryError: If ``path`` is not a directory
            DirectoryNotEmptyError: If the directory has children
            OperationNotPermittedError: If ``path`` is the root
        """
        directory = self.find_or_raise(path)

        if not directory.is_directory:
            raise NotDirectoryError(path)

        if directory.ino == self._root_ino:
            raise OperationNotPermittedError(path, operation="rmdir")

        if not directory.is_empty():
            raise DirectoryNotEmptyError(path)

        self._detach(directory)
        self._discard(directory)

        self._logger.debug("Removed directory", context={'path': path})

    def rename(self, old_path: str, new_path: str) -> None:
        """
        Move the entry at ``old_path`` to ``new_path``.

        An existing file at ``new_path`` is replaced by a non-directory,
        and an empty directory there is replaced by a directory.

        Raises:
            EntryNotFoundError: If ``old_path`` or the new parent is missing
            DirectoryNotEmptyError: If ``new_path`` is a non-empty directory
            IsDirectoryError: If a non-directory would replace a directory
            NotDirectoryError: If a directory would replace a non-directory
            InvalidArgumentError: If a directory would move inside itself
        """
        entry = self.find_or_raise(old_path)
        parent = self.find_parent(new_path)
        name = PathResolver.basename(new_path)

        if name in ('.', '..', '/', ''):
            raise InvalidArgumentError(f"Invalid rename target: {new_path}", path=new_path)

        ancestor: Optional[Entry] = parent
        while ancestor is not None:
            if ancestor.ino == entry.ino:
                raise InvalidArgumentError(
                    f"Cannot move a directory inside itself: {old_path}",
                    path=new_path
                )
            ancestor = self.parent_of(ancestor)

        existing = self.get_entry(parent.get_entry(name))
        if existing is entry:
            return

        if existing is not None:
            if existing.is_directory and not entry.is_directory:
                raise IsDirectoryError(new_path)
            if entry.is_directory and not existing.is_directory:
                raise NotDirectoryError(new_path)
            if existing.is_directory and not existing.is_empty():
                raise DirectoryNotEmptyError(new_path)
            self._detach(existing)
            self._discard(existing)

        self._detach(entry)
        entry.name = name
        self._attach(parent, entry)

        self._logger.debug("Renamed entry", context={'path': old_path, 'target': new_path})

    def chdir(self, path: str, callback: Optional[Callable[[], Any]] = None) -> Any:
        """
        Change the working directory.

        Without a callback the change persists. With one, the working
        directory is changed only while the callback runs and restored
        afterwards, even if it raises.

        Returns:
            The callback's result, or None
        """
        if callback is not None:
            with self.working_directory_at(path):
                return callback()

        destination = self.find_directory(path)
        self._cwd = destination
        self._logger.debug("Changed directory", context={'path': path})
        return None

    @contextmanager
    def working_directory_at(self, path: str) -> Iterator[Entry]:
        """
        Scoped working directory change.

        Example:
            >>> with fs.working_directory_at('/tmp'):
            ...     fs.touch('scratch')
        """
        destination = self.find_directory(path)
        previous = self._cwd
        self._cwd = destination
        try:
            yield destination
        finally:
            self._cwd = previous

    # I/O

    def open(self, path: str, mode: Union[str, int] = 'r') -> 'FileHandle':
        """Open the file at ``path``; see :class:`FileHandle` for modes."""
        from .handle import FileHandle
        return FileHandle(self, path, mode)

    def opendir(self, path: str) -> 'DirectoryCursor':
        """Open a cursor over the names in the directory at ``path``."""
        from .cursor import DirectoryCursor
        return DirectoryCursor(self, path)

    def read_file(self, path: str, length: Optional[int] = None, offset: int = 0) -> Optional[str]:
        """Read a file's content, optionally a slice of it."""
        with self.open(path) as handle:
            handle.seek(offset)
            return handle.read(length)

    def write_file(self, path: str, data: Any, mode: str = 'w') -> int:
        """Write ``data`` to a file, creating it if needed."""
        with self.open(path, mode) as handle:
            return handle.write(data)

    def get_stats(self) -> dict[str, Any]:
        """Get filesystem statistics."""
        kinds: dict[str, int] = {}
        for entry in self._entries.values():
            kinds[entry.ftype] = kinds.get(entry.ftype, 0) + 1
        return {
            'device': self.device,
            'total_entries': len(self._entries),
            'entries_by_type': kinds,
            'working_directory': self.getwd(),
        }
