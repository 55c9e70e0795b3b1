"""
Filesystem Exceptions

Exceptions raised by the in-memory filesystem while resolving paths and
mutating the entry tree. Each one carries the POSIX errno it models so
callers can branch on either the class or the number.

Author: YSNRFD
Version: 1.0.0
"""

import errno as errno_codes
from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        errno: POSIX errno value modelled by the error (if any)
        context: Additional context about the error
    """

    errno: Optional[int] = None

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class EntryNotFoundError(FileSystemException):
    """
    No entry exists at the given path.

    Raised by every strict lookup (``find_or_raise``, directory
    resolution, stat construction) when a path or the end of a symlink
    chain is missing.

    Example:
        >>> raise EntryNotFoundError("/no/such/file")
    """

    errno = errno_codes.ENOENT

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"No such file or directory: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class EntryExistsError(FileSystemException):
    """
    An entry already exists at the target path.

    Example:
        >>> raise EntryExistsError("/tmp")
    """

    errno = errno_codes.EEXIST

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File exists: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class DirectoryNotEmptyError(FileSystemException):
    """
    Directory is not empty.

    Raised by rmdir when the directory holds anything besides
    ``.`` and ``..``.
    """

    errno = errno_codes.ENOTEMPTY

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Directory not empty: {path}",
            path=path,
            error_code=4004,
            context=context
        )


class SymlinkLoopError(FileSystemException):
    """
    Too many levels of symbolic links.

    Raised when dereferencing a symlink chain takes more hops than
    ``filesystem.max_symlink_hops`` allows, which is how cycles such as
    ``a -> b -> a`` surface.
    """

    errno = errno_codes.ELOOP

    def __init__(
        self,
        path: str,
        hops: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if hops is not None:
            ctx["hops"] = hops
        super().__init__(
            message=f"Too many levels of symbolic links: {path}",
            path=path,
            error_code=4006,
            context=ctx
        )
        self.hops = hops


class NotDirectoryError(FileSystemException):
    """
    Path is not a directory.

    Raised when a directory is required (chdir, entries, the parent of
    a new entry) or when a path walks through a non-directory.

    Example:
        >>> raise NotDirectoryError("/etc/passwd")
    """

    errno = errno_codes.ENOTDIR

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Not a directory: {path}",
            path=path,
            error_code=4009,
            context=context
        )


class IsDirectoryError(FileSystemException):
    """
    Path is a directory.

    Raised when a file is required but the path designates a directory:
    opening or truncating it, or renaming a file over it.
    """

    errno = errno_codes.EISDIR

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Is a directory: {path}",
            path=path,
            error_code=4005,
            context=context
        )


class OperationNotPermittedError(FileSystemException):
    """
    Operation not permitted on this kind of entry.

    Raised when an operation does not apply to the entry: unlinking or
    hard-linking a directory, or removing the root.
    """

    errno = errno_codes.EPERM

    def __init__(
        self,
        path: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(
            message=f"Operation not permitted: {path}",
            path=path,
            error_code=4010,
            context=ctx
        )
        self.operation = operation


class InvalidArgumentError(FileSystemException):
    """
    Invalid argument.

    Raised for unknown open modes, negative seek results, negative
    lengths, readlink on a non-symlink and moving a directory inside
    itself.
    """

    errno = errno_codes.EINVAL

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        argument: Any = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if argument is not None:
            ctx["argument"] = argument
        super().__init__(
            message=message,
            path=path,
            error_code=4011,
            context=ctx
        )
        self.argument = argument
