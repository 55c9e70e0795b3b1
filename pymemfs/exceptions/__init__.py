"""
pymemfs Exception Hierarchy

All errors raised by the in-memory filesystem. Tree and path errors
derive from FileSystemException; errors raised by open handles derive
from IOException.

Architecture:
    FileSystemException (Base)
    ├── EntryNotFoundError          (ENOENT)
    ├── EntryExistsError            (EEXIST)
    ├── NotDirectoryError           (ENOTDIR)
    ├── IsDirectoryError            (EISDIR)
    ├── DirectoryNotEmptyError      (ENOTEMPTY)
    ├── OperationNotPermittedError  (EPERM)
    ├── InvalidArgumentError        (EINVAL)
    └── SymlinkLoopError            (ELOOP)
    IOException (Base)
    ├── IOCapabilityError
    └── ClosedResourceError
    ConfigException (Base)
    ├── ConfigLoadError
    └── ConfigValidationError
"""

from .fs_exceptions import (
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

from .io_exceptions import (
    IOException,
    IOCapabilityError,
    ClosedResourceError,
)

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

__all__ = [
    # Filesystem exceptions
    "FileSystemException",
    "EntryNotFoundError",
    "EntryExistsError",
    "NotDirectoryError",
    "IsDirectoryError",
    "DirectoryNotEmptyError",
    "OperationNotPermittedError",
    "InvalidArgumentError",
    "SymlinkLoopError",
    # I/O exceptions
    "IOException",
    "IOCapabilityError",
    "ClosedResourceError",
    # Configuration exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
]
