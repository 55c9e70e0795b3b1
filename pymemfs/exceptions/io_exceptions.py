"""
I/O Exceptions

Exceptions raised by open handles: file handles used beyond the
capabilities of their opening mode, and directory cursors used after
being closed.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class IOException(Exception):
    """
    Base exception for handle-level I/O errors.

    Attributes:
        message: Human-readable error description
        path: Path the handle was opened on
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

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
        self.error_code = error_code or 5000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({context_str})"
        return base


class IOCapabilityError(IOException):
    """
    The handle was not opened for the requested operation.

    Example:
        >>> raise IOCapabilityError("/tmp/log", operation="writing")
    """

    def __init__(
        self,
        path: Optional[str] = None,
        operation: str = "reading",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(
            message=f"not opened for {operation}",
            path=path,
            error_code=5001,
            context=ctx
        )
        self.operation = operation


class ClosedResourceError(IOException):
    """
    The handle or cursor has already been closed.

    Example:
        >>> raise ClosedResourceError("/tmp", resource="directory")
    """

    def __init__(
        self,
        path: Optional[str] = None,
        resource: str = "stream",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(
            message=f"closed {resource}",
            path=path,
            error_code=5002,
            context=ctx
        )
        self.resource = resource
