"""
Filesystem Exceptions

Exceptions raised by the file operations engine. Every rejected request
maps to exactly one error kind; none of them is fatal to the process.

Author: YSNRFD
Version: 1.0.0
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(Enum):
    """Kinds of file system failure."""
    INVALID_ARGUMENT = "InvalidArgument"
    ALREADY_EXISTS = "AlreadyExists"
    NOT_FOUND = "NotFound"
    PERMISSION_DENIED = "PermissionDenied"
    NO_FREE_INODES = "NoFreeInodes"
    NO_INODE_SLOT = "NoInodeSlot"
    NO_DESCRIPTOR_SLOT = "NoDescriptorSlot"
    ALLOCATION_FAILURE = "AllocationFailure"
    END_OF_FILE = "EndOfFile"
    FILE_FULL = "FileFull"
    WRONG_FILE_TYPE = "WrongFileType"
    OUT_OF_BOUNDS = "OutOfBounds"
    BAD_DESCRIPTOR = "BadDescriptor"


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        name: File name associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.name = name
        self.error_code = error_code or 4000
        self.context = context or {}
        if name:
            self.context["name"] = name

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.name:
            base = f"{base} (name={self.name})"
        return base


class InvalidArgumentError(FileSystemException):
    """
    A request parameter is missing or out of range.

    Example:
        >>> raise InvalidArgumentError("permission must be 1, 2 or 3")
    """

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(
        self,
        message: str = "Incorrect parameters",
        argument: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if argument:
            ctx["argument"] = argument
        super().__init__(
            message=message,
            error_code=4001,
            context=ctx
        )
        self.argument = argument


class FileExistsError(FileSystemException):
    """
    A live file already has the requested name.

    Example:
        >>> raise FileExistsError("a.txt")
    """

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(
        self,
        name: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File already exists: {name}",
            name=name,
            error_code=4002,
            context=context
        )


class FileNotFoundError(FileSystemException):
    """
    No file (or no open descriptor, for descriptor-resolved operations)
    matches the given name.

    Example:
        >>> raise FileNotFoundError("a.txt")
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        name: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"There is no such file: {name}",
            name=name,
            error_code=4003,
            context=context
        )


class PermissionDeniedError(FileSystemException):
    """
    The file permission or the descriptor mode does not allow the operation.

    Example:
        >>> raise PermissionDeniedError("a.txt", operation="write")
    """

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(
        self,
        name: str,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(
            message=f"Permission denied: {name}",
            name=name,
            error_code=4004,
            context=ctx
        )
        self.operation = operation


class NoFreeInodesError(FileSystemException):
    """The superblock reports no free inodes."""

    kind = ErrorKind.NO_FREE_INODES

    def __init__(
        self,
        total: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if total is not None:
            ctx["total_inodes"] = total
        super().__init__(
            message="There are no inodes",
            error_code=4005,
            context=ctx
        )


class NoInodeSlotError(FileSystemException):
    """
    The superblock granted a reservation but the registry scan found no
    unused slot. Only reachable if the two accounts disagree.
    """

    kind = ErrorKind.NO_INODE_SLOT

    def __init__(self, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message="No unused inode slot in registry",
            error_code=4006,
            context=context
        )


class NoDescriptorSlotError(FileSystemException):
    """All descriptor slots are occupied."""

    kind = ErrorKind.NO_DESCRIPTOR_SLOT

    def __init__(
        self,
        limit: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if limit is not None:
            ctx["limit"] = limit
        super().__init__(
            message="No free file descriptor",
            error_code=4007,
            context=ctx
        )


class AllocationFailureError(FileSystemException):
    """Backing storage for a file could not be allocated."""

    kind = ErrorKind.ALLOCATION_FAILURE

    def __init__(
        self,
        requested: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if requested is not None:
            ctx["requested"] = requested
        super().__init__(
            message="Memory allocation failure",
            error_code=4008,
            context=ctx
        )
        self.requested = requested


class EndOfFileError(FileSystemException):
    """The read offset already sits at the end of the data."""

    kind = ErrorKind.END_OF_FILE

    def __init__(
        self,
        name: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message="Reached end of file",
            name=name,
            error_code=4009,
            context=context
        )


class FileFullError(FileSystemException):
    """The write offset already sits at the declared capacity."""

    kind = ErrorKind.FILE_FULL

    def __init__(
        self,
        name: Optional[str] = None,
        capacity: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if capacity is not None:
            ctx["capacity"] = capacity
        super().__init__(
            message="There is no sufficient memory to write",
            name=name,
            error_code=4010,
            context=ctx
        )
        self.capacity = capacity


class WrongFileTypeError(FileSystemException):
    """
    The file is not a regular file.

    Example:
        >>> raise WrongFileTypeError("dev0", actual_type="SPECIAL")
    """

    kind = ErrorKind.WRONG_FILE_TYPE

    def __init__(
        self,
        name: Optional[str] = None,
        actual_type: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if actual_type:
            ctx["actual_type"] = actual_type
        super().__init__(
            message="It is not a regular file",
            name=name,
            error_code=4011,
            context=ctx
        )
        self.actual_type = actual_type


class OutOfBoundsError(FileSystemException):
    """A seek would move an offset outside the permitted range."""

    kind = ErrorKind.OUT_OF_BOUNDS

    def __init__(
        self,
        offset: int,
        limit: int,
        name: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["offset"] = offset
        ctx["limit"] = limit
        super().__init__(
            message=f"Offset {offset} outside [0, {limit}]",
            name=name,
            error_code=4012,
            context=ctx
        )
        self.offset = offset
        self.limit = limit


class BadDescriptorError(FileSystemException):
    """
    The descriptor does not refer to an open file.

    Raised for empty slots, out-of-range numbers and descriptors whose
    open-file entry has since been closed and the slot reissued.
    """

    kind = ErrorKind.BAD_DESCRIPTOR

    def __init__(
        self,
        fd: Any,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["fd"] = fd
        super().__init__(
            message=f"Bad file descriptor: {fd}",
            error_code=4013,
            context=ctx
        )
        self.fd = fd
