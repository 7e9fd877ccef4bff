"""
CVFS Exception Hierarchy

Architecture:
    FileSystemException
    ├── InvalidArgumentError
    ├── FileExistsError
    ├── FileNotFoundError
    ├── PermissionDeniedError
    ├── NoFreeInodesError
    ├── NoInodeSlotError
    ├── NoDescriptorSlotError
    ├── AllocationFailureError
    ├── EndOfFileError
    ├── FileFullError
    ├── WrongFileTypeError
    ├── OutOfBoundsError
    └── BadDescriptorError
    ConfigException
    ├── ConfigLoadError
    └── ConfigValidationError
"""

from .fs_exceptions import (
    ErrorKind,
    FileSystemException,
    InvalidArgumentError,
    FileExistsError,
    FileNotFoundError,
    PermissionDeniedError,
    NoFreeInodesError,
    NoInodeSlotError,
    NoDescriptorSlotError,
    AllocationFailureError,
    EndOfFileError,
    FileFullError,
    WrongFileTypeError,
    OutOfBoundsError,
    BadDescriptorError,
)

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

__all__ = [
    # Filesystem exceptions
    "ErrorKind",
    "FileSystemException",
    "InvalidArgumentError",
    "FileExistsError",
    "FileNotFoundError",
    "PermissionDeniedError",
    "NoFreeInodesError",
    "NoInodeSlotError",
    "NoDescriptorSlotError",
    "AllocationFailureError",
    "EndOfFileError",
    "FileFullError",
    "WrongFileTypeError",
    "OutOfBoundsError",
    "BadDescriptorError",
    # Configuration exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
]
