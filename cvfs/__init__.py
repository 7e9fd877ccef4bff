"""
CVFS - Customized Virtual File System

An in-memory, Unix-like file system: a fixed inode table, an open-file
table and a descriptor table behind create/open/read/write/seek/stat/
truncate/unlink/close operations.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .filesystem.inode import FileType, Permission
from .filesystem.file_table import FileDescriptor
from .filesystem.vfs import FileSystem, FileStat, SeekAnchor
from .shell.shell import Shell, create_shell

__all__ = [
    'FileSystem',
    'FileStat',
    'FileDescriptor',
    'FileType',
    'Permission',
    'SeekAnchor',
    'Shell',
    'create_shell',
]
