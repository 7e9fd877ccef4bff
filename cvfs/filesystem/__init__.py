"""
CVFS File System Module

- Inode registry and superblock accounting
- Open-file entries and descriptor table
- File operations engine
"""

from .inode import Inode, InodeRegistry, FileType, Permission
from .superblock import SuperBlock
from .file_table import FileDescriptor, OpenFileEntry, DescriptorTable
from .vfs import FileSystem, FileStat, SeekAnchor

__all__ = [
    # Inode
    'Inode',
    'InodeRegistry',
    'FileType',
    'Permission',
    # Superblock
    'SuperBlock',
    # File table
    'FileDescriptor',
    'OpenFileEntry',
    'DescriptorTable',
    # VFS
    'FileSystem',
    'FileStat',
    'SeekAnchor',
]
