"""
Virtual File System (VFS) Module

The file operations engine. Ties together:
- The inode registry (what a file is)
- The superblock (how many inodes are free)
- The descriptor table (how the caller is using a file)

All state belongs to a FileSystem instance; separate instances share
nothing.

Author: YSNRFD
Version: 1.0.0
"""

import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Any, List

from .inode import Inode, InodeRegistry, FileType, Permission
from .superblock import SuperBlock
from .file_table import DescriptorTable, DescriptorLike, FileDescriptor, OpenFileEntry
from cvfs.core.registry import Subsystem, SubsystemState
from cvfs.core.config_loader import get_config
from cvfs.exceptions import (
    FileSystemException,
    InvalidArgumentError,
    FileExistsError,
    FileNotFoundError,
    PermissionDeniedError,
    NoFreeInodesError,
    NoInodeSlotError,
    NoDescriptorSlotError,
    EndOfFileError,
    FileFullError,
    WrongFileTypeError,
    OutOfBoundsError,
    BadDescriptorError,
)


class SeekAnchor(IntEnum):
    """Reference point for seek."""
    START = 0
    CURRENT = 1
    END = 2


@dataclass(frozen=True)
class FileStat:
    """Read-only snapshot of inode metadata."""
    name: str
    ino: int
    size: int
    nlink: int
    refcount: int
    permission: Permission
    file_type: FileType

    @classmethod
    def from_inode(cls, inode: Inode) -> 'FileStat':
        return cls(
            name=inode.name,
            ino=inode.ino,
            size=inode.size,
            nlink=inode.nlink,
            refcount=inode.refcount,
            permission=inode.permission,
            file_type=inode.file_type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'ino': self.ino,
            'size': self.size,
            'nlink': self.nlink,
            'refcount': self.refcount,
            'permission': self.permission.label,
            'type': self.file_type.name,
        }


def _valid_access(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 3


class FileSystem(Subsystem):
    """
    In-memory file system with a fixed number of inodes and descriptors.

    Every inode slot exists from construction. ``create`` claims one and
    opens it; ``unlink`` gives it back. Each public operation either
    completes or raises a FileSystemException, leaving the tables
    consistent.

    Example:
        >>> fs = FileSystem()
        >>> fd = fs.create('a.txt', Permission.READ_WRITE)
        >>> fs.write(fd, b'hello')
        5
        >>> fs.seek(fd, 0, SeekAnchor.START)
        0
        >>> fs.read(fd, 10)
        b'hello'
    """

    def __init__(
        self,
        max_inodes: Optional[int] = None,
        max_descriptors: Optional[int] = None,
        max_file_size: Optional[int] = None,
        max_name_length: Optional[int] = None
    ):
        super().__init__('vfs')
        config = get_config().filesystem
        self._max_inodes = max_inodes or config.max_inodes
        self._max_descriptors = max_descriptors or config.max_descriptors
        self._max_file_size = max_file_size or config.max_file_size
        self._max_name_length = max_name_length or config.max_name_length
        self._lock = threading.RLock()
        self._build_tables()

    def _build_tables(self) -> None:
        self._inodes = InodeRegistry(self._max_inodes)
        self._superblock = SuperBlock.for_capacity(self._max_inodes)
        self._descriptors = DescriptorTable(self._max_descriptors)

    # Lifecycle

    def initialize(self) -> None:
        """Start from an empty file system."""
        with self._lock:
            self._build_tables()
        self.set_state(SubsystemState.INITIALIZED)
        self._logger.info(
            "File system initialized",
            context={
                'inodes': self._max_inodes,
                'descriptors': self._max_descriptors,
                'max_file_size': self._max_file_size,
            }
        )

    def cleanup(self) -> None:
        """Close every open descriptor."""
        self.close_all()

    # Properties

    @property
    def superblock(self) -> SuperBlock:
        return self._superblock

    @property
    def inodes(self) -> InodeRegistry:
        return self._inodes

    @property
    def descriptors(self) -> DescriptorTable:
        return self._descriptors

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    # Internal helpers

    def _check_name(self, name: Any) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError("File name must be a non-empty string", argument="name")

    def _check_new_name(self, name: Any) -> None:
        self._check_name(name)
        if len(name) > self._max_name_length:
            raise InvalidArgumentError(
                f"File name longer than {self._max_name_length} characters",
                argument="name"
            )

    def _entry(self, fd: DescriptorLike) -> OpenFileEntry:
        entry = self._descriptors.get(fd)
        if entry is None:
            self._logger.debug("Bad descriptor", context={'fd': fd})
            raise BadDescriptorError(fd)
        return entry

    def _open_descriptor(self, name: str) -> FileDescriptor:
        fd = self._descriptors.find_by_name(name)
        if fd is None:
            self._logger.debug("No open descriptor", context={'name': name})
            raise FileNotFoundError(name)
        return fd

    def _install(self, inode: Inode, mode: Permission) -> FileDescriptor:
        slot = self._descriptors.allocate_slot()
        if slot is None:
            raise NoDescriptorSlotError(limit=self._max_descriptors)
        return self._descriptors.install(slot, OpenFileEntry(inode=inode, mode=mode))

    def _drop(self, fd: FileDescriptor, entry: OpenFileEntry) -> None:
        entry.reset_offsets()
        entry.count -= 1
        if entry.inode.refcount > 0:
            entry.inode.refcount -= 1
        self._descriptors.release_slot(fd)

    # Operations

    def create(self, name: str, permission: int) -> FileDescriptor:
        """
        Create a regular file and open it.

        The superblock reservation is taken before the duplicate-name check,
        so a full system reports NoFreeInodesError even for an existing name.
        Any failure after the reservation gives it back.

        Args:
            name: File name
            permission: 1 (read), 2 (write) or 3 (read and write)

        Returns:
            Descriptor of the new file, opened with mode == permission

        Raises:
            InvalidArgumentError, NoFreeInodesError, FileExistsError,
            NoInodeSlotError, NoDescriptorSlotError, AllocationFailureError
        """
        with self._lock:
            self._check_new_name(name)
            if not _valid_access(permission):
                raise InvalidArgumentError("Permission must be 1, 2 or 3", argument="permission")
            permission = Permission(permission)

            if not self._superblock.try_reserve():
                raise NoFreeInodesError(total=self._superblock.total_inodes)

            try:
                if self._inodes.find_by_name(name) is not None:
                    raise FileExistsError(name)

                inode = self._inodes.allocate_free_slot()
                if inode is None:
                    raise NoInodeSlotError()

                slot = self._descriptors.allocate_slot()
                if slot is None:
                    raise NoDescriptorSlotError(limit=self._max_descriptors)

                self._inodes.activate(inode, name, permission, self._max_file_size)
            except FileSystemException as e:
                self._superblock.restore()
                self._logger.debug(
                    "Create rejected",
                    context={'name': name, 'error': e.kind.value}
                )
                raise

            fd = self._descriptors.install(slot, OpenFileEntry(inode=inode, mode=permission))

        self._logger.debug(
            "Created file",
            context={'name': name, 'ino': inode.ino, 'fd': int(fd), 'permission': int(permission)}
        )
        return fd

    def open(self, name: str, mode: int) -> FileDescriptor:
        """
        Open an existing file.

        Every open gets its own entry with offsets at zero. Mode bits the
        file permission lacks, including bits above READ_WRITE, are a
        permission failure.

        Raises:
            InvalidArgumentError, FileNotFoundError, PermissionDeniedError,
            NoDescriptorSlotError
        """
        with self._lock:
            self._check_name(name)
            if isinstance(mode, bool) or not isinstance(mode, int) or mode < 1:
                raise InvalidArgumentError("Mode must be a positive integer", argument="mode")

            inode = self._inodes.find_by_name(name)
            if inode is None:
                raise FileNotFoundError(name)

            if (int(inode.permission) & mode) != mode:
                raise PermissionDeniedError(name, operation="open")

            fd = self._install(inode, Permission(mode))
            inode.refcount += 1

        self._logger.debug(
            "Opened file",
            context={'name': name, 'fd': int(fd), 'mode': int(mode), 'refcount': inode.refcount}
        )
        return fd

    def read(self, fd: DescriptorLike, max_bytes: int) -> bytes:
        """
        Read up to ``max_bytes`` from the read offset.

        A short read is a success. EndOfFileError is raised only when the
        read offset already sits at the end of the data.
        """
        with self._lock:
            if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes < 0:
                raise InvalidArgumentError("Read size must be a non-negative integer", argument="max_bytes")

            entry = self._entry(fd)
            inode = entry.inode

            if not entry.can_read():
                raise PermissionDeniedError(inode.name, operation="read")
            if not inode.can_read():
                raise PermissionDeniedError(inode.name, operation="read")

            if max_bytes == 0:
                return b""

            if entry.read_offset >= inode.size:
                raise EndOfFileError(inode.name)

            if not inode.is_regular_file:
                raise WrongFileTypeError(inode.name, actual_type=inode.file_type.name)

            data = inode.read_at(entry.read_offset, max_bytes)
            entry.read_offset += len(data)
            return data

    def write(self, fd: DescriptorLike, data: bytes) -> int:
        """
        Write ``data`` at the write offset.

        Data that would run past the declared capacity is dropped. The
        actual size grows to the new write offset if it was smaller.

        Returns:
            Number of bytes written
        """
        with self._lock:
            if not isinstance(data, (bytes, bytearray, memoryview)):
                raise InvalidArgumentError("Data must be bytes", argument="data")

            entry = self._entry(fd)
            inode = entry.inode

            if not entry.can_write():
                raise PermissionDeniedError(inode.name, operation="write")
            if not inode.can_write():
                raise PermissionDeniedError(inode.name, operation="write")

            if entry.write_offset == inode.capacity:
                raise FileFullError(inode.name, capacity=inode.capacity)

            if not inode.is_regular_file:
                raise WrongFileTypeError(inode.name, actual_type=inode.file_type.name)

            written = inode.write_at(entry.write_offset, bytes(data))
            entry.write_offset += written
            inode.size = max(inode.size, entry.write_offset)

        self._logger.debug(
            "Wrote data",
            context={'name': inode.name, 'requested': len(data), 'written': written}
        )
        return written

    def seek(self, fd: DescriptorLike, delta: int, anchor: int = SeekAnchor.START) -> int:
        """
        Move an offset of an open file.

        READ and READ_WRITE descriptors move their read offset, which must
        stay within [0, size]. WRITE descriptors move their write offset,
        which must stay within [0, capacity]; moving it past the current
        size extends the file.

        Returns:
            The new offset
        """
        with self._lock:
            if isinstance(delta, bool) or not isinstance(delta, int):
                raise InvalidArgumentError("Seek distance must be an integer", argument="delta")
            try:
                anchor = SeekAnchor(anchor)
            except ValueError:
                raise InvalidArgumentError("Anchor must be 0, 1 or 2", argument="anchor") from None

            entry = self._entry(fd)
            inode = entry.inode
            moves_read = entry.can_read()

            if anchor == SeekAnchor.START:
                target = delta
            elif anchor == SeekAnchor.CURRENT:
                target = (entry.read_offset if moves_read else entry.write_offset) + delta
            else:
                target = inode.size + delta

            limit = inode.size if moves_read else inode.capacity
            if target < 0 or target > limit:
                raise OutOfBoundsError(target, limit, name=inode.name)

            if moves_read:
                entry.read_offset = target
            else:
                entry.write_offset = target
                if target > inode.size:
                    inode.size = target

        return target

    def close(self, fd: DescriptorLike) -> None:
        """
        Close a descriptor.

        The inode stays alive; only its reference count drops.
        """
        with self._lock:
            entry = self._entry(fd)
            self._drop(FileDescriptor(int(fd), entry.generation), entry)

        self._logger.debug(
            "Closed descriptor",
            context={'fd': int(fd), 'name': entry.inode.name, 'refcount': entry.inode.refcount}
        )

    def close_by_name(self, name: str) -> None:
        """Close the first open descriptor of ``name``."""
        with self._lock:
            self._check_name(name)
            self.close(self._open_descriptor(name))

    def close_all(self) -> None:
        """Close every open descriptor."""
        with self._lock:
            for fd, entry in list(self._descriptors):
                self._drop(fd, entry)

        self._logger.debug("Closed all descriptors")

    def unlink(self, name: str) -> None:
        """
        Remove a file name.

        Only files with an open descriptor can be removed. When the link
        count reaches zero the inode is released and every descriptor still
        pointing at it is closed.
        """
        with self._lock:
            self._check_name(name)
            fd = self._open_descriptor(name)
            entry = self._descriptors.get(fd)
            inode = entry.inode

            inode.nlink -= 1
            self._drop(fd, entry)

            if inode.nlink <= 0:
                for other in self._descriptors.descriptors_for(inode):
                    self._descriptors.release_slot(other)
                self._inodes.release(inode)
                self._superblock.restore()

        self._logger.debug(
            "Unlinked file",
            context={'name': name, 'ino': inode.ino, 'nlink': inode.nlink}
        )

    def truncate(self, name: str) -> None:
        """Drop all data of an open file and rewind the descriptor."""
        with self._lock:
            self._check_name(name)
            fd = self._open_descriptor(name)
            entry = self._descriptors.get(fd)
            entry.inode.clear()
            entry.reset_offsets()

        self._logger.debug("Truncated file", context={'name': name, 'fd': int(fd)})

    def stat(self, name: str) -> FileStat:
        """Metadata of a file by name."""
        with self._lock:
            self._check_name(name)
            inode = self._inodes.find_by_name(name)
            if inode is None:
                raise FileNotFoundError(name)
            return FileStat.from_inode(inode)

    def fstat(self, fd: DescriptorLike) -> FileStat:
        """Metadata of a file by descriptor."""
        with self._lock:
            return FileStat.from_inode(self._entry(fd).inode)

    def list_files(self) -> List[FileStat]:
        """Metadata of every live file in inode order. Empty when there are none."""
        with self._lock:
            return [FileStat.from_inode(inode) for inode in self._inodes]

    def descriptor_for(self, name: str) -> FileDescriptor:
        """The first open descriptor of ``name``."""
        with self._lock:
            self._check_name(name)
            return self._open_descriptor(name)

    def get_stats(self) -> dict[str, Any]:
        """Get filesystem statistics."""
        with self._lock:
            return {
                'total_inodes': self._superblock.total_inodes,
                'free_inodes': self._superblock.free_inodes,
                'live_files': self._inodes.live_count,
                'open_descriptors': self._descriptors.open_count,
                'max_descriptors': self._max_descriptors,
                'max_file_size': self._max_file_size,
            }
