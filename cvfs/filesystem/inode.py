"""
Inode Module

Implements the inode abstraction and the fixed-size inode registry.
Every slot is created up front; files take over an unused slot on
create and hand it back when their last link goes away.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Optional, Iterator, List

from cvfs.exceptions import AllocationFailureError
from cvfs.logger import get_logger


class FileType(Enum):
    """Kinds of inode slot."""
    UNUSED = 0
    REGULAR = 1
    SPECIAL = 2


class Permission(IntFlag):
    """File permission and open mode bits."""
    READ = 1
    WRITE = 2
    READ_WRITE = READ | WRITE

    @property
    def label(self) -> str:
        return _PERMISSION_LABELS.get(int(self), str(int(self)))


_PERMISSION_LABELS = {
    1: "Read only",
    2: "Write",
    3: "Read & Write",
}


@dataclass
class Inode:
    """
    Inode - Index Node.

    Holds the identity, metadata and backing storage of one file.
    ``capacity`` is the declared maximum size; ``size`` is the number
    of bytes actually in use.
    """

    ino: int
    name: str = ""
    file_type: FileType = FileType.UNUSED
    capacity: int = 0
    size: int = 0
    nlink: int = 0
    refcount: int = 0
    permission: Permission = Permission.READ_WRITE
    buffer: Optional[bytearray] = field(default=None, repr=False)

    @property
    def is_unused(self) -> bool:
        return self.file_type == FileType.UNUSED

    @property
    def is_regular_file(self) -> bool:
        return self.file_type == FileType.REGULAR

    def can_read(self) -> bool:
        return Permission.READ in self.permission

    def can_write(self) -> bool:
        return Permission.WRITE in self.permission

    def read_at(self, offset: int, size: int) -> bytes:
        """Copy up to ``size`` bytes of used data starting at ``offset``."""
        end = min(offset + size, self.size)
        return bytes(self.buffer[offset:end])

    def write_at(self, offset: int, data: bytes) -> int:
        """
        Store ``data`` at ``offset``, clipped to the declared capacity.

        Returns:
            Number of bytes stored
        """
        count = min(len(data), self.capacity - offset)
        if count <= 0:
            return 0
        self.buffer[offset:offset + count] = data[:count]
        return count

    def clear(self) -> None:
        """Zero the backing buffer and drop all data."""
        if self.buffer is not None:
            self.buffer[:] = bytes(len(self.buffer))
        self.size = 0


class InodeRegistry:
    """
    Fixed-capacity table of inodes.

    Slot ``i`` always holds inode number ``i + 1``. Lookups by number
    index the slot list directly; lookups by name go through a mapping
    of live names to slot indices.

    Example:
        >>> registry = InodeRegistry(50)
        >>> inode = registry.allocate_free_slot()
        >>> registry.activate(inode, 'a.txt', Permission.READ_WRITE, 2048)
        >>> registry.find_by_name('a.txt') is inode
        True
    """

    def __init__(self, max_inodes: int):
        self._slots: List[Inode] = [Inode(ino=i + 1) for i in range(max_inodes)]
        self._by_name: dict[str, int] = {}
        self._logger = get_logger('inode')

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Inode]:
        """Iterate over live inodes in slot order."""
        return (inode for inode in self._slots if not inode.is_unused)

    @property
    def live_count(self) -> int:
        return len(self._by_name)

    def get(self, ino: int) -> Optional[Inode]:
        """Get an inode by number, live or not."""
        if 1 <= ino <= len(self._slots):
            return self._slots[ino - 1]
        return None

    def find_by_name(self, name: str) -> Optional[Inode]:
        """Find the live inode bound to ``name``."""
        index = self._by_name.get(name)
        if index is None:
            return None
        return self._slots[index]

    def allocate_free_slot(self) -> Optional[Inode]:
        """Return the first unused slot, or None if every slot is live."""
        for inode in self._slots:
            if inode.is_unused:
                return inode
        return None

    def activate(
        self,
        inode: Inode,
        name: str,
        permission: Permission,
        capacity: int
    ) -> None:
        """
        Turn an unused slot into a regular file.

        Raises:
            AllocationFailureError: If the backing buffer cannot be allocated
        """
        try:
            buffer = bytearray(capacity)
        except MemoryError:
            raise AllocationFailureError(requested=capacity) from None

        inode.name = name
        inode.file_type = FileType.REGULAR
        inode.capacity = capacity
        inode.size = 0
        inode.nlink = 1
        inode.refcount = 1
        inode.permission = permission
        inode.buffer = buffer
        self._by_name[name] = inode.ino - 1

        self._logger.debug(
            "Inode activated",
            context={'ino': inode.ino, 'name': name, 'capacity': capacity}
        )

    def release(self, inode: Inode) -> None:
        """
        Return a slot to the unused pool.

        The name and inode number stay on the record; the next
        activation overwrites the name.
        """
        if self._by_name.get(inode.name) == inode.ino - 1:
            del self._by_name[inode.name]
        inode.file_type = FileType.UNUSED
        inode.buffer = None
        inode.size = 0
        inode.nlink = 0
        inode.refcount = 0

        self._logger.debug("Inode released", context={'ino': inode.ino})
