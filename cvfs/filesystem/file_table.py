"""
File Table Module

Open-file entries and the descriptor table that hands them out.

A descriptor is the slot index of its entry. Each installed entry is
stamped with a generation number, and the FileDescriptor handed back to
the caller carries that number, so a handle that outlives its close is
rejected instead of quietly addressing whatever reused the slot.

Author: YSNRFD
Version: 1.0.0
"""

import itertools
from dataclasses import dataclass
from typing import Optional, Iterator, List, Tuple, Union

from .inode import Inode, Permission


class FileDescriptor(int):
    """
    Descriptor handle: an ``int`` (the slot index) tagged with the
    generation of the entry it was issued for.
    """

    generation: int

    def __new__(cls, slot: int, generation: int) -> 'FileDescriptor':
        fd = super().__new__(cls, slot)
        fd.generation = generation
        return fd

    @property
    def slot(self) -> int:
        return int(self)

    def __repr__(self) -> str:
        return f"FileDescriptor({int(self)}, generation={self.generation})"


DescriptorLike = Union[FileDescriptor, int]


@dataclass
class OpenFileEntry:
    """One open instance of a file."""
    inode: Inode
    mode: Permission
    read_offset: int = 0
    write_offset: int = 0
    count: int = 1
    generation: int = 0

    def can_read(self) -> bool:
        return Permission.READ in self.mode

    def can_write(self) -> bool:
        return Permission.WRITE in self.mode

    def reset_offsets(self) -> None:
        self.read_offset = 0
        self.write_offset = 0


class DescriptorTable:
    """
    Fixed-size descriptor table.

    Slots are handed out first-fit. Plain ``int`` descriptors address
    whatever currently occupies the slot; FileDescriptor handles must also
    match the occupant's generation.
    """

    def __init__(self, max_descriptors: int):
        self._slots: List[Optional[OpenFileEntry]] = [None] * max_descriptors
        self._generations = itertools.count(1)

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Tuple[FileDescriptor, OpenFileEntry]]:
        """Iterate over occupied slots in slot order."""
        for slot, entry in enumerate(self._slots):
            if entry is not None:
                yield FileDescriptor(slot, entry.generation), entry

    @property
    def open_count(self) -> int:
        return sum(1 for entry in self._slots if entry is not None)

    def allocate_slot(self) -> Optional[int]:
        """Return the lowest empty slot, or None if the table is full."""
        for slot, entry in enumerate(self._slots):
            if entry is None:
                return slot
        return None

    def install(self, slot: int, entry: OpenFileEntry) -> FileDescriptor:
        """Place ``entry`` in an empty slot and return its handle."""
        if self._slots[slot] is not None:
            raise ValueError(f"Descriptor slot {slot} is occupied")
        entry.generation = next(self._generations)
        self._slots[slot] = entry
        return FileDescriptor(slot, entry.generation)

    def get(self, fd: DescriptorLike) -> Optional[OpenFileEntry]:
        """Resolve a descriptor to its entry, or None if it is not valid."""
        if isinstance(fd, bool) or not isinstance(fd, int):
            return None
        if not 0 <= fd < len(self._slots):
            return None
        entry = self._slots[fd]
        if entry is None:
            return None
        if isinstance(fd, FileDescriptor) and fd.generation != entry.generation:
            return None
        return entry

    def release_slot(self, fd: DescriptorLike) -> None:
        """Empty the slot ``fd`` refers to."""
        self._slots[int(fd)] = None

    def find_by_name(self, name: str) -> Optional[FileDescriptor]:
        """Return the first open descriptor whose file has ``name``."""
        for fd, entry in self:
            if entry.inode.name == name:
                return fd
        return None

    def descriptors_for(self, inode: Inode) -> List[FileDescriptor]:
        """All open descriptors referring to ``inode``."""
        return [fd for fd, entry in self if entry.inode is inode]
