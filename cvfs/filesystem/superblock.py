"""
Superblock Module

Aggregate inode accounting.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass


@dataclass
class SuperBlock:
    """
    Total and free inode counters.

    The superblock does not look at the registry; keeping the two in
    step is up to the caller.
    """

    total_inodes: int
    free_inodes: int

    @classmethod
    def for_capacity(cls, total: int) -> 'SuperBlock':
        return cls(total_inodes=total, free_inodes=total)

    def try_reserve(self) -> bool:
        """Take one free inode. Returns False if none are left."""
        if self.free_inodes == 0:
            return False
        self.free_inodes -= 1
        return True

    def restore(self) -> None:
        """Give one inode back."""
        self.free_inodes += 1

    @property
    def used_inodes(self) -> int:
        return self.total_inodes - self.free_inodes
