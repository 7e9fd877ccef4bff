#!/usr/bin/env python3
"""
CVFS File System Tests

Tests for the file operations engine, the inode registry and the
descriptor table.

Run with: python -m pytest cvfs/tests -v

Author: YSNRFD
Version: 1.0.0
"""

import sys
import unittest
from unittest import mock

from cvfs.exceptions import (
    ErrorKind,
    AllocationFailureError,
    BadDescriptorError,
    EndOfFileError,
    FileExistsError,
    FileFullError,
    FileNotFoundError,
    InvalidArgumentError,
    NoDescriptorSlotError,
    NoFreeInodesError,
    NoInodeSlotError,
    OutOfBoundsError,
    PermissionDeniedError,
    WrongFileTypeError,
)
from cvfs.filesystem.inode import FileType, InodeRegistry, Permission
from cvfs.filesystem.file_table import FileDescriptor
from cvfs.filesystem.vfs import FileSystem, SeekAnchor


READ = 1
WRITE = 2
READ_WRITE = 3


class TestCreate(unittest.TestCase):
    """Test file creation."""

    def setUp(self):
        self.fs = FileSystem()

    def test_create_initial_state(self):
        """A new file is empty, linked once and referenced once."""
        fd = self.fs.create('a.txt', READ_WRITE)

        self.assertEqual(fd, 0)
        st = self.fs.fstat(fd)
        self.assertEqual(st.name, 'a.txt')
        self.assertEqual(st.ino, 1)
        self.assertEqual(st.size, 0)
        self.assertEqual(st.nlink, 1)
        self.assertEqual(st.refcount, 1)
        self.assertEqual(st.permission, Permission.READ_WRITE)
        self.assertEqual(st.file_type, FileType.REGULAR)

        inode = self.fs.inodes.find_by_name('a.txt')
        self.assertEqual(inode.capacity, 2048)
        self.assertEqual(len(inode.buffer), 2048)
        self.assertEqual(self.fs.superblock.free_inodes, 49)

    def test_create_descriptor_mode_matches_permission(self):
        """The descriptor returned by create is opened with the permission as mode."""
        fd = self.fs.create('r.txt', READ)

        entry = self.fs.descriptors.get(fd)
        self.assertEqual(entry.mode, Permission.READ)
        self.assertEqual(entry.read_offset, 0)
        self.assertEqual(entry.write_offset, 0)

    def test_create_invalid_arguments(self):
        """Empty names, long names and bad permissions are rejected."""
        for name, perm in [('', 3), (None, 3), ('a', 0), ('a', 4), ('a', -1), ('x' * 51, 3)]:
            with self.assertRaises(InvalidArgumentError):
                self.fs.create(name, perm)

        self.assertEqual(self.fs.superblock.free_inodes, 50)

    def test_create_duplicate_name(self):
        """A duplicate name fails and the reservation is given back."""
        self.fs.create('a.txt', READ_WRITE)

        with self.assertRaises(FileExistsError) as ctx:
            self.fs.create('a.txt', READ)

        self.assertEqual(ctx.exception.kind, ErrorKind.ALREADY_EXISTS)
        self.assertEqual(self.fs.superblock.free_inodes, 49)
        self.assertEqual(self.fs.descriptors.open_count, 1)

    def test_free_count_matches_unused_slots(self):
        """Free inode count equals unused registry slots after mixed operations."""
        self.fs.create('a', READ_WRITE)
        self.fs.create('b', READ_WRITE)
        with self.assertRaises(FileExistsError):
            self.fs.create('a', READ_WRITE)
        self.fs.unlink('a')

        unused = sum(1 for i in range(1, 51) if self.fs.inodes.get(i).is_unused)
        self.assertEqual(self.fs.superblock.free_inodes, unused)

    def test_fifty_files_exhaust_inodes(self):
        """The 51st create fails on the inode reservation first."""
        for i in range(50):
            fd = self.fs.create(f'f{i}', READ_WRITE)
            self.assertEqual(fd, i)

        self.assertEqual(self.fs.superblock.free_inodes, 0)
        self.assertEqual(self.fs.descriptors.open_count, 50)

        with self.assertRaises(NoFreeInodesError):
            self.fs.create('extra', READ_WRITE)

        # The reservation is taken before the duplicate check
        with self.assertRaises(NoFreeInodesError):
            self.fs.create('f0', READ_WRITE)

    def test_descriptor_limit_binds_before_inodes(self):
        """With descriptors exhausted, create fails and keeps inode accounting."""
        self.fs.create('a', READ_WRITE)
        for _ in range(49):
            self.fs.open('a', READ)

        with self.assertRaises(NoDescriptorSlotError):
            self.fs.create('b', READ_WRITE)

        self.assertEqual(self.fs.superblock.free_inodes, 49)
        with self.assertRaises(FileNotFoundError):
            self.fs.stat('b')
        with self.assertRaises(NoDescriptorSlotError):
            self.fs.open('a', READ)

    def test_no_inode_slot_when_accounting_diverges(self):
        """A reservation without an unused slot reports NoInodeSlot."""
        fs = FileSystem(max_inodes=2)
        fs.create('a', READ_WRITE)
        fs.create('b', READ_WRITE)
        fs.superblock.restore()

        with self.assertRaises(NoInodeSlotError):
            fs.create('c', READ_WRITE)

        self.assertEqual(fs.superblock.free_inodes, 1)

    def test_allocation_failure_restores_reservation(self):
        """A failed buffer allocation leaves no trace."""
        with mock.patch.object(
            InodeRegistry, 'activate',
            side_effect=AllocationFailureError(requested=2048)
        ):
            with self.assertRaises(AllocationFailureError):
                self.fs.create('a', READ_WRITE)

        self.assertEqual(self.fs.superblock.free_inodes, 50)
        self.assertEqual(self.fs.descriptors.open_count, 0)
        self.assertEqual(self.fs.list_files(), [])

    def test_buffer_memory_error_maps_to_allocation_failure(self):
        """MemoryError from the buffer allocation becomes AllocationFailureError."""
        registry = InodeRegistry(1)
        inode = registry.allocate_free_slot()

        with mock.patch('cvfs.filesystem.inode.bytearray', side_effect=MemoryError, create=True):
            with self.assertRaises(AllocationFailureError):
                registry.activate(inode, 'a', Permission.READ_WRITE, 2048)

        self.assertTrue(inode.is_unused)
        self.assertIsNone(registry.find_by_name('a'))


class TestOpen(unittest.TestCase):
    """Test opening files."""

    def setUp(self):
        self.fs = FileSystem()

    def test_open_permission_checks(self):
        """Modes must be a subset of the file permission."""
        self.fs.create('ro', READ)
        self.fs.create('rw', READ_WRITE)

        with self.assertRaises(PermissionDeniedError):
            self.fs.open('ro', WRITE)
        with self.assertRaises(PermissionDeniedError):
            self.fs.open('ro', READ_WRITE)

        fd = self.fs.open('rw', READ_WRITE)
        self.assertEqual(self.fs.fstat(fd).refcount, 2)

    def test_open_missing_and_invalid(self):
        """Unknown names and bad modes are rejected."""
        with self.assertRaises(FileNotFoundError):
            self.fs.open('missing', READ)

        self.fs.create('a', READ_WRITE)
        for mode in (0, -1, 'r', True):
            with self.assertRaises(InvalidArgumentError):
                self.fs.open('a', mode)

    def test_open_unknown_mode_bits(self):
        """Modes above read+write fail the permission check."""
        self.fs.create('a', READ_WRITE)
        self.fs.create('ro', READ)

        for mode in (4, 5, 7):
            with self.assertRaises(PermissionDeniedError):
                self.fs.open('a', mode)
        with self.assertRaises(PermissionDeniedError):
            self.fs.open('ro', 5)

        self.assertEqual(self.fs.stat('a').refcount, 1)
        self.assertEqual(self.fs.descriptors.open_count, 2)

    def test_open_instances_are_independent(self):
        """Two opens of one file keep separate offsets."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.write(fd, b'abcdef')

        first = self.fs.open('a', READ)
        second = self.fs.open('a', READ)

        self.assertEqual(self.fs.read(first, 2), b'ab')
        self.assertEqual(self.fs.read(second, 4), b'abcd')
        self.assertEqual(self.fs.read(first, 10), b'cdef')


class TestReadWrite(unittest.TestCase):
    """Test read and write."""

    def setUp(self):
        self.fs = FileSystem()

    def test_hello_scenario(self):
        """Write, rewind, read back, then hit end of file."""
        fd = self.fs.create('a.txt', READ_WRITE)
        self.assertEqual(fd, 0)

        self.assertEqual(self.fs.write(0, b'hello'), 5)
        self.assertEqual(self.fs.stat('a.txt').size, 5)

        self.fs.seek(0, 0, SeekAnchor.START)
        self.assertEqual(self.fs.read(0, 10), b'hello')

        with self.assertRaises(EndOfFileError):
            self.fs.read(0, 10)

    def test_round_trip(self):
        """Bytes written can be read back unchanged."""
        payload = bytes(range(256)) * 4
        fd = self.fs.create('bin', READ_WRITE)

        self.assertEqual(self.fs.write(fd, payload), len(payload))
        self.fs.seek(fd, 0, SeekAnchor.START)
        self.assertEqual(self.fs.read(fd, len(payload)), payload)

    def test_write_truncates_to_capacity(self):
        """An oversized write stores exactly the capacity, then the file is full."""
        fd = self.fs.create('big', READ_WRITE)

        self.assertEqual(self.fs.write(fd, b'y' * 2058), 2048)
        self.assertEqual(self.fs.fstat(fd).size, 2048)

        with self.assertRaises(FileFullError):
            self.fs.write(fd, b'more')

    def test_fill_exactly_then_write(self):
        """Filling a file to 2048 bytes makes the next write fail."""
        fd = self.fs.create('full', WRITE)
        self.assertEqual(self.fs.write(fd, b'a' * 1024), 1024)
        self.assertEqual(self.fs.write(fd, b'b' * 1024), 1024)

        with self.assertRaises(FileFullError) as ctx:
            self.fs.write(fd, b'x')
        self.assertEqual(ctx.exception.kind, ErrorKind.FILE_FULL)

    def test_partial_write_near_capacity(self):
        """A write straddling the capacity stores what fits."""
        fd = self.fs.create('w', WRITE)
        self.fs.seek(fd, 2040, SeekAnchor.START)

        self.assertEqual(self.fs.write(fd, b'z' * 20), 8)
        self.assertEqual(self.fs.fstat(fd).size, 2048)

    def test_partial_read(self):
        """Reading more than is available returns the rest."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.write(fd, b'abc')

        self.assertEqual(self.fs.read(fd, 100), b'abc')

    def test_zero_length_read(self):
        """Asking for zero bytes returns an empty result, even at end of file."""
        fd = self.fs.create('a', READ_WRITE)

        self.assertEqual(self.fs.read(fd, 0), b'')
        with self.assertRaises(InvalidArgumentError):
            self.fs.read(fd, -1)

    def test_read_empty_file_is_eof(self):
        """Reading a file with no data reports end of file."""
        fd = self.fs.create('a', READ_WRITE)

        with self.assertRaises(EndOfFileError):
            self.fs.read(fd, 1)

    def test_mode_and_permission_checks(self):
        """Descriptors only read or write what their mode allows."""
        fd_ro = self.fs.create('ro', READ)
        fd_wo = self.fs.create('wo', WRITE)

        with self.assertRaises(PermissionDeniedError):
            self.fs.write(fd_ro, b'x')
        with self.assertRaises(PermissionDeniedError):
            self.fs.read(fd_wo, 1)

        self.fs.create('rw', READ_WRITE)
        reader = self.fs.open('rw', READ)
        with self.assertRaises(PermissionDeniedError):
            self.fs.write(reader, b'x')

    def test_write_requires_bytes(self):
        """Text must be encoded before writing."""
        fd = self.fs.create('a', READ_WRITE)

        with self.assertRaises(InvalidArgumentError):
            self.fs.write(fd, 'text')
        self.assertEqual(self.fs.write(fd, bytearray(b'ok')), 2)

    def test_wrong_file_type(self):
        """Non-regular files cannot be read or written."""
        fd = self.fs.create('dev', READ_WRITE)
        self.fs.write(fd, b'data')
        self.fs.inodes.find_by_name('dev').file_type = FileType.SPECIAL

        with self.assertRaises(WrongFileTypeError):
            self.fs.read(fd, 2)
        with self.assertRaises(WrongFileTypeError):
            self.fs.write(fd, b'x')

    def test_bad_descriptor(self):
        """Empty and out-of-range descriptors are rejected."""
        for fd in (0, 49, 50, -1, '0', None):
            with self.assertRaises(BadDescriptorError):
                self.fs.read(fd, 1)
            with self.assertRaises(BadDescriptorError):
                self.fs.fstat(fd)


class TestSeek(unittest.TestCase):
    """Test offset movement."""

    def setUp(self):
        self.fs = FileSystem()

    def test_read_write_mode_moves_read_offset(self):
        """In read+write mode seek moves the read offset only."""
        fd = self.fs.create('rw', READ_WRITE)
        self.fs.write(fd, b'hello')

        self.assertEqual(self.fs.seek(fd, 2, SeekAnchor.START), 2)

        entry = self.fs.descriptors.get(fd)
        self.assertEqual(entry.read_offset, 2)
        self.assertEqual(entry.write_offset, 5)

        self.assertEqual(self.fs.read(fd, 10), b'llo')
        self.fs.write(fd, b'!')
        self.fs.seek(fd, 0, SeekAnchor.START)
        self.assertEqual(self.fs.read(fd, 10), b'hello!')

    def test_read_offset_bounds(self):
        """The read offset stays within the data."""
        fd = self.fs.create('r', READ_WRITE)
        self.fs.write(fd, b'hello')

        with self.assertRaises(OutOfBoundsError):
            self.fs.seek(fd, 6, SeekAnchor.START)
        with self.assertRaises(OutOfBoundsError):
            self.fs.seek(fd, -1, SeekAnchor.CURRENT)
        with self.assertRaises(OutOfBoundsError):
            self.fs.seek(fd, 1, SeekAnchor.END)

        self.assertEqual(self.fs.seek(fd, -2, SeekAnchor.END), 3)
        self.assertEqual(self.fs.read(fd, 10), b'lo')
        self.assertEqual(self.fs.seek(fd, -3, SeekAnchor.CURRENT), 2)

    def test_write_offset_extends_file(self):
        """Seeking a write-only descriptor past the end grows the file."""
        fd = self.fs.create('w', WRITE)
        self.fs.write(fd, b'abc')

        self.assertEqual(self.fs.seek(fd, 10, SeekAnchor.START), 10)
        self.assertEqual(self.fs.fstat(fd).size, 10)

        self.fs.write(fd, b'z')
        self.assertEqual(self.fs.fstat(fd).size, 11)
        self.assertEqual(self.fs.seek(fd, 0, SeekAnchor.END), 11)
        self.assertEqual(self.fs.seek(fd, 5, SeekAnchor.CURRENT), 16)
        self.assertEqual(self.fs.fstat(fd).size, 16)

        inode = self.fs.inodes.find_by_name('w')
        self.assertEqual(bytes(inode.buffer[:11]), b'abc' + bytes(7) + b'z')

    def test_write_offset_bounds(self):
        """The write offset stays within the capacity."""
        fd = self.fs.create('w', WRITE)

        with self.assertRaises(OutOfBoundsError):
            self.fs.seek(fd, 2049, SeekAnchor.START)
        with self.assertRaises(OutOfBoundsError):
            self.fs.seek(fd, -1, SeekAnchor.START)
        with self.assertRaises(OutOfBoundsError):
            self.fs.seek(fd, 2049, SeekAnchor.END)

        self.assertEqual(self.fs.seek(fd, 2048, SeekAnchor.START), 2048)
        with self.assertRaises(FileFullError):
            self.fs.write(fd, b'x')

    def test_invalid_anchor(self):
        """Only the three anchors are accepted."""
        fd = self.fs.create('a', READ_WRITE)

        with self.assertRaises(InvalidArgumentError):
            self.fs.seek(fd, 0, 3)
        with self.assertRaises(BadDescriptorError):
            self.fs.seek(7, 0, SeekAnchor.START)


class TestClose(unittest.TestCase):
    """Test closing descriptors."""

    def setUp(self):
        self.fs = FileSystem()

    def test_close_keeps_other_descriptor_working(self):
        """Closing one of two descriptors leaves the data reachable."""
        fd0 = self.fs.create('a', READ_WRITE)
        fd1 = self.fs.open('a', READ_WRITE)
        self.fs.write(fd0, b'data')

        self.fs.close(fd0)

        self.assertEqual(self.fs.read(fd1, 4), b'data')
        self.assertEqual(self.fs.stat('a').refcount, 1)
        with self.assertRaises(BadDescriptorError):
            self.fs.read(fd0, 1)

    def test_close_keeps_inode(self):
        """A closed file still exists."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.close(fd)

        st = self.fs.stat('a')
        self.assertEqual(st.refcount, 0)
        self.assertEqual(st.nlink, 1)
        self.assertEqual(self.fs.descriptors.open_count, 0)

    def test_close_by_name(self):
        """Close by name picks the lowest open descriptor."""
        self.fs.create('a', READ_WRITE)
        self.fs.open('a', READ)

        self.fs.close_by_name('a')

        self.assertIsNone(self.fs.descriptors.get(0))
        self.assertIsNotNone(self.fs.descriptors.get(1))

        with self.assertRaises(FileNotFoundError):
            self.fs.close_by_name('missing')

    def test_close_bad_descriptor(self):
        """Closing twice fails the second time."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.close(fd)

        with self.assertRaises(BadDescriptorError):
            self.fs.close(fd)

    def test_close_all(self):
        """close_all empties the descriptor table and keeps files."""
        self.fs.create('a', READ_WRITE)
        self.fs.create('b', READ)
        self.fs.open('a', READ)

        self.fs.close_all()

        self.assertEqual(self.fs.descriptors.open_count, 0)
        self.assertEqual([st.refcount for st in self.fs.list_files()], [0, 0])
        self.assertEqual(len(self.fs.list_files()), 2)

    def test_stale_descriptor_is_detected(self):
        """A closed handle does not alias the file that reuses its slot."""
        old = self.fs.create('a', READ_WRITE)
        self.fs.close(old)

        new = self.fs.create('b', READ_WRITE)
        self.assertEqual(int(new), int(old))
        self.assertNotEqual(new.generation, old.generation)

        with self.assertRaises(BadDescriptorError):
            self.fs.write(old, b'x')
        with self.assertRaises(BadDescriptorError):
            self.fs.fstat(old)

        # A bare slot number addresses the current occupant
        self.assertEqual(self.fs.write(0, b'x'), 1)
        self.assertEqual(self.fs.fstat(0).name, 'b')


class TestUnlink(unittest.TestCase):
    """Test file removal."""

    def setUp(self):
        self.fs = FileSystem()

    def test_unlink_releases_slot_for_reuse(self):
        """After unlink the same name can be created again in the same slot."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.write(fd, b'old')

        self.fs.unlink('a')

        self.assertEqual(self.fs.superblock.free_inodes, 50)
        inode = self.fs.inodes.get(1)
        self.assertTrue(inode.is_unused)
        self.assertIsNone(inode.buffer)

        fd = self.fs.create('a', READ_WRITE)
        st = self.fs.fstat(fd)
        self.assertEqual(st.ino, 1)
        self.assertEqual(st.nlink, 1)
        self.assertEqual(st.size, 0)

    def test_unlink_requires_open_descriptor(self):
        """Files without an open descriptor cannot be removed."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.close(fd)

        with self.assertRaises(FileNotFoundError):
            self.fs.unlink('a')
        self.assertEqual(self.fs.stat('a').name, 'a')

        with self.assertRaises(FileNotFoundError):
            self.fs.unlink('missing')

    def test_unlink_closes_every_descriptor(self):
        """No descriptor survives the release of its inode."""
        self.fs.create('a', READ_WRITE)
        other = self.fs.open('a', READ)
        keep = self.fs.create('b', READ_WRITE)

        self.fs.unlink('a')

        with self.assertRaises(BadDescriptorError):
            self.fs.fstat(other)
        with self.assertRaises(FileNotFoundError):
            self.fs.stat('a')
        self.assertEqual(self.fs.fstat(keep).name, 'b')
        self.assertEqual(self.fs.descriptors.open_count, 1)
        self.assertEqual(self.fs.superblock.free_inodes, 49)


class TestTruncateStatList(unittest.TestCase):
    """Test truncate, stat and listing."""

    def setUp(self):
        self.fs = FileSystem()

    def test_truncate(self):
        """Truncate drops the data and rewinds the descriptor."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.write(fd, b'hello')

        self.fs.truncate('a')

        st = self.fs.stat('a')
        self.assertEqual(st.size, 0)
        self.assertEqual(st.nlink, 1)
        self.assertEqual(st.permission, Permission.READ_WRITE)

        inode = self.fs.inodes.find_by_name('a')
        self.assertEqual(inode.buffer, bytearray(2048))
        self.assertEqual(inode.capacity, 2048)

        with self.assertRaises(EndOfFileError):
            self.fs.read(fd, 1)
        self.assertEqual(self.fs.write(fd, b'ab'), 2)
        self.assertEqual(self.fs.read(fd, 5), b'ab')

    def test_truncate_requires_open_descriptor(self):
        """Truncate resolves through the descriptor table."""
        fd = self.fs.create('a', READ_WRITE)
        self.fs.close(fd)

        with self.assertRaises(FileNotFoundError):
            self.fs.truncate('a')

    def test_stat_and_fstat_agree(self):
        """Both projections report the same metadata without changing it."""
        fd = self.fs.create('a', READ)

        self.assertEqual(self.fs.stat('a'), self.fs.fstat(fd))
        self.assertEqual(self.fs.stat('a').to_dict()['permission'], 'Read only')

        with self.assertRaises(FileNotFoundError):
            self.fs.stat('b')

    def test_long_names_are_not_found(self):
        """Only create enforces the name length; lookups report NotFound."""
        long_name = 'x' * 60
        self.fs.create('a', READ_WRITE)

        with self.assertRaises(FileNotFoundError):
            self.fs.stat(long_name)
        with self.assertRaises(FileNotFoundError):
            self.fs.open(long_name, READ)
        with self.assertRaises(FileNotFoundError):
            self.fs.close_by_name(long_name)
        with self.assertRaises(FileNotFoundError):
            self.fs.unlink(long_name)
        with self.assertRaises(FileNotFoundError):
            self.fs.truncate(long_name)
        with self.assertRaises(FileNotFoundError):
            self.fs.descriptor_for(long_name)

        with self.assertRaises(InvalidArgumentError):
            self.fs.create(long_name, READ_WRITE)

    def test_list_files(self):
        """Listing follows inode slot order and is empty without files."""
        self.assertEqual(self.fs.list_files(), [])

        self.fs.create('a', READ_WRITE)
        self.fs.create('b', READ_WRITE)
        self.fs.create('c', READ_WRITE)
        self.fs.unlink('a')
        self.fs.create('d', READ_WRITE)

        listing = self.fs.list_files()
        self.assertEqual([st.name for st in listing], ['d', 'b', 'c'])
        self.assertEqual([st.ino for st in listing], [1, 2, 3])

    def test_descriptor_for(self):
        """Name lookup returns the lowest open descriptor."""
        self.fs.create('x', READ_WRITE)
        self.fs.create('a', READ_WRITE)

        fd = self.fs.descriptor_for('a')
        self.assertIsInstance(fd, FileDescriptor)
        self.assertEqual(fd, 1)

        with self.assertRaises(FileNotFoundError):
            self.fs.descriptor_for('nope')

    def test_stats(self):
        """Statistics reflect the tables."""
        self.fs.create('a', READ_WRITE)
        self.fs.open('a', READ)

        stats = self.fs.get_stats()
        self.assertEqual(stats['free_inodes'], 49)
        self.assertEqual(stats['live_files'], 1)
        self.assertEqual(stats['open_descriptors'], 2)


class TestInstances(unittest.TestCase):
    """Test that file systems are independent."""

    def test_instances_share_nothing(self):
        """Files created in one instance are invisible to another."""
        first = FileSystem()
        second = FileSystem(max_inodes=3, max_descriptors=2, max_file_size=16)

        first.create('a', READ_WRITE)

        self.assertEqual(second.list_files(), [])
        self.assertEqual(second.superblock.total_inodes, 3)

        fd = second.create('a', READ_WRITE)
        self.assertEqual(second.write(fd, b'x' * 20), 16)

    def test_initialize_resets_tables(self):
        """initialize starts again from an empty file system."""
        from cvfs.core.registry import SubsystemState

        fs = FileSystem()
        fs.create('a', READ_WRITE)

        fs.initialize()

        self.assertEqual(fs.state, SubsystemState.INITIALIZED)
        self.assertEqual(fs.list_files(), [])
        self.assertEqual(fs.superblock.free_inodes, 50)


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
