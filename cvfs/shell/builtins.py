"""
Shell Built-in Commands

Implements the file system commands of the shell, plus help and
manual pages.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Callable, List

from cvfs.exceptions import FileNotFoundError, FileSystemException
from cvfs.filesystem.inode import Permission


MANUAL = {
    'create': (
        "Used to create a new file",
        "create File_name Permission(1 = Read, 2 = Write, 3 = Read & Write)",
    ),
    'open': (
        "Used to open an existing file",
        "open File_name Mode(1 = Read, 2 = Write, 3 = Read & Write)",
    ),
    'read': (
        "Used to read data from regular file",
        "read File_name|File_descriptor No_Of_Bytes_To_Read",
    ),
    'write': (
        "Used to write data into a regular file",
        "write File_name [Data]\nWithout Data, enter the data that we want to write",
    ),
    'ls': (
        "Used to list all information of file",
        "ls",
    ),
    'stat': (
        "Used to display information of file",
        "stat File_name",
    ),
    'fstat': (
        "Used to display information of file from file descriptor",
        "fstat File_descriptor",
    ),
    'truncate': (
        "Used to remove data from file",
        "truncate File_name",
    ),
    'close': (
        "Used to close an opened file",
        "close File_name",
    ),
    'closeall': (
        "Used to close all opened files",
        "closeall",
    ),
    'lseek': (
        "Used to change file offset",
        "lseek File_name ChangeInOffset StartPoint(0 = Start, 1 = Current, 2 = End)",
    ),
    'rm': (
        "Used to delete the file",
        "rm File_name",
    ),
}


HELP_TEXT = """\
ls : To List out all files
clear : To clear console
create : To create a new file
open : To open the file
close : To close the file
closeall : To close all opened files
read : To read the contents from file
write : To write contents into file
lseek : To change the file offset
exit : To terminate file system
stat : To display information of file using name
fstat : To display information of file using file descriptor
truncate : To remove all data from file
rm : To delete the file
man : To display the manual of a command"""


class UsageError(Exception):
    """Wrong number or shape of command arguments."""
    pass


def _parse_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise UsageError(f"{what} must be an integer") from None


class BuiltinCommands:
    """
    Built-in shell commands.

    Each command takes its argument list and returns an exit code. File
    system errors are reported as ``ERROR:`` lines and never end the
    session.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._commands: dict[str, Callable[[List[str]], int]] = {
            'help': self.cmd_help,
            'man': self.cmd_man,
            'exit': self.cmd_exit,
            'clear': self.cmd_clear,
            'ls': self.cmd_ls,
            'create': self.cmd_create,
            'open': self.cmd_open,
            'close': self.cmd_close,
            'closeall': self.cmd_closeall,
            'read': self.cmd_read,
            'write': self.cmd_write,
            'lseek': self.cmd_lseek,
            'rm': self.cmd_rm,
            'truncate': self.cmd_truncate,
            'stat': self.cmd_stat,
            'fstat': self.cmd_fstat,
        }

    @property
    def _fs(self):
        return self._shell.filesystem

    def get_commands(self) -> dict[str, Callable[[List[str]], int]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> int:
        """
        Execute a built-in command.

        Returns:
            Exit code (127 if the command does not exist)
        """
        cmd = self._commands.get(name)
        if cmd is None:
            return 127

        try:
            return cmd(args)
        except UsageError as e:
            print(f"ERROR: Incorrect parameters: {e}")
            usage = MANUAL.get(name)
            if usage:
                print(f"Usage : {usage[1]}")
            return 2
        except FileSystemException as e:
            print(f"ERROR: {e.message}")
            return 1

    def _expect(self, args: List[str], count: int) -> None:
        if len(args) != count:
            raise UsageError(f"expected {count} argument(s), got {len(args)}")

    def _resolve_fd(self, value: str) -> int:
        """
        Accept the name of an open file or a descriptor number.

        A name wins over a number, so a file called '42' stays reachable.
        """
        try:
            return self._fs.descriptor_for(value)
        except FileNotFoundError:
            if value.isdigit():
                return int(value)
            raise

    # Command implementations

    def cmd_help(self, args: List[str]) -> int:
        """Display help information."""
        print(HELP_TEXT)
        return 0

    def cmd_man(self, args: List[str]) -> int:
        """Display the manual entry of a command."""
        self._expect(args, 1)
        entry = MANUAL.get(args[0])
        if entry is None:
            print("ERROR : No manual entry available.")
            return 1
        print(f"Description : {entry[0]}")
        print(f"Usage : {entry[1]}")
        return 0

    def cmd_exit(self, args: List[str]) -> int:
        """Exit the shell."""
        print("Terminating the Customized Virtual File System")
        self._shell.request_exit()
        return 0

    def cmd_clear(self, args: List[str]) -> int:
        """Clear screen."""
        print("\033[2J\033[H", end="")
        return 0

    def cmd_ls(self, args: List[str]) -> int:
        """List all files."""
        files = self._fs.list_files()
        if not files:
            print("ERROR: There are no files")
            return 1

        print("File name\tInode number\tFile size\tLink count")
        print("-" * 56)
        for st in files:
            print(f"{st.name}\t\t{st.ino}\t\t{st.size}\t\t{st.nlink}")
        print("-" * 56)
        return 0

    def cmd_create(self, args: List[str]) -> int:
        """Create a file."""
        self._expect(args, 2)
        fd = self._fs.create(args[0], _parse_int(args[1], "Permission"))
        print(f"File is successfully created with file descriptor: {int(fd)}")
        return 0

    def cmd_open(self, args: List[str]) -> int:
        """Open an existing file."""
        self._expect(args, 2)
        fd = self._fs.open(args[0], _parse_int(args[1], "Mode"))
        print(f"File is successfully opened with file descriptor: {int(fd)}")
        return 0

    def cmd_close(self, args: List[str]) -> int:
        """Close a file by name."""
        self._expect(args, 1)
        self._fs.close_by_name(args[0])
        return 0

    def cmd_closeall(self, args: List[str]) -> int:
        """Close all open files."""
        self._fs.close_all()
        print("All files closed successfully")
        return 0

    def cmd_read(self, args: List[str]) -> int:
        """Read bytes from an open file."""
        self._expect(args, 2)
        fd = self._resolve_fd(args[0])
        size = _parse_int(args[1], "Size")
        if size <= 0:
            raise UsageError("Size must be positive")

        data = self._fs.read(fd, size)
        print(f"Data Read: {data.decode('utf-8', errors='replace')}")
        return 0

    def cmd_write(self, args: List[str]) -> int:
        """Write data to an open file."""
        if not args:
            raise UsageError("missing file name")

        fd = self._fs.descriptor_for(args[0])
        if len(args) > 1:
            text = " ".join(args[1:])
        else:
            text = self._shell.read_input("Enter the data : ")

        if not text:
            raise UsageError("no data to write")

        written = self._fs.write(fd, text.encode('utf-8'))
        print(f"{written} bytes written")
        return 0

    def cmd_lseek(self, args: List[str]) -> int:
        """Change a file offset."""
        self._expect(args, 3)
        fd = self._fs.descriptor_for(args[0])
        offset = self._fs.seek(
            fd,
            _parse_int(args[1], "ChangeInOffset"),
            _parse_int(args[2], "StartPoint")
        )
        print(f"Offset is now {offset}")
        return 0

    def cmd_rm(self, args: List[str]) -> int:
        """Delete a file."""
        self._expect(args, 1)
        self._fs.unlink(args[0])
        return 0

    def cmd_truncate(self, args: List[str]) -> int:
        """Remove all data from a file."""
        self._expect(args, 1)
        self._fs.truncate(args[0])
        return 0

    def cmd_stat(self, args: List[str]) -> int:
        """Display file information by name."""
        self._expect(args, 1)
        self._print_stat(self._fs.stat(args[0]))
        return 0

    def cmd_fstat(self, args: List[str]) -> int:
        """Display file information by descriptor."""
        self._expect(args, 1)
        self._print_stat(self._fs.fstat(_parse_int(args[0], "File descriptor")))
        return 0

    def _print_stat(self, st) -> None:
        print("---------- Statistical Information about file ----------")
        print(f"File name : {st.name}")
        print(f"Inode Number : {st.ino}")
        print(f"File size : {st.size}")
        print(f"Link count : {st.nlink}")
        print(f"Reference count : {st.refcount}")
        print(f"File Permission : {Permission(st.permission).label}")
        print("--------------------------------------------------------")
