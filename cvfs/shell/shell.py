"""
CVFS Shell Module

The interactive command-line shell for the virtual file system.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Callable, Optional

from .parser import CommandParser
from .builtins import BuiltinCommands
from cvfs.core.config_loader import get_config
from cvfs.filesystem.vfs import FileSystem
from cvfs.logger import get_logger

EXIT_NOT_FOUND = 127


class Shell:
    """
    Read-eval loop over a FileSystem.

    Each line is parsed and handed to the matching built-in command.
    The loop ends on ``exit`` or at end of input. Input comes from
    ``input_func`` so scripted sessions can stand in for a terminal.

    Example:
        >>> shell = Shell(FileSystem())
        >>> shell.execute_line('create a.txt 3')
        File is successfully created with file descriptor: 0
        0
    """

    def __init__(
        self,
        filesystem: Optional[FileSystem] = None,
        input_func: Callable[[str], str] = input
    ):
        shell_config = get_config().shell
        self._fs = filesystem if filesystem is not None else FileSystem()
        self._input = input_func
        self._prompt = shell_config.prompt
        self._banner = shell_config.banner
        self._logger = get_logger('shell')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(self)
        self._exiting = False

    @property
    def filesystem(self) -> FileSystem:
        return self._fs

    @property
    def parser(self) -> CommandParser:
        return self._parser

    def read_input(self, prompt: str) -> str:
        """Read one line through the configured input function."""
        return self._input(prompt)

    def _next_line(self) -> Optional[str]:
        """The next input line, '' after Ctrl-C, None at end of input."""
        try:
            return self.read_input(self._prompt)
        except EOFError:
            print()
            return None
        except KeyboardInterrupt:
            print("^C")
            return ''

    def run(self) -> None:
        """Print the banner and process lines until exit or end of input."""
        print(f"\n{self._banner}")
        print("Type 'help' for a list of commands.\n")

        while not self._exiting:
            line = self._next_line()
            if line is None:
                break
            try:
                self.execute_line(line)
            except Exception as e:
                self._logger.exception("Shell error", exc=e, context={'line': line})
                print(f"shell: error: {e}")

    def execute_line(self, line: str) -> int:
        """
        Run one command line.

        Returns:
            The command's exit status, 0 for blank lines and 127 for
            unknown commands
        """
        cmd = self._parser.parse(line)
        if cmd is None:
            return 0

        if not self._builtins.is_builtin(cmd.command):
            print("ERROR: Command not found !!!")
            self._logger.debug("Unknown command", context={'command': cmd.command})
            return EXIT_NOT_FOUND

        self._logger.debug("Executing command", context={'command': cmd.command, 'argc': cmd.argc})
        return self._builtins.execute(cmd.command, cmd.args)

    def request_exit(self) -> None:
        """Make the loop (or a running script) stop after this command."""
        self._exiting = True

    def run_script(self, script: str) -> int:
        """Run commands one per line; returns the status of the last one run."""
        status = 0
        for line in script.splitlines():
            if self._exiting:
                break
            status = self.execute_line(line)
        return status


def create_shell(filesystem: Optional[FileSystem] = None) -> Shell:
    """Build a shell over ``filesystem`` or over a new file system."""
    return Shell(filesystem)
