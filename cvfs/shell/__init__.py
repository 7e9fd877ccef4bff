"""
CVFS Shell Module

Provides the interactive command-line shell:
- Command parsing
- Built-in file system commands
- Help and manual pages
"""

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
