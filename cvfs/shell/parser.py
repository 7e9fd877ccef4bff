"""
Command Parser Module

Splits shell input into a command name and its arguments.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, List

QUOTES = ('"', "'")
ESCAPE = '\\'
COMMENT = '#'


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)

    @property
    def argc(self) -> int:
        return len(self.args)


class CommandParser:
    """
    Turns a line such as ``write a.txt "hello world"`` into
    ``ParsedCommand('write', ['a.txt', 'hello world'])``.

    Words are separated by whitespace. Single or double quotes group a
    word (an empty pair gives an empty word) and a backslash takes the
    next character literally. An unterminated quote runs to the end of
    the line.
    """

    def __init__(self):
        self._history: List[str] = []

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """Parse one line; blank lines and ``#`` comments give None."""
        line = line.strip()
        if not line or line.startswith(COMMENT):
            return None

        self._history.append(line)

        words = list(self._tokenize(line))
        if not words:
            return None
        return ParsedCommand(command=words[0], args=words[1:])

    @staticmethod
    def _tokenize(line: str) -> Iterator[str]:
        chars = iter(line)
        word: List[str] = []
        started = False
        quote = None

        for char in chars:
            if char == ESCAPE:
                word.append(next(chars, ''))
                started = True
            elif quote:
                if char == quote:
                    quote = None
                else:
                    word.append(char)
            elif char in QUOTES:
                quote = char
                started = True
            elif char.isspace():
                if started:
                    yield ''.join(word)
                    word, started = [], False
            else:
                word.append(char)
                started = True

        if started:
            yield ''.join(word)

    def get_history(self) -> List[str]:
        """Lines parsed so far, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
