"""InputSource: line and character reads from one text stream.

The REPL reads whole lines and the input instruction reads single
characters. Both go through the same stream, so characters typed after
a command line are what the input instruction consumes.
"""

import sys
from typing import Optional, TextIO


class InputSource:
    """Reads lines and characters from a text stream.

    Attributes:
        stream: Underlying text stream (stdin if None)
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin

    def read_line(self) -> Optional[str]:
        """Read one line.

        Returns:
            The line without its terminator ("" for an empty line),
            or None at end of input
        """
        line = self.stream.readline()
        if line == "":
            return None
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line

    def read_char(self) -> Optional[str]:
        """Read one character, or None at end of input."""
        char = self.stream.read(1)
        return char if char else None
