"""TapeState and TapeStore: the interpreter's memory model.

This module defines the fixed-size byte tape and the cursor that selects
the current cell, plus the bounded primitives the executor drives.

State Components:
    - Cells: fixed-length list of signed 8-bit integers, zero initialized
    - Cursor: index of the current cell, always within [0, memory_size)
    - Output: text written by the output instruction so far

Cell arithmetic wraps modulo 256. Cursor moves never wrap and never grow
the tape: a move past either end raises a BoundsError and leaves the
cursor where it was.
"""

import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO


# Signed 8-bit cell bounds
CELL_MIN = -128
CELL_MAX = 127

DEFAULT_MEMORY_SIZE = 256


class BoundsError(Exception):
    """Cursor move would leave the tape."""


class AtEndOfMemory(BoundsError):
    def __init__(self):
        super().__init__("current cell is at the end of memory")


class AtStartOfMemory(BoundsError):
    def __init__(self):
        super().__init__("current cell is in the beginning of memory")


def wrap_cell(value: int) -> int:
    """Wrap an integer into the signed 8-bit cell range.

    Args:
        value: Any integer

    Returns:
        Value congruent modulo 256 within [CELL_MIN, CELL_MAX]
    """
    return ((value - CELL_MIN) % 256) + CELL_MIN


@dataclass
class TapeState:
    """Tape memory and cursor.

    Attributes:
        cells: Signed 8-bit cell values, length fixed at creation
        cursor: Index of the current cell
        output: Everything written by the output instruction
    """
    cells: List[int] = field(default_factory=lambda: [0] * DEFAULT_MEMORY_SIZE)
    cursor: int = 0
    output: str = ""

    @property
    def memory_size(self) -> int:
        return len(self.cells)

    def snapshot(self) -> dict:
        """Create a copy of the tape for tracing.

        Returns:
            Dictionary with a copy of the cells and the cursor
        """
        return {
            "cells": list(self.cells),
            "cursor": self.cursor,
            # Note: output excluded, the trace records it per instruction
        }

    def validate(self) -> bool:
        """Validate tape integrity.

        Checks:
            - Tape is non-empty
            - Cursor is within [0, memory_size)
            - Every cell is an int within the signed 8-bit range

        Returns:
            True if state is valid, False otherwise
        """
        if not self.cells:
            return False

        if self.cursor < 0 or self.cursor >= len(self.cells):
            return False

        for value in self.cells:
            if not isinstance(value, int):
                return False
            if value < CELL_MIN or value > CELL_MAX:
                return False

        return True

    def dump_cells(self, start: int = 0, end: Optional[int] = None) -> List[int]:
        """Get a copy of a window of the tape.

        Args:
            start: First cell index (inclusive)
            end: Last cell index (exclusive), defaults to the end of the tape

        Returns:
            List of cell values
        """
        return list(self.cells[start:end])

    def __str__(self) -> str:
        """Human-readable view of the cells around the cursor."""
        lo = max(0, self.cursor - 4)
        hi = min(len(self.cells), self.cursor + 5)
        cells = " ".join(
            f"[{self.cells[i]}]" if i == self.cursor else str(self.cells[i])
            for i in range(lo, hi)
        )
        return f"cursor={self.cursor} {cells}"


def create_initial_state(memory_size: int = DEFAULT_MEMORY_SIZE) -> TapeState:
    """Create a zeroed tape with the cursor on the first cell.

    Args:
        memory_size: Number of cells

    Returns:
        Fresh TapeState

    Raises:
        ValueError: If memory_size is not positive
    """
    if memory_size <= 0:
        raise ValueError(f"Memory size must be positive: {memory_size}")
    return TapeState(cells=[0] * memory_size, cursor=0, output="")


class TapeStore:
    """Bounded operations over a TapeState.

    The store owns no data of its own: the state object is passed in, so
    several interpreters can coexist and tests can build isolated tapes.

    Attributes:
        state: Tape being operated on
        input_source: Object with read_char() -> Optional[str], or None
        output_stream: Stream the output instruction writes to
    """

    def __init__(
        self,
        state: Optional[TapeState] = None,
        input_source=None,
        output_stream: Optional[TextIO] = None
    ):
        self.state = state if state is not None else create_initial_state()
        self.input_source = input_source
        self.output_stream = output_stream if output_stream is not None else sys.stdout

    def move_right(self) -> None:
        """Advance the cursor by one cell.

        Raises:
            AtEndOfMemory: If the cursor is on the last cell
        """
        if self.state.cursor >= len(self.state.cells) - 1:
            raise AtEndOfMemory()
        self.state.cursor += 1

    def move_left(self) -> None:
        """Move the cursor back by one cell.

        Raises:
            AtStartOfMemory: If the cursor is on the first cell
        """
        if self.state.cursor <= 0:
            raise AtStartOfMemory()
        self.state.cursor -= 1

    def increment(self) -> None:
        cells = self.state.cells
        cells[self.state.cursor] = wrap_cell(cells[self.state.cursor] + 1)

    def decrement(self) -> None:
        cells = self.state.cells
        cells[self.state.cursor] = wrap_cell(cells[self.state.cursor] - 1)

    def current(self) -> int:
        return self.state.cells[self.state.cursor]

    def write_output(self) -> None:
        """Emit the current cell as a character and flush immediately."""
        char = chr(self.current() & 0xFF)
        self.state.output += char
        self.output_stream.write(char)
        self.output_stream.flush()

    def read_input(self) -> None:
        """Read one character from the input source into the current cell.

        A line terminator stores 0. End of input leaves the cell unchanged.
        """
        if self.input_source is None:
            return
        char = self.input_source.read_char()
        if char is None:
            return
        if char == "\n":
            self.state.cells[self.state.cursor] = 0
        else:
            self.state.cells[self.state.cursor] = wrap_cell(ord(char))
