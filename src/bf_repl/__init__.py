"""bf_repl: Line-oriented interactive interpreter for an eight-instruction tape language.

Programs operate on a fixed-size tape of signed 8-bit cells with a cursor.
Six single-character instructions change the current cell, move the cursor
or do I/O; a bracket pair repeats its body while the current cell is
non-zero.

Architecture:
    INPUT -> REPL -> BALANCE CHECK -> EXECUTOR -> REGISTRY -> TAPE
              |          |              |           |
        [>>> / ...]  [closed/open/  [segment +  [+ - > < . ,]
                      invalid]       loop stack]

Modules:
    tape: TapeState and TapeStore, the bounded memory model
    registry: Frozen instruction table for flat dispatch
    balance: Bracket classification and matching
    executor: BlockExecutor, runs complete commands
    source: InputSource, line and character reads from a stream
    repl: Interactive loop and whole-program runner
"""

__version__ = "1.2.0"
__author__ = "bf_repl contributors"

from .tape import (
    TapeState,
    TapeStore,
    BoundsError,
    AtEndOfMemory,
    AtStartOfMemory,
    create_initial_state,
)
from .registry import InstructionRegistry, get_registry
from .balance import BlockState, UnbalancedBrackets, classify, find_matching_close
from .executor import BlockExecutor, ExecutionTraceEntry, create_executor
from .source import InputSource
from .repl import Repl, run_program

__all__ = [
    "TapeState",
    "TapeStore",
    "BoundsError",
    "AtEndOfMemory",
    "AtStartOfMemory",
    "create_initial_state",
    "InstructionRegistry",
    "get_registry",
    "BlockState",
    "UnbalancedBrackets",
    "classify",
    "find_matching_close",
    "BlockExecutor",
    "ExecutionTraceEntry",
    "create_executor",
    "InputSource",
    "Repl",
    "run_program",
]
