"""BlockExecutor: runs command text against a tape.

Command text is split at its first block into a flat prefix, the block
body and a suffix. Flat text is dispatched one character at a time
through the instruction registry; a block body is run again and again
while the current cell is non-zero, and is split the same way whenever
it contains blocks of its own. Spans are derived from the raw text every
time a block is met; no parse tree is built.

Pending work is kept on an explicit stack rather than in nested calls,
so deeply nested blocks are limited by memory and not by the Python
recursion limit. The order in which instructions run is the same as the
recursive formulation:

    segment(text) -> segment(prefix), loop(body), segment(suffix)
    loop(body)    -> while current != 0: segment(body)
"""

from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple

from .balance import BlockState, UnbalancedBrackets, classify, find_matching_close, has_block
from .registry import InstructionRegistry, OPEN_BRACKET, get_registry
from .tape import DEFAULT_MEMORY_SIZE, BoundsError, TapeStore, create_initial_state


# Work stack frame kinds
_SEGMENT = "segment"
_LOOP = "loop"


@dataclass
class ExecutionTraceEntry:
    """One dispatched instruction.

    Attributes:
        step: Instruction number within the executor's lifetime (0-indexed)
        instruction: Instruction character
        pre_cursor: Cursor before the instruction
        pre_cell: Current cell value before the instruction
        post_cursor: Cursor after the instruction
        post_cell: Current cell value after the instruction
        error: Error message if the instruction failed
    """
    step: int
    instruction: str
    pre_cursor: int
    pre_cell: int
    post_cursor: int
    post_cell: int
    error: Optional[str] = None


class BlockExecutor:
    """Executes bracket-complete command text on a TapeStore.

    Attributes:
        tape: TapeStore every instruction goes through
        registry: Instruction table used for flat dispatch
        abort_on_error: Abort the whole command on a bounds error instead of
            only the flat segment where it happened
        trace_enabled: Record an ExecutionTraceEntry per instruction
        max_trace: Maximum number of trace entries kept
        trace: Recorded trace entries
        errors: Messages of every error reported so far
        steps: Number of instructions dispatched so far
    """

    DEFAULT_MAX_TRACE = 10000

    def __init__(
        self,
        tape: TapeStore,
        registry: Optional[InstructionRegistry] = None,
        abort_on_error: bool = False,
        trace: bool = False,
        max_trace: int = DEFAULT_MAX_TRACE,
        error_stream: Optional[TextIO] = None
    ):
        """Initialize the executor.

        Args:
            tape: TapeStore to mutate
            registry: Instruction table (shared registry if None)
            abort_on_error: Bounds errors abort the whole command
            trace: Record every dispatched instruction
            max_trace: Trace entries kept before recording stops
            error_stream: Where error messages are printed (stdout if None)
        """
        self.tape = tape
        self.registry = registry if registry is not None else get_registry()
        self.abort_on_error = abort_on_error
        self.trace_enabled = trace
        self.max_trace = max_trace
        self.error_stream = error_stream
        self.trace: List[ExecutionTraceEntry] = []
        self.errors: List[str] = []
        self.steps = 0

    def execute(self, text: str) -> None:
        """Execute one complete command.

        Args:
            text: Command text whose brackets are balanced and closed

        Raises:
            UnbalancedBrackets: If text is not classified CLOSED
        """
        if not text:
            return

        state = classify(text)
        if state is not BlockState.CLOSED:
            raise UnbalancedBrackets(state)

        stack: List[Tuple[str, str]] = [(_SEGMENT, text)]
        while stack:
            kind, segment = stack.pop()

            if kind == _LOOP:
                if self.tape.current() != 0:
                    stack.append((_LOOP, segment))
                    stack.append((_SEGMENT, segment))
                continue

            if not has_block(segment):
                if not self.dispatch(segment) and self.abort_on_error:
                    stack.clear()
                continue

            start, end = self.split_block(segment)
            suffix = segment[end + 1:]
            if suffix:
                stack.append((_SEGMENT, suffix))
            stack.append((_LOOP, segment[start + 1:end]))
            if start > 0:
                stack.append((_SEGMENT, segment[:start]))

    def split_block(self, text: str) -> Tuple[int, int]:
        """Locate the first block of text.

        Args:
            text: Text containing at least one opening bracket

        Returns:
            (index of the first opening bracket, index of its closing bracket)

        Raises:
            UnbalancedBrackets: If the first block is never closed
        """
        start = text.index(OPEN_BRACKET)
        end = find_matching_close(text)
        if end is None:
            raise UnbalancedBrackets(classify(text))
        return start, end

    def dispatch(self, text: str) -> bool:
        """Run flat (bracket-free) text one instruction at a time.

        Unrecognized characters are skipped. A bounds error stops the rest
        of this text; effects already applied stay.

        Args:
            text: Flat command text

        Returns:
            True if every instruction ran, False if a bounds error stopped it
        """
        for char in text:
            handler = self.registry.lookup(char)
            if handler is None:
                continue

            pre_cursor = self.tape.state.cursor
            pre_cell = self.tape.current()
            error = None
            try:
                handler(self.tape)
            except BoundsError as e:
                error = str(e)
                self.report(e)
            if self.trace_enabled:
                self._record(char, pre_cursor, pre_cell, error)
            self.steps += 1
            if error is not None:
                return False

        return True

    def report(self, error: BoundsError) -> None:
        """Print an error where it was detected and keep its message."""
        message = str(error)
        self.errors.append(message)
        print(f"Error! {message}", file=self.error_stream, flush=True)

    def _record(self, char: str, pre_cursor: int, pre_cell: int, error: Optional[str]) -> None:
        if len(self.trace) >= self.max_trace:
            return
        self.trace.append(ExecutionTraceEntry(
            step=self.steps,
            instruction=char,
            pre_cursor=pre_cursor,
            pre_cell=pre_cell,
            post_cursor=self.tape.state.cursor,
            post_cell=self.tape.current(),
            error=error
        ))

    def get_cursor(self) -> int:
        return self.tape.state.cursor

    def get_cell(self, index: Optional[int] = None) -> int:
        """Get a cell value.

        Args:
            index: Cell index (current cell if None)

        Returns:
            Cell value
        """
        if index is None:
            return self.tape.current()
        return self.tape.state.cells[index]

    def get_output(self) -> str:
        return self.tape.state.output

    def print_trace(self) -> None:
        """Print execution trace in human-readable format."""
        print("=" * 70)
        print("EXECUTION TRACE")
        print("=" * 70)

        for entry in self.trace:
            status = "OK" if not entry.error else f"ERROR: {entry.error}"
            line = f"[Step {entry.step}] {entry.instruction} {status}"
            if entry.pre_cursor != entry.post_cursor:
                line += f"  cursor: {entry.pre_cursor} -> {entry.post_cursor}"
            if entry.pre_cell != entry.post_cell:
                line += f"  cell: {entry.pre_cell} -> {entry.post_cell}"
            print(line)

        if len(self.trace) < self.steps:
            print(f"... ({self.steps - len(self.trace)} more steps not recorded)")

        print("\n" + "=" * 70)
        print("FINAL STATE")
        print("=" * 70)
        print(f"  Tape: {self.tape.state}")
        print(f"  Steps: {self.steps}")

    def get_summary(self) -> dict:
        """Get execution summary.

        Returns:
            Dictionary with execution statistics and final tape position
        """
        return {
            "steps": self.steps,
            "cursor": self.get_cursor(),
            "cell": self.get_cell(),
            "output": self.get_output(),
            "trace_length": len(self.trace),
            "errors": list(self.errors),
        }


def create_executor(
    memory_size: int = DEFAULT_MEMORY_SIZE,
    input_source=None,
    output_stream: Optional[TextIO] = None,
    **kwargs
) -> BlockExecutor:
    """Build an executor on a fresh zeroed tape.

    Args:
        memory_size: Number of tape cells
        input_source: Object with read_char() for the input instruction
        output_stream: Stream for the output instruction (stdout if None)
        **kwargs: Passed on to BlockExecutor

    Returns:
        BlockExecutor with its own TapeState
    """
    tape = TapeStore(create_initial_state(memory_size), input_source, output_stream)
    return BlockExecutor(tape, **kwargs)
