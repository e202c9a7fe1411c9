"""InstructionRegistry: the instruction table for flat dispatch.

This module maps each instruction character to the TapeStore primitive
that implements it. The table is frozen after construction so dispatch
cannot be altered at runtime.

Instructions:
    +: Increment the current cell (wraps)
    -: Decrement the current cell (wraps)
    >: Move the cursor right
    <: Move the cursor left
    .: Write the current cell to the output stream
    ,: Read one character into the current cell

The bracket characters are not registered here: blocks are handled by
the executor. Any character without an entry is ignored by dispatch.
"""

from typing import Callable, Dict, Optional

from .tape import TapeStore


Handler = Callable[[TapeStore], None]

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"


class InstructionRegistry:
    """Frozen registry of instruction primitives.

    Attributes:
        _primitives: Dictionary mapping instruction characters to handlers
        _frozen: Whether the registry is locked against modifications
    """

    def __init__(self):
        """Initialize registry with all tape primitives."""
        self._primitives: Dict[str, Handler] = {}
        self._frozen = False
        self._register_all_primitives()
        self.freeze()

    def _register_all_primitives(self) -> None:
        # Cell arithmetic
        self.register("+", TapeStore.increment)
        self.register("-", TapeStore.decrement)

        # Cursor movement
        self.register(">", TapeStore.move_right)
        self.register("<", TapeStore.move_left)

        # I/O
        self.register(".", TapeStore.write_output)
        self.register(",", TapeStore.read_input)

    def register(self, char: str, handler: Handler) -> None:
        """Register an instruction primitive.

        Args:
            char: Single instruction character
            handler: Function taking the TapeStore to operate on

        Raises:
            RuntimeError: If registry is frozen
            ValueError: If char is not a single character, is a bracket,
                or is already registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register primitives: registry is frozen")
        if len(char) != 1:
            raise ValueError(f"Instruction must be a single character: {char!r}")
        if char in (OPEN_BRACKET, CLOSE_BRACKET):
            raise ValueError(f"Brackets are handled by the executor: {char!r}")
        if char in self._primitives:
            raise ValueError(f"Primitive already registered: {char!r}")
        self._primitives[char] = handler

    def freeze(self) -> None:
        """Freeze the registry to prevent further modifications."""
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def get_valid_keys(self) -> set:
        """Get set of all instruction characters."""
        return set(self._primitives.keys())

    def lookup(self, char: str) -> Optional[Handler]:
        """Get the handler for a character, or None if it is not an instruction."""
        return self._primitives.get(char)

    def execute(self, tape: TapeStore, char: str) -> None:
        """Execute a registered primitive against a tape.

        Args:
            tape: Tape store to operate on
            char: Instruction character

        Raises:
            KeyError: If char is not in registry
            BoundsError: If the primitive moves the cursor off the tape
        """
        if char not in self._primitives:
            raise KeyError(f"Unknown instruction: {char!r}")
        self._primitives[char](tape)


# Singleton registry instance
_registry: Optional[InstructionRegistry] = None


def get_registry() -> InstructionRegistry:
    """Get the shared instruction registry.

    The registry holds no tape state, so sharing it between executors is safe.

    Returns:
        The frozen InstructionRegistry instance
    """
    global _registry
    if _registry is None:
        _registry = InstructionRegistry()
    return _registry
