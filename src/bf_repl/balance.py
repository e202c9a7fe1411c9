"""Bracket balance checks over raw command text.

Both scans walk the text left to right with a nesting counter that goes
up on "[" and down on "]". They are independent passes and never build a
tree: the executor calls them again each time it meets a block.
"""

from enum import Enum
from typing import Optional

from .registry import OPEN_BRACKET, CLOSE_BRACKET


class BlockState(Enum):
    """Bracket nesting state of a piece of command text.

    CLOSED: every opened block is closed (also text with no brackets)
    OPEN: at least one block is still waiting for its closing bracket
    INVALID: a closing bracket appears before its opener
    """
    CLOSED = "closed"
    OPEN = "open"
    INVALID = "invalid"


def has_block(text: str) -> bool:
    return OPEN_BRACKET in text


def classify(text: str) -> BlockState:
    """Classify the bracket nesting of text.

    Scanning stops at the first closing bracket that takes the counter
    below zero, so anything after it does not matter.

    Args:
        text: Command text, possibly incomplete

    Returns:
        BlockState for the text
    """
    balance = 0
    for char in text:
        if char == OPEN_BRACKET:
            balance += 1
        elif char == CLOSE_BRACKET:
            balance -= 1
            if balance < 0:
                return BlockState.INVALID

    return BlockState.OPEN if balance > 0 else BlockState.CLOSED


def find_matching_close(text: str) -> Optional[int]:
    """Find the bracket that closes the first opening bracket in text.

    Args:
        text: Command text containing at least one opening bracket

    Returns:
        Index of the matching closing bracket, or None if there is none
    """
    balance = 0
    for index, char in enumerate(text):
        if char == OPEN_BRACKET:
            balance += 1
        elif char == CLOSE_BRACKET:
            balance -= 1
            if balance == 0:
                return index
    return None


class UnbalancedBrackets(ValueError):
    """Command text has a closing bracket without an opener, or an unclosed block."""

    def __init__(self, state: BlockState = BlockState.INVALID):
        self.state = state
        super().__init__("unbalanced brackets")
