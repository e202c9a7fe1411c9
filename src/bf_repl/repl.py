"""Repl: the interactive read-validate-execute loop.

Lines are read with a ">>> " prompt. While the text typed so far leaves
a block open, more lines are read with a "... " prompt and appended.
Once the text is closed it goes to the executor; text with a closing
bracket that has no opener is reported and thrown away.
"""

import sys
from typing import Optional, TextIO

from . import __version__
from .balance import BlockState, classify
from .executor import BlockExecutor
from .source import InputSource


PROMPT = ">>> "
CONTINUATION_PROMPT = "... "
BANNER = f"BrainF**k {__version__}"


class Repl:
    """Interactive front end around a BlockExecutor.

    Attributes:
        executor: Executor that runs complete commands
        source: Where command lines are read from
        output: Stream for the banner, prompts and bracket errors
        show_banner: Print the banner when run() starts
    """

    def __init__(
        self,
        executor: BlockExecutor,
        source: Optional[InputSource] = None,
        output: Optional[TextIO] = None,
        show_banner: bool = True
    ):
        self.executor = executor
        self.source = source if source is not None else InputSource()
        self.output = output
        self.show_banner = show_banner
        self.commands_run = 0

    def _write(self, text: str) -> None:
        stream = self.output if self.output is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def read_command(self) -> Optional[str]:
        """Read one command, prompting for continuation lines while a block is open.

        Empty lines at the main prompt are skipped.

        Returns:
            Command text (CLOSED or INVALID), or None at end of input
        """
        line = ""
        while line == "":
            self._write(PROMPT)
            line = self.source.read_line()
            if line is None:
                return None

        command = line
        while classify(command) is BlockState.OPEN:
            self._write(CONTINUATION_PROMPT)
            line = self.source.read_line()
            if line is None:
                return None
            command += line

        return command

    def run_command(self, command: str) -> BlockState:
        """Validate and execute one command.

        Args:
            command: Command text

        Returns:
            BlockState of the command; only CLOSED text is executed
        """
        state = classify(command)
        if state is BlockState.INVALID:
            self._write("Error! unbalanced brackets\n")
            return state
        if state is BlockState.OPEN:
            return state

        self.executor.execute(command)
        self.commands_run += 1
        return state

    def run(self) -> None:
        """Run the loop until end of input."""
        if self.show_banner:
            self._write(BANNER + "\n")

        while True:
            try:
                command = self.read_command()
            except KeyboardInterrupt:
                self._write("\nKeyboardInterrupt\n")
                continue
            if command is None:
                self._write("\n")
                return
            self.run_command(command)


def run_program(executor: BlockExecutor, text: str, output: Optional[TextIO] = None) -> BlockState:
    """Execute a whole program at once.

    Newlines are just ignored characters, so a program file can be passed
    in as read.

    Args:
        executor: Executor to run on
        text: Program text
        output: Stream for the bracket error message (stdout if None)

    Returns:
        BlockState of the program text; OPEN and INVALID are not executed
    """
    state = classify(text)
    if state is BlockState.CLOSED:
        executor.execute(text)
    else:
        print("Error! unbalanced brackets", file=output)
    return state
