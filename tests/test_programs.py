"""Integration tests for example programs."""

import io
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from bf_repl import BlockState, InputSource, create_executor, run_program


PROGRAMS_DIR = Path(__file__).parent.parent / "programs"

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def make_executor(stdin="", **kwargs):
    return create_executor(
        input_source=InputSource(io.StringIO(stdin)),
        output_stream=io.StringIO(),
        error_stream=io.StringIO(),
        **kwargs
    )


class TestHelloWorld:
    """Test the classic hello world program."""

    def test_output(self):
        executor = make_executor()
        executor.execute(HELLO_WORLD)
        assert executor.get_output() == "Hello World!\n"
        assert executor.errors == []

    def test_output_written_to_stream(self):
        executor = make_executor()
        executor.execute(HELLO_WORLD)
        assert executor.tape.output_stream.getvalue() == "Hello World!\n"


class TestEchoProgram:
    """Test ',[.,]' - echo one line of input."""

    def test_echo_line(self):
        executor = make_executor(stdin="hello\nrest")
        executor.execute(",[.,]")
        assert executor.get_output() == "hello"
        assert executor.get_cell() == 0

    def test_echo_empty_line(self):
        """A bare newline reads as 0, so the loop never runs."""
        executor = make_executor(stdin="\n")
        executor.execute(",[.,]")
        assert executor.get_output() == ""


class TestArithmeticPrograms:
    """Test small arithmetic programs."""

    def test_add_cells(self):
        """Move cell 0 onto cell 1: 2 + 5."""
        executor = make_executor()
        executor.execute("++>+++++[<+>-]<")
        assert executor.get_cell() == 7

    def test_copy_cell(self):
        """Copy cell 0 into cell 1 through a temporary in cell 2."""
        executor = make_executor()
        executor.execute("+++++[>+>+<<-]>>[<<+>>-]<<")
        assert executor.tape.state.dump_cells(0, 3) == [5, 5, 0]

    def test_print_digit(self):
        """48 + 7 prints '7'."""
        executor = make_executor()
        executor.execute("++++++[>++++++++<-]>+++++++.")
        assert executor.get_output() == "7"


class TestRunProgram:
    """Test whole-program execution."""

    def test_closed_program_runs(self):
        executor = make_executor()
        state = run_program(executor, "++++[>++++<-]>\n")
        assert state is BlockState.CLOSED
        assert executor.get_cell() == 16

    def test_multiline_program(self):
        """Newlines and comments inside a program are ignored."""
        executor = make_executor()
        program = "++++ set counter\n[ loop\n  >++++<-\n]\n>"
        assert run_program(executor, program) is BlockState.CLOSED
        assert executor.get_cell() == 16

    def test_invalid_program_not_run(self, capsys):
        executor = make_executor()
        state = run_program(executor, "+]")
        assert state is BlockState.INVALID
        assert executor.get_cell() == 0
        assert "Error! unbalanced brackets" in capsys.readouterr().out

    def test_open_program_not_run(self):
        executor = make_executor()
        output = io.StringIO()
        state = run_program(executor, "+[", output=output)
        assert state is BlockState.OPEN
        assert executor.steps == 0


class TestProgramFromFile:
    """Test loading programs from files."""

    def test_load_hello_file(self):
        program_path = PROGRAMS_DIR / "hello.bf"
        if program_path.exists():
            executor = make_executor()
            run_program(executor, program_path.read_text())
            assert executor.get_output() == "Hello World!\n"

    def test_load_sixteen_file(self):
        program_path = PROGRAMS_DIR / "sixteen.bf"
        if program_path.exists():
            executor = make_executor()
            run_program(executor, program_path.read_text())
            assert executor.get_cursor() == 1
            assert executor.get_cell() == 16

    def test_load_cat_file(self):
        program_path = PROGRAMS_DIR / "cat.bf"
        if program_path.exists():
            executor = make_executor(stdin="abc\n")
            run_program(executor, program_path.read_text())
            assert executor.get_output() == "abc"
