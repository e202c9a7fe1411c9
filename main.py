#!/usr/bin/env python3
"""bf_repl Command Line Interface.

Start the interactive interpreter, or run a program from a file or the
command line.

Usage:
    python main.py
    python main.py --program programs/hello.bf
    python main.py --inline "++++[>++++<-]>." --trace
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from bf_repl import BlockState, InputSource, Repl, create_executor, run_program
from bf_repl.tape import DEFAULT_MEMORY_SIZE


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="bf_repl: interactive tape-language interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Interactive session
    python main.py

    # Run a program file, reading ',' input from stdin
    echo hi | python main.py --program programs/cat.bf

    # Run inline code with a full instruction trace
    python main.py --inline "++++[>++++<-]>" --trace

    # Stop the whole command at the first bounds error
    python main.py --abort-on-error
        """
    )

    parser.add_argument(
        "--program", "-p",
        type=str,
        help="Path to program file"
    )
    parser.add_argument(
        "--inline", "-i",
        type=str,
        help="Inline program text"
    )
    parser.add_argument(
        "--memory-size",
        type=int,
        default=DEFAULT_MEMORY_SIZE,
        help=f"Number of tape cells. Default: {DEFAULT_MEMORY_SIZE}"
    )
    parser.add_argument(
        "--abort-on-error",
        action="store_true",
        help="A bounds error aborts the whole command, not only the current segment"
    )
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Print full execution trace after running a program"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="No banner and no summary"
    )

    args = parser.parse_args(argv)

    if args.program and args.inline:
        parser.error("--program and --inline are mutually exclusive")

    if args.memory_size <= 0:
        parser.error("--memory-size must be positive")

    source = InputSource(sys.stdin)
    executor = create_executor(
        memory_size=args.memory_size,
        input_source=source,
        output_stream=sys.stdout,
        abort_on_error=args.abort_on_error,
        trace=args.trace
    )

    # Interactive session
    if not args.program and args.inline is None:
        repl = Repl(executor, source=source, show_banner=not args.quiet)
        repl.run()
        return 0

    if args.program:
        program_path = Path(args.program)
        if not program_path.exists():
            print(f"Error: Program file not found: {args.program}")
            return 1
        text = program_path.read_text()
    else:
        text = args.inline

    state = run_program(executor, text)
    if state is not BlockState.CLOSED:
        return 1

    if args.trace:
        print()
        executor.print_trace()
    elif not args.quiet:
        summary = executor.get_summary()
        print()
        print(f"Steps: {summary['steps']}")
        print(f"Cursor: {summary['cursor']}")
        print(f"Cell: {summary['cell']}")
        if summary['errors']:
            print(f"Errors: {summary['errors']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
