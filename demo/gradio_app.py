"""bf_repl Interactive Demo.

A Gradio web interface for running programs and inspecting the tape.

Usage:
    cd /path/to/bf_repl
    python demo/gradio_app.py

Features:
    - Write or load example programs
    - Provide text for the ',' instruction
    - Choose tape size and bounds-error policy
    - See output, final tape window and instruction trace
"""

import io
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from bf_repl import BlockState, InputSource, create_executor, run_program


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Hello World": "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.",

    "Multiply 4x4": "++++[>++++<-]>",

    "Echo Line": ",[.,]",

    "Off The Edge": "<+++>",

    "Custom": ""
}

TAPE_WINDOW = 16


# =============================================================================
# Execution Functions
# =============================================================================

def run_code(program: str, stdin_text: str, memory_size: int, abort_on_error: bool) -> tuple:
    """Execute a program and return results.

    Args:
        program: Program text
        stdin_text: Text consumed by the ',' instruction
        memory_size: Number of tape cells
        abort_on_error: Bounds errors abort the whole program

    Returns:
        Tuple of (output_text, summary_text, tape_text, trace_text)
    """
    if not program.strip():
        return "", "Error: No program provided", "", ""

    # Terminate the input like a typed line so ',' loops see a 0
    if not stdin_text.endswith("\n"):
        stdin_text += "\n"

    output = io.StringIO()
    executor = create_executor(
        memory_size=int(memory_size),
        input_source=InputSource(io.StringIO(stdin_text)),
        output_stream=output,
        abort_on_error=abort_on_error,
        trace=True,
        error_stream=output
    )

    state = run_program(executor, program, output=output)
    if state is not BlockState.CLOSED:
        return output.getvalue(), f"Error: brackets are {state.value}", "", ""

    # Format summary
    summary = executor.get_summary()
    summary_lines = [
        "EXECUTION SUMMARY",
        "=" * 40,
        f"Steps: {summary['steps']}",
        f"Cursor: {summary['cursor']}",
        f"Current cell: {summary['cell']}",
        f"Errors: {len(summary['errors'])}",
    ]
    for err in summary['errors'][:5]:
        summary_lines.append(f"  - {err}")
    summary_text = "\n".join(summary_lines)

    # Format tape window around the cursor
    cursor = summary['cursor']
    start = max(0, cursor - TAPE_WINDOW // 2)
    cells = executor.tape.state.dump_cells(start, start + TAPE_WINDOW)
    tape_lines = [
        "TAPE",
        "=" * 30,
    ]
    for offset, value in enumerate(cells):
        index = start + offset
        marker = " <" if index == cursor else ""
        tape_lines.append(f"  [{index:>4}] {value:>5}{marker}")
    tape_text = "\n".join(tape_lines)

    # Format trace
    trace = executor.trace
    trace_lines = [
        "EXECUTION TRACE",
        "=" * 60,
    ]
    for entry in trace[:200]:  # Limit to 200 entries
        line = f"{entry.step:>6}  {entry.instruction}  cursor {entry.pre_cursor} -> {entry.post_cursor}  cell {entry.pre_cell} -> {entry.post_cell}"
        if entry.error:
            line += f"  ERROR: {entry.error}"
        trace_lines.append(line)
    if summary['steps'] > 200:
        trace_lines.append(f"\n... ({summary['steps'] - 200} more steps)")
    trace_text = "\n".join(trace_lines)

    return output.getvalue(), summary_text, tape_text, trace_text


def load_example(example_name: str) -> str:
    """Load an example program."""
    return EXAMPLE_PROGRAMS.get(example_name, "")


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="bf_repl Playground", theme=gr.themes.Soft()) as demo:
        gr.Markdown("""
        # bf_repl Playground

        Eight single-character instructions over a fixed tape of signed bytes.
        A bracket pair repeats its body while the current cell is non-zero.
        """)

        with gr.Row():
            with gr.Column(scale=2):
                gr.Markdown("### Program")

                example_dropdown = gr.Dropdown(
                    choices=list(EXAMPLE_PROGRAMS.keys()),
                    value="Hello World",
                    label="Load Example"
                )

                program_input = gr.Textbox(
                    value=EXAMPLE_PROGRAMS["Hello World"],
                    label="Source Code",
                    lines=10,
                    placeholder="Enter program text here..."
                )

                stdin_input = gr.Textbox(
                    value="",
                    label="Input (read by ',')",
                    lines=3
                )

                gr.Markdown("### Settings")

                with gr.Row():
                    memory_size = gr.Slider(
                        minimum=8,
                        maximum=30000,
                        value=256,
                        step=1,
                        label="Tape Size"
                    )
                    abort_checkbox = gr.Checkbox(
                        value=False,
                        label="Abort on bounds error",
                        info="Off: only the current segment stops"
                    )

                run_button = gr.Button("Run Program", variant="primary")

            with gr.Column(scale=3):
                program_output = gr.Textbox(
                    label="Output",
                    lines=5,
                    interactive=False
                )
                with gr.Row():
                    summary_output = gr.Textbox(
                        label="Summary",
                        lines=10,
                        interactive=False
                    )
                    tape_output = gr.Textbox(
                        label="Tape",
                        lines=10,
                        interactive=False
                    )

                trace_output = gr.Textbox(
                    label="Execution Trace",
                    lines=20,
                    interactive=False
                )

        with gr.Accordion("Instruction Reference", open=False):
            gr.Markdown("""
            | Instruction | Description |
            |-------------|-------------|
            | `+` | Increment current cell (wraps 127 -> -128) |
            | `-` | Decrement current cell (wraps -128 -> 127) |
            | `>` | Move cursor right (error at end of tape) |
            | `<` | Move cursor left (error at start of tape) |
            | `.` | Output current cell as a character |
            | `,` | Read one character (newline reads as 0) |
            | `[ ... ]` | Repeat body while current cell is non-zero |

            Any other character is ignored.
            """)

        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input]
        )

        run_button.click(
            fn=run_code,
            inputs=[program_input, stdin_input, memory_size, abort_checkbox],
            outputs=[program_output, summary_output, tape_output, trace_output]
        )

    return demo


# =============================================================================
# Main
# =============================================================================

if __name__ == "__main__":
    demo = create_demo()
    demo.launch(
        share=False,
        server_name="0.0.0.0",
        server_port=7861,
        show_error=True
    )
