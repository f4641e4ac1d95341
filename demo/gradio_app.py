"""bftape Interactive Demo.

A Gradio web interface for running and inspecting bftape programs.

Usage:
    cd /path/to/bftape
    python demo/gradio_app.py

Features:
    - Write or load example programs
    - See program output as text and raw bytes
    - Step-by-step execution trace
    - Inspect the first tape cells after the run
"""

import io
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import gradio as gr
from bftape import Engine, ProgramLoadError, StepLimitExceeded


# =============================================================================
# Example Programs
# =============================================================================

EXAMPLE_PROGRAMS = {
    "Hello World": """++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]
>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.""",

    "Add 2+3": """++       cell 0 = 2
>+++     cell 1 = 3
[-<+>]   move cell 1 into cell 0
<.       write 5""",

    "Byte wrap": """-        cell 0 wraps to 255
.""",

    "Pointer underflow": """+++++.   write 5
<        ptr wraps far past the tape and the run stops
.        never executed""",

    "Custom": ""
}

TAPE_PREVIEW_CELLS = 16
TRACE_PREVIEW_ENTRIES = 200


# =============================================================================
# Execution Functions
# =============================================================================

def run_program(program: str, max_steps: int) -> tuple:
    """Execute a program and return results.

    Args:
        program: Program source, comments allowed
        max_steps: Maximum execution steps

    Returns:
        Tuple of (summary_text, output_text, trace_text, tape_text)
    """
    if not program.strip():
        return "Error: No program provided", "", "", ""

    engine = Engine(output=io.BytesIO(), max_steps=int(max_steps), trace=True)

    try:
        engine.load_program(program)
    except ProgramLoadError as e:
        return f"Error: {e}", "", "", ""

    try:
        engine.run()
    except StepLimitExceeded as e:
        error_msg = str(e)
    else:
        error_msg = None

    # Format summary
    summary = engine.get_summary()
    summary_lines = [
        "EXECUTION SUMMARY",
        "=" * 40,
        f"Steps: {summary['steps']}",
        f"Halt: {summary['halt_reason']}",
        f"PC: {summary['pc']}",
        f"PTR: {summary['ptr']}",
        f"Output bytes: {len(summary['output'])}",
    ]
    if error_msg:
        summary_lines.append(f"\nRuntime: {error_msg}")
    summary_text = "\n".join(summary_lines)

    # Format output
    output = summary['output']
    output_text = output.decode("latin-1")
    if output:
        output_text += "\n\nBytes: " + " ".join(str(b) for b in output)

    # Format trace
    trace = engine.trace
    trace_lines = [
        "EXECUTION TRACE",
        "=" * 60,
    ]
    for entry in trace[:TRACE_PREVIEW_ENTRIES]:
        line = f"[{entry.step}] PC={entry.pc} '{entry.symbol}' PTR={entry.ptr_after}"
        if entry.cell_after is not None:
            line += f" CELL={entry.cell_after}"
        if entry.output is not None:
            line += f" OUT={entry.output}"
        trace_lines.append(line)
    if len(trace) > TRACE_PREVIEW_ENTRIES:
        trace_lines.append(f"\n... ({len(trace) - TRACE_PREVIEW_ENTRIES} more entries)")
    trace_text = "\n".join(trace_lines)

    # Format tape
    tape = engine.get_tape(0, TAPE_PREVIEW_CELLS)
    tape_lines = [
        f"TAPE (first {TAPE_PREVIEW_CELLS} cells)",
        "=" * 30,
    ]
    for index, value in enumerate(tape):
        marker = " <" if index == summary['ptr'] else ""
        tape_lines.append(f"  [{index:>2}] {value:>3}{marker}")
    tape_text = "\n".join(tape_lines)

    return summary_text, output_text, trace_text, tape_text


def load_example(example_name: str) -> str:
    """Load an example program."""
    return EXAMPLE_PROGRAMS.get(example_name, "")


# =============================================================================
# Gradio Interface
# =============================================================================

def create_demo():
    """Create and return the Gradio demo interface."""

    with gr.Blocks(title="bftape Demo", theme=gr.themes.Soft()) as demo:
        gr.Markdown("""
        # bftape: Tape Interpreter

        Runs programs over a 30,000-cell byte tape. Any character outside
        `+ - < > [ ] .` is a comment.

        **Pipeline**: `cleanup -> decode -> jump table -> fetch -> dispatch -> tape`
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
                    lines=15,
                    placeholder="Enter program here..."
                )

                gr.Markdown("### Settings")

                max_steps = gr.Slider(
                    minimum=100,
                    maximum=1000000,
                    value=100000,
                    step=100,
                    label="Max Steps"
                )

                run_button = gr.Button("Run Program", variant="primary")

            with gr.Column(scale=3):
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

                program_output = gr.Textbox(
                    label="Output",
                    lines=4,
                    interactive=False
                )

                trace_output = gr.Textbox(
                    label="Execution Trace",
                    lines=20,
                    interactive=False
                )

        with gr.Accordion("Instruction Reference", open=False):
            gr.Markdown("""
            | Symbol | Description |
            |--------|-------------|
            | `+` | Increment current cell (255 wraps to 0) |
            | `-` | Decrement current cell (0 wraps to 255) |
            | `>` | Move data pointer right |
            | `<` | Move data pointer left; left of cell 0 ends the run |
            | `.` | Write current cell as one byte |
            | `[` | Jump past matching `]` if current cell is 0 |
            | `]` | Jump back to matching `[` if current cell is not 0 |

            **Tape**: 30,000 byte cells, all zero at start
            **Halting**: the run ends when the program is exhausted or the
            data pointer leaves the tape
            """)

        example_dropdown.change(
            fn=load_example,
            inputs=[example_dropdown],
            outputs=[program_input]
        )

        run_button.click(
            fn=run_program,
            inputs=[program_input, max_steps],
            outputs=[summary_output, program_output, trace_output, tape_output]
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
