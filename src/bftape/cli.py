"""bftape command line interface.

Usage:
    bftape programs/hello.bf
    bftape --inline "+++++++[>++++++<-]>." --summary
    bftape programs/loop.bf --trace --max-steps 5000
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .engine import Engine
from .errors import ProgramLoadError, StepLimitExceeded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bftape",
        description="Run a tape-based bracket language program",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Run a program file
    bftape programs/hello.bf

    # Run inline code and print a summary
    bftape --inline "+++++." --summary

    # Print the full execution trace to stderr
    bftape programs/hello.bf --trace
        """
    )

    parser.add_argument(
        "program",
        nargs="?",
        help="Path to program file"
    )
    parser.add_argument(
        "--inline", "-i",
        type=str,
        help="Inline program text"
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Stop with an error after this many steps. Default: unbounded"
    )
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Print full execution trace to stderr"
    )
    parser.add_argument(
        "--summary", "-s",
        action="store_true",
        help="Print a run summary to stderr"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def read_program(path: str) -> str:
    """Read a program file as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    return Path(path).read_bytes().decode("utf-8")


def main(argv: Optional[List[str]] = None, stdout=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.program and args.inline is None:
        parser.error("Either a program file or --inline is required")

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            stream=sys.stderr
        )

    if args.inline is not None:
        source = args.inline
    else:
        try:
            source = read_program(args.program)
        except FileNotFoundError:
            print(f"Error: Program file not found: {args.program}", file=sys.stderr)
            return 1
        except UnicodeDecodeError:
            print("Error: Non-unicode program.", file=sys.stderr)
            return 1

    engine = Engine(
        output=stdout if stdout is not None else sys.stdout.buffer,
        max_steps=args.max_steps,
        trace=args.trace
    )

    try:
        engine.load_program(source)
    except ProgramLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    status = 0
    try:
        engine.run()
    except StepLimitExceeded as e:
        print(f"Execution error: {e}", file=sys.stderr)
        status = 1

    if args.trace:
        engine.print_trace(file=sys.stderr)
    if args.summary:
        summary = engine.get_summary()
        print(file=sys.stderr)
        print(f"Steps: {summary['steps']}", file=sys.stderr)
        print(f"Halt: {summary['halt_reason']}", file=sys.stderr)
        print(f"PC: {summary['pc']}", file=sys.stderr)
        print(f"PTR: {summary['ptr']}", file=sys.stderr)
        print(f"Output bytes: {len(summary['output'])}", file=sys.stderr)

    return status


if __name__ == "__main__":
    sys.exit(main())
