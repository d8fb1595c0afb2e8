"""
stackvm — command-line driver

Usage:
    stackvm [hello|count|overflow] [--text TEXT] [--limit N] [--trace]
            [--max-steps N] [--listing] [--verbose] [--log-file PATH]
            [--version]

Runs one of the hand-assembled sample programs. Program output goes to
stdout; trace, listing and diagnostics go to stderr.

Exit status:
    0  halted normally
    1  execution fault (overflow, underflow, division by zero, bad call id)
    2  --max-steps budget exhausted

Examples:
    stackvm                          # Hello, World!
    stackvm hello --text "Hi\\n"
    stackvm count --limit 42 --trace
    stackvm overflow                 # reports StackOverflow, exit 1
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .log_setup import setup_logging
from .samples import SAMPLES, hello_program, count_program
from .vm import StackVM, StopReason

log = logging.getLogger(__name__)


def parse_byte_arg(value: str) -> int:
    """Parse a byte argument that may be hex (0x...), $ prefix, or decimal."""
    value = value.strip()
    try:
        if value.lower().startswith("0x"):
            result = int(value, 16)
        elif value.startswith("$"):
            result = int(value[1:], 16)
        else:
            result = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not 0 <= result <= 0xFF:
        raise argparse.ArgumentTypeError(f"must be 0..255, got {result}")
    return result


def parse_positive_int(value: str) -> int:
    """Parse a step budget: a decimal integer of at least 1."""
    try:
        result = int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if result < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {result}")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackvm",
        description="Minimal byte-stack virtual machine",
        epilog="Samples: " + ", ".join(SAMPLES.keys()),
    )
    parser.add_argument("sample", nargs="?", default="hello",
                        choices=list(SAMPLES.keys()),
                        help="Sample program to run (default: hello)")
    parser.add_argument("--text", default=None,
                        help="Text for the hello sample (backslash escapes allowed)")
    parser.add_argument("--limit", type=parse_byte_arg, default=10,
                        help="Loop bound for the count sample (default: 10)")
    parser.add_argument("--trace", action="store_true",
                        help="Print an instruction/state trace to stderr")
    parser.add_argument("--max-steps", type=parse_positive_int, default=None,
                        help="Stop after N instructions (default: unlimited)")
    parser.add_argument("--listing", action="store_true",
                        help="Print the program listing to stderr before running")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log execution details to stderr")
    parser.add_argument("--log-file", default=None,
                        help="Write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"stackvm {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    if args.sample == "hello":
        if args.text is None:
            program = hello_program()
        else:
            try:
                text = args.text.encode("latin-1", "backslashreplace").decode("unicode_escape")
                program = hello_program(text)
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
    elif args.sample == "count":
        program = count_program(args.limit)
    else:
        program = SAMPLES[args.sample]()

    if args.listing:
        print(program.listing(), file=sys.stderr)

    log.info("running sample %r (%d instructions)", args.sample, len(program))

    vm = StackVM()
    result = vm.run(program, trace=args.trace, max_steps=args.max_steps)

    if args.trace:
        print(vm.get_trace(), file=sys.stderr)

    if result.reason is StopReason.FAULT:
        print(f"Fault: {result.fault.kind}: {result.fault}", file=sys.stderr)
        return 1
    if result.reason is StopReason.TIMEOUT:
        print(f"Stopped after {result.steps} steps (--max-steps)", file=sys.stderr)
        return 2

    log.info("halted after %d steps", result.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
