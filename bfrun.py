#!/usr/bin/env python3
"""
bfrun — tapevm command-line driver

Usage:
    python bfrun.py <program.bf> [-i TEXT | -f INPUT_FILE] [--max-steps N]
                                 [--trace] [--dump] [--log-dir DIR] [--verbose]
    python bfrun.py --example hello|cat|overflow [...]

Program output bytes are written raw to stdout. Exit status:
    0  halted normally
    1  translation error, unreadable file, or aborted run
    2  internal error

Examples:
    python bfrun.py hello.bf
    python bfrun.py --example cat -i "some text"
    python bfrun.py loop.bf --max-steps 100000 --verbose
    python bfrun.py prog.bf --dump                 # instruction listing
"""

import argparse
import logging
import sys

from tapevm import __version__, translate, Machine, LogTracer, StopReason
from tapevm.errors import TranslationError
from tapevm.log_setup import setup_logging
from tapevm.programs import PROGRAMS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Run programs for the eight-symbol tape machine",
        epilog="Examples: " + ", ".join(PROGRAMS.keys()),
    )
    parser.add_argument("program", nargs="?", help="Program source file")
    parser.add_argument("-e", "--example", choices=list(PROGRAMS.keys()),
                        help="Run a built-in sample program instead of a file")
    src = parser.add_mutually_exclusive_group()
    src.add_argument("-i", "--input", help="Input text (UTF-8 encoded)")
    src.add_argument("-f", "--input-file", help="Read input bytes from a file")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Abort after N executed instructions (default: unbounded)")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction to stderr")
    parser.add_argument("--dump", action="store_true",
                        help="Print the translated instruction listing and exit")
    parser.add_argument("--log-dir", default=None,
                        help="Also write a DEBUG log file into this directory")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print run details to stderr")
    parser.add_argument("--version", action="version",
                        version=f"bfrun {__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.program is None) == (args.example is None):
        parser.error("give exactly one of a program file or --example")

    level = logging.DEBUG if args.trace else logging.INFO if args.verbose else logging.WARNING
    log = setup_logging("tapevm", console_level=level, log_dir=args.log_dir)

    # Read program + input
    try:
        if args.example:
            sample = PROGRAMS[args.example]
            source, name, input_data = sample.source, f"<{sample.name}>", sample.input
        else:
            with open(args.program, "rb") as f:
                source = f.read()
            name, input_data = args.program, b""
        if args.input is not None:
            input_data = args.input.encode("utf-8")
        elif args.input_file:
            with open(args.input_file, "rb") as f:
                input_data = f.read()
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        program = translate(source)

        if args.dump:
            print(program.dump())
            return 0

        if args.verbose:
            print(f"[bfrun] Program: {name} ({len(program)} instructions)", file=sys.stderr)
            print(f"[bfrun] Input:   {len(input_data)} bytes", file=sys.stderr)
            print(f"[bfrun] Budget:  {args.max_steps if args.max_steps is not None else 'unbounded'}",
                  file=sys.stderr)

        tracer = LogTracer() if args.trace else None
        machine = Machine(program, input_data, max_steps=args.max_steps, tracer=tracer)
        result = machine.run()

        sys.stdout.buffer.write(result.output)
        sys.stdout.flush()

        if args.verbose:
            print(f"\n[bfrun] Stop:    {result.reason.value} after {result.steps} steps",
                  file=sys.stderr)
            print(f"[bfrun] Tape:    {len(machine.tape)} cells, cursor at {machine.cursor}",
                  file=sys.stderr)

        if result.reason is not StopReason.HALT:
            print(f"\nRun aborted: {result.error}", file=sys.stderr)
            return 1

    except TranslationError as e:
        print(f"Translation error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            log.exception("internal error")
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
