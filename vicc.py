#!/usr/bin/env python3
"""
vicc: Vic assembler and emulator CLI

Usage:
    python vicc.py check     <prog.vic|prog.vicbin> [--statements]
    python vicc.py assemble  <prog.vic> [-o prog.vicbin] [--listing]
    python vicc.py run       <prog.vic|prog.vicbin> [--input 5 7] [--max-iterations N] [--trace]
    python vicc.py highlight <prog.vic> LINE COL
    python vicc.py format    <prog.vic|prog.vicbin> [--tab-size 4] [--tabs] [-o out]

Input type is auto-detected from the file extension:
    .vicbin / .bin  → binary program (one value per line)
    anything else   → Vic assembly

Diagnostics are printed as ``file:line:col: error: message`` with 1-based
line and column numbers.

Examples:
    python vicc.py assemble sum.vic -o sum.vicbin
    python vicc.py run sum.vic --input 3 4
    python vicc.py run sum.vicbin --input 3 4 --trace -v
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.logging import RichHandler

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from vic_compiler import (
    Assembler, FormattingOptions, SrcError, SrcPos, __version__, compile_program,
    format_bin_line, format_source, highlight_symbol, parse_binary_program,
    parse_statements, split_source_lines,
)
from vic_emulator import EmulatorError, ProgramLoadError, StopReason, VicEmulator
from vic_emulator.emu import NUM_ITERATIONS_FOR_REAL_TIME

log = logging.getLogger("vicc")

BINARY_EXTENSIONS = ('.vicbin', '.bin')


def setup_logging(verbose: int = 0, quiet: bool = False, log_file: Optional[str] = None):
    """Console logging through rich, plus an optional plain-text log file."""
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console = RichHandler(
        level=level,
        show_time=False,
        show_path=verbose > 1,
        markup=False,
        rich_tracebacks=True,
    )
    handlers: List[logging.Handler] = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        handlers.append(fh)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────

def is_binary_file(path: str, force_binary: bool = False) -> bool:
    return force_binary or os.path.splitext(path)[1].lower() in BINARY_EXTENSIONS


def read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def print_diagnostics(path: str, errors: List[SrcError]):
    for e in errors:
        loc = e.src_loc
        print(f"{path}:{loc.line + 1}:{loc.start_col + 1}: error: {e.message}", file=sys.stderr)


def build_program(path: str, source: str, binary: bool) -> Optional[List[int]]:
    """Parse (and assemble) a source file. Prints diagnostics on failure."""
    if binary:
        result = parse_binary_program(source)
        if not result.is_ok():
            print_diagnostics(path, result.error)
            return None
        return result.value

    compiled = compile_program(source).program
    if not compiled.is_ok():
        print_diagnostics(path, compiled.error)
        return None
    return compiled.value


# ──────────────────────────────────────────────
# Commands
# ──────────────────────────────────────────────

def cmd_check(args) -> int:
    source = read_source(args.input)
    binary = is_binary_file(args.input, args.binary)

    if args.statements and not binary:
        for stmt in parse_statements(source).statements:
            print(stmt)

    program = build_program(args.input, source, binary)
    if program is None:
        return 1
    log.info("%s: OK, %d values", args.input, len(program))
    return 0


def cmd_assemble(args) -> int:
    if is_binary_file(args.input, args.binary):
        log.error("%s is already a binary program", args.input)
        return 1

    source = read_source(args.input)
    program = build_program(args.input, source, binary=False)
    if program is None:
        return 1

    if args.listing:
        asm = Assembler()
        asm.assemble(parse_statements(source).statements)
        text = asm.get_listing()
    else:
        text = "\n".join(str(v) for v in program)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
            if not text.endswith("\n"):
                f.write("\n")
        log.info("Output: %s (%d values)", args.output, len(program))
    else:
        print(text)
    return 0


def cmd_run(args) -> int:
    source = read_source(args.input)
    program = build_program(args.input, source, is_binary_file(args.input, args.binary))
    if program is None:
        return 1

    emu = VicEmulator(trace=args.trace)
    emu.load(program, input_values=args.input_values)
    log.info("Loaded %d values, input %s", len(program), args.input_values)

    reason = emu.run(args.max_iterations)

    for line in emu.trace_output:
        print(line, file=sys.stderr)
    for value in emu.output:
        print(value)

    if args.dump:
        for row in emu.machine.memory.dump():
            print(row, file=sys.stderr)

    if reason is StopReason.STOP:
        log.info("STOP at PC=%d", emu.machine.program_counter)
        return 0
    if reason is StopReason.NO_INPUT:
        log.error("No input: READ at PC=%d with the input stream exhausted",
                  emu.machine.program_counter)
        return 3
    log.error("Program still running after %d iterations", args.max_iterations)
    return 4


def cmd_highlight(args) -> int:
    parsed = parse_statements(read_source(args.input))
    # Positions on the command line are 1-based, like the diagnostics.
    spans = highlight_symbol(parsed.statements, SrcPos(args.line - 1, args.col - 1))
    for loc in spans:
        print(f"{args.input}:{loc.line + 1}:{loc.start_col + 1}-{loc.end_col + 1}")
    return 0 if spans else 1


def cmd_format(args) -> int:
    source = read_source(args.input)
    if is_binary_file(args.input, args.binary):
        text = "\n".join(format_bin_line(line) for line in split_source_lines(source))
    else:
        options = FormattingOptions(tab_size=args.tab_size, insert_spaces=not args.tabs)
        text = format_source(source, options)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        sys.stdout.write(text)
    return 0


# ──────────────────────────────────────────────
# Argument parsing
# ──────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vicc",
        description="Vic computer assembler and emulator",
    )
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only report errors")
    parser.add_argument("--log-file", help="Write a debug log to this file")
    parser.add_argument("--version", action="version", version=f"vicc {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_input(p):
        p.add_argument("input", help="Vic assembly or binary program")
        p.add_argument("--binary", action="store_true",
                       help="Treat the input as a binary program regardless of extension")

    p = sub.add_parser("check", help="Report diagnostics without producing output")
    add_input(p)
    p.add_argument("--statements", action="store_true",
                   help="Dump parsed statements (debug)")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("assemble", help="Assemble to a binary program")
    add_input(p)
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument("--listing", action="store_true",
                   help="Write an address/code/source listing instead")
    p.set_defaults(func=cmd_assemble)

    p = sub.add_parser("run", help="Assemble (if needed) and run a program")
    add_input(p)
    p.add_argument("--input", dest="input_values", type=int, nargs="*", default=[],
                   metavar="VALUE", help="Input stream values")
    p.add_argument("--max-iterations", type=int, default=NUM_ITERATIONS_FOR_REAL_TIME,
                   help=f"Fetch/execute budget (default: {NUM_ITERATIONS_FOR_REAL_TIME})")
    p.add_argument("--trace", action="store_true",
                   help="Print every executed instruction to stderr")
    p.add_argument("--dump", action="store_true",
                   help="Print final memory contents to stderr")
    p.set_defaults(func=cmd_run)

    p = sub.add_parser("highlight", help="Show every occurrence of the symbol at LINE:COL")
    p.add_argument("input", help="Vic assembly program")
    p.add_argument("line", type=int, help="1-based line")
    p.add_argument("col", type=int, help="1-based column")
    p.set_defaults(func=cmd_highlight)

    p = sub.add_parser("format", help="Reformat a source file")
    add_input(p)
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument("--tab-size", type=int, default=4)
    p.add_argument("--tabs", action="store_true", help="Indent with tabs")
    p.set_defaults(func=cmd_format)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet, args.log_file)

    try:
        return args.func(args)
    except FileNotFoundError:
        log.error("File not found: %s", args.input)
        return 1
    except OSError as e:
        log.error("Error reading %s: %s", args.input, e)
        return 1
    except ProgramLoadError as e:
        log.error("Cannot load program: %s", e)
        return 1
    except EmulatorError as e:
        log.error("%s", e)
        return 1
    except KeyboardInterrupt:
        log.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
