from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .api import CompileOptions, compile_file
from .engine import Engine, RunOptions
from .errors import TarpitError

USAGE = (
    "Usage: tarpiter <file> [options]\n"
    "Options:\n"
    " -h, --help     Show this help message.\n"
    " -d, --debug    Run the program in debug mode.\n"
    " -t, --timing   Report compile and run times on stderr.\n"
    "     --no-jit   Interpret tick by tick even without --debug.\n"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tarpiter", add_help=False)
    parser.add_argument("file", nargs="?")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument("-t", "--timing", action="store_true")
    parser.add_argument("--no-jit", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args, _ = build_parser().parse_known_args(argv)

    if args.help:
        print(USAGE)
        return 0
    if not args.file:
        print("ERROR: No file or flag provided.")
        print(USAGE)
        return 1

    try:
        start = time.perf_counter()
        program = compile_file(args.file, options=CompileOptions(debug=args.debug))
        compiled = time.perf_counter()
    except TarpitError as e:
        print(e, file=sys.stderr)
        return 1

    if args.timing:
        print(f"Compilation took {(compiled - start) * 1000:.2f} ms", file=sys.stderr)

    engine = Engine(program, options=RunOptions(jit=not args.no_jit))
    start = time.perf_counter()
    engine.run()
    end = time.perf_counter()

    if args.timing:
        print(f"Execution took {(end - start) * 1000:.2f} ms", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
