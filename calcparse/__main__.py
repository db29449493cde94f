"""
Command-line entry point.

    $ python -m calcparse "3+cos4!"
    3+cos4! = 3.424179
    $ python -m calcparse --precision 2 "2^10"
    2^10 = 1024.00
"""

from __future__ import annotations
from typing import Optional, Sequence

import argparse
import sys

from calcparse import __version__
from calcparse.errors import ParsingError
from calcparse.lrparser import Lr


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calcparse",
        description="Parse and evaluate an arithmetic expression.",
    )
    parser.add_argument("expression", help="the expression to evaluate")
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        default=6,
        help="number of decimal places in the result (default: 6)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print the parser's stacks and actions at every step",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.precision < 0:
        print("error: precision must not be negative", file=sys.stderr)
        return 2

    lr = Lr(args.expression)
    lr.verbose = args.verbose
    try:
        tree = lr.run()
    except ParsingError as e:
        print("%s: %s" % (type(e).__name__, e), file=sys.stderr)
        return 1

    print("%s = %.*f" % (args.expression, args.precision, tree.value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
