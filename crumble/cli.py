"""
Command line driver for Crumble.

    crumble               # interactive prompt, one expression per line
    crumble script.cr     # scan and parse a file
    crumble --tokens ...  # print the token stream instead of the tree

Exit codes follow the BSD sysexits convention: 64 for bad usage, 65 when
the input had errors, 66 when the script cannot be read.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .diagnostics import DiagnosticSink
from .lexer import scan
from .parser import AstPrinter, Parser


EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66


class Runner:
    """Runs source text through the scanner and parser and prints the result."""

    def __init__(self, sink: DiagnosticSink, show_tokens: bool = False,
                 out: Optional[TextIO] = None):
        self.sink = sink
        self.show_tokens = show_tokens
        self.out = out if out is not None else sys.stdout
        self.printer = AstPrinter()

    def run(self, source: str) -> None:
        tokens = scan(source, self.sink)
        if self.sink.had_error:
            return

        if self.show_tokens:
            for token in tokens:
                print(token, file=self.out)
            return

        expr = Parser(tokens, self.sink).parse()
        if expr is not None:
            print(self.printer.print(expr), file=self.out)

    def run_file(self, path: str) -> int:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                source = f.read()
        except OSError:
            print(f"Error reading file: {path}", file=sys.stderr)
            return EX_NOINPUT

        self.run(source)
        return EX_DATAERR if self.sink.had_error else 0

    def run_prompt(self, stdin: Optional[TextIO] = None) -> int:
        stdin = stdin if stdin is not None else sys.stdin
        while True:
            print("> ", end="", file=self.out, flush=True)
            line = stdin.readline()
            if not line:
                break

            # Each line is an independent run
            self.sink.reset()
            self.run(line.rstrip("\n"))

        return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crumble",
        description="Scan and parse Crumble expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    crumble                      # Interactive prompt
    crumble expr.cr              # Parse a file and print its tree
    crumble --tokens expr.cr     # Print the token stream
        """
    )

    parser.add_argument('script', nargs='*',
                        help='Source file to run (omit for the interactive prompt)')
    parser.add_argument('--tokens', action='store_true',
                        help='Print tokens instead of the syntax tree')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crumble command"""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    if len(args.script) > 1:
        print("Usage: crumble [script]")
        return EX_USAGE

    runner = Runner(DiagnosticSink(), show_tokens=args.tokens)

    try:
        if args.script:
            return runner.run_file(args.script[0])
        return runner.run_prompt()

    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
