"""
Mazgamet CLI Entrypoint.

This module provides the command-line interface for the Mazgamet front end.

Features:
    - Read source from files or inline strings.
    - Print the token stream, the rendered syntax tree, or the tree as JSON.
    - Report syntax errors on stderr with a non-zero exit status.
    - Launch the interactive REPL.
    - Route diagnostic logging to a timestamped file.

Example usage:
    mazgamet program.mz
    mazgamet -s "let x = 5; add(x, 2 * 3);" --json
    mazgamet program.mz --tokens --log-level trace
    mazgamet --repl --parse

Configuration:
    --log-level falls back to the MAZGAMET_LOG_LEVEL environment variable.
    Logging stays off when neither is set.

Functions:
    run_mazgamet(source: str, is_string: bool = False, output: str = "render") -> int:
        Runs lex → parse → print and returns the exit status.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import os
import sys

from mazgamet.mazgamet_lexer import Lexer
from mazgamet.mazgamet_log import init_logger
from mazgamet.mazgamet_parser import Parser
from mazgamet.mazgamet_token import TokenKind

LOG_LEVEL_ENV = "MAZGAMET_LOG_LEVEL"
OUTPUTS = ("tokens", "render", "json")


def run_mazgamet(source: str, is_string: bool = False, output: str = "render") -> int:
    """
    Run the Mazgamet front end over a file or a source string.

    Args:
        source (str): Source code, or a path to a source file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        output (str): "tokens", "render" or "json". Defaults to "render".

    Returns:
        int: 0 on success, 1 if the parser recorded syntax errors.

    Raises:
        ValueError: If `output` is not a supported format.
        OSError: If the source file cannot be read.
    """
    if output not in OUTPUTS:
        raise ValueError(f"Unsupported output {output!r}; expected one of {OUTPUTS}")

    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if output == "tokens":
        lexer = Lexer(source)
        while True:
            tok = lexer.next_token()
            if tok.kind == TokenKind.EOF:
                break
            print(f"{tok.line}:{tok.col}\t{tok.kind.name}\t{tok.literal}")
        return 0

    parser = Parser(Lexer(source))
    program = parser.parse_program()

    if parser.errors:
        print(f"parser has {len(parser.errors)} errors", file=sys.stderr)
        for message in parser.errors:
            print(f"\t{message}", file=sys.stderr)
        return 1

    if output == "json":
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program.render())
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Mazgamet CLI.

    Launches the REPL when no source is given or `--repl` is passed; otherwise
    runs the front end over the source and returns its exit status.
    """
    parser = argparse.ArgumentParser(prog="mazgamet")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    out_group = parser.add_mutually_exclusive_group()
    out_group.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the tree"
    )
    out_group.add_argument(
        "--json", action="store_true", help="Print the syntax tree as JSON"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV),
        help=f"Diagnostic log level: trace, debug, info, ... (env: {LOG_LEVEL_ENV})",
    )
    parser.add_argument(
        "--log-dir", default=".", help="Directory for the log file (default: .)"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch the interactive REPL"
    )
    parser.add_argument(
        "--parse", action="store_true", help="Start the REPL in parse mode"
    )

    args = parser.parse_args(argv)

    if args.log_level:
        try:
            init_logger(args.log_level, args.log_dir)
        except ValueError as e:
            parser.error(str(e))

    if args.repl or args.source is None:
        from mazgamet.mazgamet_repl import start_repl

        start_repl(mode="parse" if args.parse else "tokens")
        return 0

    output = "tokens" if args.tokens else "json" if args.json else "render"
    try:
        return run_mazgamet(args.source, is_string=args.string, output=output)
    except OSError as e:
        print(f"mazgamet: cannot read {args.source}: {e.strerror}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
