"""
Interactive shell for the Mazgamet language.

Reads one line at a time and runs it through a fresh lexer; nothing carries over
from one line to the next.

Modes:
    tokens  Print every token on the line (the default).
    parse   Parse the line and print the rendered program, or its syntax errors.

Commands:
    exit / quit   Leave the shell.
    parse-mode    Toggle between tokens and parse mode.
"""

import logging

from mazgamet.mazgamet_lexer import Lexer
from mazgamet.mazgamet_parser import Parser
from mazgamet.mazgamet_token import TokenKind

logger = logging.getLogger("mazgamet.repl")

PROMPT = ">> "
MODES = ("tokens", "parse")


def print_tokens(line: str) -> None:
    lexer = Lexer(line)
    while True:
        tok = lexer.next_token()
        if tok.kind == TokenKind.EOF:
            break
        print(repr(tok))


def print_program(line: str) -> None:
    parser = Parser(Lexer(line))
    program = parser.parse_program()
    if parser.errors:
        print("[error] >>>")
        for message in parser.errors:
            print(f"\t{message}")
        return
    print(program.render())


def start_repl(mode: str = "tokens") -> None:
    """Runs the read-print loop until `exit`, `quit`, EOF, or Ctrl-C.

    Args:
        mode (str): Starting mode, "tokens" or "parse". Defaults to "tokens".

    Raises:
        ValueError: If `mode` is not a known mode.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown REPL mode {mode!r}; expected one of {MODES}")

    print("Hello! This is the Mazgamet programming language!")
    print("Feel free to type in commands")

    while True:
        try:
            line = input(PROMPT)
            src = line.strip()
            if not src:
                continue
            if src in ("exit", "quit"):
                print("Exiting Mazgamet REPL.")
                return
            if src == "parse-mode":
                mode = "tokens" if mode == "parse" else "parse"
                print(f"[mode] >>> {mode}")
                continue

            logger.debug("REPL line in %s mode: %r", mode, line)
            if mode == "parse":
                print_program(line)
            else:
                print_tokens(line)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Mazgamet REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
