"""
Monkey CLI
==========
Command-line entry point for the Monkey interpreter.

Usage:
    # Interactive session (default)
    monkey
    monkey repl --prompt "monkey> " --no-banner

    # Evaluate a file or an inline program
    monkey run examples/closures.monkey
    monkey run -c "let add = fn(a, b) { a + b }; add(2, 3)"

    # Inspect the front end
    monkey tokens -c "let x = 5;"
    monkey parse -c "a + b * c"
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from .config import Config, LOG_LEVELS
from .environment import Environment
from .errors import ParseError, EvaluatorError
from .evaluator import Evaluator
from .lexer import Lexer
from .objects import ObjectType
from .parser import parse
from .repl import run_repl, run_line

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def read_source(args) -> str | None:
    """Return the program text from -c or FILE, or None after reporting why."""
    code = getattr(args, "code", None)
    if code is not None:
        return code

    path = getattr(args, "file", None)
    if not path:
        print("Error: give a FILE or -c CODE")
        return None
    if not os.path.exists(path):
        print(f"Error: File not found: {path}")
        return None

    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def configure_logging(config: Config):
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_repl(args, config: Config) -> int:
    """Start the interactive loop."""
    run_repl(config)
    return 0


def cmd_run(args, config: Config) -> int:
    """Evaluate a program and print its result."""
    source = read_source(args)
    if source is None:
        return 1

    try:
        result = run_line(source, Environment(), Evaluator())
    except ParseError as e:
        print(f"Parse Error: {e}")
        return 1
    except EvaluatorError as e:
        print(f"Error: {e}")
        return 1
    except RecursionError:
        print("Error: maximum recursion depth exceeded")
        return 1

    if result is not None and result.type != ObjectType.NULL:
        print(result.inspect())
    return 0


def cmd_tokens(args, config: Config) -> int:
    """Print the token stream, one token per line."""
    source = read_source(args)
    if source is None:
        return 1

    for token in Lexer(source).tokenize():
        print(f"{token.line}:{token.col}\t{token.type.name}\t{token.literal!r}")
    return 0


def cmd_parse(args, config: Config) -> int:
    """Print the canonical rendering of the parsed program."""
    source = read_source(args)
    if source is None:
        return 1

    try:
        program = parse(source)
    except ParseError as e:
        print(f"Parse Error: {e}")
        return 1

    print(program.description())
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey: a tree-walking interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  monkey\n"
            "  monkey run examples/closures.monkey\n"
            "  monkey run -c \"len([1, 2, 3])\"\n"
            "  monkey parse -c \"a + b * c\"\n"
        ),
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None,
                        help="Logging level (default: $MONKEY_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # repl
    p_repl = subparsers.add_parser("repl", help="Start an interactive session")
    p_repl.add_argument("--prompt", default=None, help="Input prompt (default: '>> ')")
    p_repl.add_argument("--no-banner", action="store_true", help="Don't print the banner")

    # run / tokens / parse share their input arguments
    for name, help_text in (
        ("run", "Evaluate a program and print the result"),
        ("tokens", "Print the token stream"),
        ("parse", "Print the canonical parsed form"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("file", nargs="?", help="Source file")
        p.add_argument("-c", dest="code", default=None, help="Program text")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env().merged(
            log_level=args.log_level,
            prompt=getattr(args, "prompt", None),
            show_banner=False if getattr(args, "no_banner", False) else None,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    configure_logging(config)
    logger.debug("config: %s", config)

    commands = {
        "repl": cmd_repl,
        "run": cmd_run,
        "tokens": cmd_tokens,
        "parse": cmd_parse,
    }
    command = commands.get(args.command or "repl")
    return command(args, config)


if __name__ == "__main__":
    sys.exit(main())
