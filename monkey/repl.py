"""
Monkey REPL
===========
Interactive Read-Eval-Print Loop. One Environment lives for the whole
session, so bindings made on one line are visible on the next.
"""
from typing import Callable

from .ast_nodes import LetStatement
from .builtins import describe_all
from .config import Config
from .environment import Environment
from .errors import ParseError, EvaluatorError
from .evaluator import Evaluator
from .objects import Object
from .parser import parse


BANNER = r"""
   .--.  .-'     '-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-'''''''-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
        '._ '-=-' _.'

  Monkey programming language
  Type 'help' for the built-ins, 'exit' or Ctrl+D to quit
"""

HELP_TEXT = """
Statements:
  let x = 5;                 bind a name
  fn(a, b) {{ a + b }}         function literal (closures capture scope)
  if (x > 1) {{ 1 }} else {{ 2 }}
  return x;

Built-ins:
{builtins}

Commands: help, env, clear, exit
"""


def run_line(source: str, env: Environment, evaluator: Evaluator) -> Object | None:
    """Parse and evaluate `source` in `env`.

    Returns None when the program ends in a `let`, which has nothing to show.
    Raises ParseError / EvaluatorError unchanged.
    """
    program = parse(source)
    result = evaluator.evaluate(program, env)
    if program.statements and isinstance(program.statements[-1], LetStatement):
        return None
    return result


def run_repl(config: Config | None = None,
             input_fn: Callable[[str], str] = input,
             output_fn: Callable[[str], None] = print):
    """Run the interactive Monkey REPL until EOF or `exit`."""
    config = config or Config()
    if config.show_banner:
        output_fn(BANNER)

    env = Environment()
    evaluator = Evaluator(output_fn=output_fn)

    while True:
        try:
            line = input_fn(config.prompt)
        except (EOFError, KeyboardInterrupt):
            output_fn("")
            break

        line = line.strip()
        if not line:
            continue

        # Special commands
        command = line.lower()
        if command in ("exit", "quit"):
            break

        if command == "help":
            output_fn(HELP_TEXT.format(builtins=describe_all()))
            continue

        if command == "env":
            names = sorted(env.names())
            if names:
                for name in names:
                    output_fn(f"  {name} = {env.get(name).inspect()}")
            else:
                output_fn("  (no bindings)")
            continue

        if command == "clear":
            env = Environment()
            output_fn("  (bindings cleared)")
            continue

        try:
            result = run_line(line, env, evaluator)
        except ParseError as e:
            output_fn(f"Parse Error: {e}")
            continue
        except EvaluatorError as e:
            output_fn(f"Error: {e}")
            continue
        except RecursionError:
            output_fn("Error: maximum recursion depth exceeded")
            continue

        if result is not None:
            output_fn(result.inspect())
