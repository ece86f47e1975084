"""
Monkey Built-in Registry
========================
The fixed table of host-implemented functions that identifiers fall back to
when no environment frame binds them.

    len  first  last  rest  push  puts

Arity is checked by the evaluator before a built-in runs; each function here
only checks its argument types.
"""
from typing import Callable, Sequence

from .errors import UnsupportedArgumentError
from .objects import (
    Object, Integer, String, Array, Builtin, NULL,
)

Output = Callable[[str], None]


def _require_array(name: str, arg: Object) -> Array:
    if not isinstance(arg, Array):
        raise UnsupportedArgumentError(name, arg)
    return arg


def _len(args: Sequence[Object], output: Output) -> Object:
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    raise UnsupportedArgumentError("len", arg)


def _first(args: Sequence[Object], output: Output) -> Object:
    array = _require_array("first", args[0])
    if not array.elements:
        return NULL
    return array.elements[0]


def _last(args: Sequence[Object], output: Output) -> Object:
    array = _require_array("last", args[0])
    if not array.elements:
        return NULL
    return array.elements[-1]


def _rest(args: Sequence[Object], output: Output) -> Object:
    array = _require_array("rest", args[0])
    if not array.elements:
        return NULL
    return Array(array.elements[1:])


def _push(args: Sequence[Object], output: Output) -> Object:
    array = _require_array("push", args[0])
    return Array(array.elements + (args[1],))


def _puts(args: Sequence[Object], output: Output) -> Object:
    for arg in args:
        output(arg.inspect())
    return NULL


# ─────────────────────────────────────────────────────────────
#  THE BUILT-IN REGISTRY
# ─────────────────────────────────────────────────────────────

BUILTINS: dict[str, Builtin] = {
    "len": Builtin(
        name="len", arity=1, fn=_len,
        description="Character count of a string or element count of an array.",
    ),
    "first": Builtin(
        name="first", arity=1, fn=_first,
        description="First element of an array, or null if it is empty.",
    ),
    "last": Builtin(
        name="last", arity=1, fn=_last,
        description="Last element of an array, or null if it is empty.",
    ),
    "rest": Builtin(
        name="rest", arity=1, fn=_rest,
        description="New array without the first element, or null if empty.",
    ),
    "push": Builtin(
        name="push", arity=2, fn=_push,
        description="New array with the value appended. The original is untouched.",
    ),
    "puts": Builtin(
        name="puts", arity=None, fn=_puts,
        description="Print each argument on its own line. Returns null.",
    ),
}


def lookup(name: str) -> Builtin | None:
    """Look up a built-in by name."""
    return BUILTINS.get(name)


def describe_all() -> str:
    """Return a formatted list of all built-ins for REPL help."""
    lines = []
    for name, builtin in BUILTINS.items():
        arity = "*" if builtin.arity is None else str(builtin.arity)
        lines.append(f"  {name.ljust(6)} /{arity}  {builtin.description}")
    return "\n".join(lines)
