"""
Monkey Object Model
===================
Runtime values produced by the Evaluator.

  Integer, Boolean, String, Array, Function, Builtin, Null

plus ReturnSignal, the internal wrapper that carries a `return` value up to
the nearest call boundary. ReturnSignal never escapes `Evaluator.evaluate`.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Sequence

from .ast_nodes import BlockStatement, Identifier
from .environment import Environment


class ObjectType(Enum):
    INTEGER      = "INTEGER"
    BOOLEAN      = "BOOLEAN"
    STRING       = "STRING"
    ARRAY        = "ARRAY"
    FUNCTION     = "FUNCTION"
    BUILTIN      = "BUILTIN"
    NULL         = "NULL"
    RETURN_VALUE = "RETURN_VALUE"


class Object:
    """Base class for all runtime values."""
    type: ClassVar[ObjectType]

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int
    type: ClassVar[ObjectType] = ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool
    type: ClassVar[ObjectType] = ObjectType.BOOLEAN

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Object):
    value: str
    type: ClassVar[ObjectType] = ObjectType.STRING

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class Array(Object):
    elements: tuple[Object, ...] = ()
    type: ClassVar[ObjectType] = ObjectType.ARRAY

    def inspect(self) -> str:
        return "[" + ", ".join(el.inspect() for el in self.elements) + "]"


@dataclass(frozen=True)
class Null(Object):
    type: ClassVar[ObjectType] = ObjectType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass(frozen=True, eq=False)
class Function(Object):
    """A closure: parameters and body plus the environment it was defined in."""
    parameters: tuple[Identifier, ...]
    body: BlockStatement
    env: Environment
    type: ClassVar[ObjectType] = ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ", ".join(p.value for p in self.parameters)
        return f"fn({params}) {self.body.description()}"


BuiltinFn = Callable[[Sequence[Object], Callable[[str], None]], Object]


@dataclass(frozen=True, eq=False)
class Builtin(Object):
    """A host-implemented function. `arity` is None for variadic built-ins."""
    name: str
    arity: int | None
    fn: BuiltinFn
    description: str = ""
    type: ClassVar[ObjectType] = ObjectType.BUILTIN

    def inspect(self) -> str:
        return "builtin function"


@dataclass(frozen=True)
class ReturnSignal(Object):
    """Internal: unwinds nested blocks on `return`. Never user-visible."""
    value: Object
    type: ClassVar[ObjectType] = ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


# Canonical singletons
TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(obj: Object) -> bool:
    """`false` and `null` are falsy; everything else, including 0, is truthy."""
    if obj is NULL or isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True
