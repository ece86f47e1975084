"""
Monkey Environment
==================
Chained variable scopes. Each call frame is an Environment whose `outer`
is the environment the function was *defined* in, which makes closures
lexical. Frames are shared by reference between every closure that
captured them and are never copied.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .objects import Object


class Environment:
    """
    A scope frame: local bindings plus an optional enclosing frame.

    Usage:
        env = Environment()
        env.set("x", Integer(5))
        inner = Environment.enclosed(env)
        inner.get("x")  # -> Integer(5), found in the outer frame
    """

    def __init__(self, outer: Environment | None = None):
        self.store: dict[str, Object] = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer: Environment) -> Environment:
        """Create a fresh frame whose lookups fall back to `outer`."""
        return cls(outer=outer)

    def get(self, name: str) -> Object | None:
        """Resolve `name` here, then outward. None if no frame binds it."""
        env: Environment | None = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> Object:
        """Bind `name` in this frame only. Shadows any outer binding."""
        self.store[name] = value
        return value

    def names(self) -> Iterator[str]:
        """Names bound in this frame (outer frames excluded)."""
        return iter(self.store)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __repr__(self) -> str:
        return f"<Environment bindings={len(self.store)} outer={self.outer is not None}>"
