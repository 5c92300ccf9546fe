"""Closure representation for the host runtime."""

from __future__ import annotations

from io import StringIO
from typing import NamedTuple, Optional

from quasi import Expression
from quasi.types.environment import Environment
from quasi.types.symbol import Symbol

DOTS = Symbol("...")


class Param(NamedTuple):
    name: Symbol
    default: Optional[Expression] = None


class Closure:
    """A first-class function with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: list[Param], body: Expression, env: Environment | None = None):
        self.formals: list[Param] = [f if isinstance(f, Param) else Param(f) for f in formals]
        self.body: Expression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    @property
    def has_dots(self) -> bool:
        return any(p.name == DOTS for p in self.formals)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("function(")
            buffer.write(", ".join(str(p.name) for p in self.formals))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Closure {self}>"
