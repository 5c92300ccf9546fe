"""Expression tree nodes.

An expression is one of:

- Symbol(name)                    identifier (quasi.types.symbol)
- Literal(value)                  embedded Python value
- Call(head, args)                call with an ordered tuple of Arg(name, expr)

plus the marker variants produced by the builders when they recognize the
operator shapes of the quasiquotation protocol:

- Unquote(expr)                   !!expr      value substituted at capture time
- UnquoteSplice(expr)             !!!expr     sequence spliced into the argument list
- DefinitionForm(lhs, rhs)        lhs := rhs

Nodes are immutable and carry no scope of their own, so subtrees are shared
freely between expressions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from quasi import Expression, Value
from quasi.np_helpers import values_equal
from quasi.types.symbol import Symbol


class Arg(NamedTuple):
    """An optionally named argument: an expression in a Call, a value elsewhere."""

    name: Optional[str]
    value: Value


class Literal:
    __slots__ = ("value",)

    def __init__(self, value: Value):
        object.__setattr__(self, "value", value)

    def __setattr__(self, key, value):
        raise AttributeError("Literal is immutable")

    def __eq__(self, other) -> bool:
        return isinstance(other, Literal) and values_equal(self.value, other.value)

    def __hash__(self) -> int:
        try:
            return hash((Literal, self.value))
        except TypeError:
            # unhashable payloads (arrays, lists) hash by type; equality still decides
            return hash((Literal, type(self.value).__name__))

    def __repr__(self):
        return f"Literal({self.value!r})"


@dataclass(frozen=True)
class Call:
    head: Expression
    args: tuple[Arg, ...] = ()

    def __post_init__(self):
        # Accept any iterable of args but store a tuple so the node stays hashable
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Unquote:
    expr: Expression
    # set when built from `!(!x)`; a further `!` then reads as a splice
    from_bangs: bool = field(default=False, compare=False)


@dataclass(frozen=True)
class UnquoteSplice:
    expr: Expression


@dataclass(frozen=True)
class DefinitionForm:
    lhs: Expression
    rhs: Expression


NODE_TYPES = (Symbol, Literal, Call, Unquote, UnquoteSplice, DefinitionForm)


def is_expression(x) -> bool:
    return isinstance(x, NODE_TYPES)


def is_marker(x) -> bool:
    return isinstance(x, (Unquote, UnquoteSplice))


def contains_markers(expr: Expression) -> bool:
    """True if an unquote or unquote-splice marker occurs anywhere in `expr`."""
    if is_marker(expr):
        return True
    if isinstance(expr, Call):
        return contains_markers(expr.head) or any(contains_markers(a.value) for a in expr.args)
    if isinstance(expr, DefinitionForm):
        return contains_markers(expr.lhs) or contains_markers(expr.rhs)
    return False
