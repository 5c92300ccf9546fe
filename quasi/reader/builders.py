"""Helpers for building expression trees from Python.

Plain Python values become Literal nodes; strings used as call heads become
Symbols. Marker shapes are recognized as the Call is built:

    >>> call("+", sym("a"), sym("b"))
    Call(head=Symbol('+'), args=(Arg(name=None, value=Symbol('a')), Arg(name=None, value=Symbol('b'))))
    >>> call("!!", sym("x"))
    Unquote(expr=Symbol('x'))
"""

from __future__ import annotations

from quasi import Expression, Value
from quasi.reader.shapes import recognize
from quasi.types.expression import Arg, DefinitionForm, Literal, Unquote, UnquoteSplice, is_expression
from quasi.types.symbol import Symbol


def sym(name: str) -> Symbol:
    return Symbol(name)


def lit(value: Value) -> Literal:
    return Literal(value)


def as_expr(x: Value) -> Expression:
    """Expressions pass through; any other value is embedded as a Literal."""
    return x if is_expression(x) else Literal(x)


def arg(name: str | None, value: Value) -> Arg:
    return Arg(name, as_expr(value))


def call(head: str | Expression, *args: Arg | Value, **named: Value) -> Expression:
    """Build `head(args..., name = value...)`.

    Positional items may be Arg instances to interleave named and unnamed
    arguments in a specific order.
    """
    h = Symbol(head) if isinstance(head, str) else head
    items = [a if isinstance(a, Arg) else Arg(None, a) for a in args]
    items.extend(Arg(k, v) for k, v in named.items())
    items = [Arg(a.name, as_expr(a.value)) for a in items]
    return recognize(h, items)


def uq(x: Value) -> Unquote:
    return Unquote(as_expr(x))


def uqs(x: Value) -> UnquoteSplice:
    return UnquoteSplice(as_expr(x))


def define(lhs: Value, rhs: Value) -> DefinitionForm:
    return DefinitionForm(as_expr(lhs), as_expr(rhs))
