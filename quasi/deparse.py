"""Textual rendering of expression trees.

Used to synthesize default names for unnamed captured arguments and for
repr() of Quotes. Binary operators render infix (`a + b`), markers render with
their bang prefixes (`!!x`, `!!!xs`) and definitions as `lhs := rhs`.
"""

from __future__ import annotations

import json
from typing import Optional

import numpy as np

from quasi import Expression, Value
from quasi.config import get_name_width
from quasi.types.expression import Call, DefinitionForm, Literal, Unquote, UnquoteSplice
from quasi.types.symbol import Symbol

# operator -> precedence (higher binds tighter)
INFIX_OPERATORS: dict[str, int] = {
    "^": 14,
    ":": 12,
    "*": 10, "/": 10,
    "+": 9, "-": 9,
    "<": 8, ">": 8, "<=": 8, ">=": 8, "==": 8, "!=": 8,
    "&": 6, "&&": 6,
    "|": 5, "||": 5,
    "~": 3,
    "<-": 2, ":=": 2,
}
PREFIX_OPERATORS: dict[str, int] = {"-": 13, "+": 13, "!": 7, "~": 3}
# Tight operators render without surrounding spaces, like 1:3 or x^2
_TIGHT = {"^", ":"}
_ATOM = 100


def _literal_text(v: Value) -> str:
    from quasi.types.quote import Quote

    if isinstance(v, str):
        return json.dumps(v)
    if isinstance(v, np.ndarray):
        return "c(" + ", ".join(_literal_text(x) for x in np.atleast_1d(v).tolist()) + ")"
    if isinstance(v, Quote):
        return "~" + render(v.expr)
    return repr(v)


def _operator(node: Call) -> Optional[str]:
    if not isinstance(node.head, Symbol) or any(a.name is not None for a in node.args):
        return None
    op = node.head.id
    if len(node.args) == 2 and op in INFIX_OPERATORS:
        return op
    if len(node.args) == 1 and op in PREFIX_OPERATORS:
        return op
    return None


def _precedence(expr: Expression) -> int:
    if isinstance(expr, Call):
        op = _operator(expr)
        if op is None:
            return _ATOM
        return INFIX_OPERATORS[op] if len(expr.args) == 2 else PREFIX_OPERATORS[op]
    if isinstance(expr, DefinitionForm):
        return INFIX_OPERATORS[":="]
    if isinstance(expr, (Unquote, UnquoteSplice)):
        return PREFIX_OPERATORS["!"]
    return _ATOM


def _wrapped(expr: Expression, min_prec: int) -> str:
    text = render(expr)
    return f"({text})" if _precedence(expr) < min_prec else text


def render(expr: Expression) -> str:
    """Render `expr` as source-like text."""
    if isinstance(expr, Symbol):
        return expr.id
    if isinstance(expr, Literal):
        return _literal_text(expr.value)
    if isinstance(expr, Unquote):
        return "!!" + _wrapped(expr.expr, PREFIX_OPERATORS["!"])
    if isinstance(expr, UnquoteSplice):
        return "!!!" + _wrapped(expr.expr, PREFIX_OPERATORS["!"])
    if isinstance(expr, DefinitionForm):
        prec = INFIX_OPERATORS[":="]
        return f"{_wrapped(expr.lhs, prec + 1)} := {_wrapped(expr.rhs, prec)}"
    if isinstance(expr, Call):
        op = _operator(expr)
        if op is not None and len(expr.args) == 2:
            prec = INFIX_OPERATORS[op]
            lhs = _wrapped(expr.args[0].value, prec)
            rhs = _wrapped(expr.args[1].value, prec + 1)
            return f"{lhs}{op}{rhs}" if op in _TIGHT else f"{lhs} {op} {rhs}"
        if op is not None:
            operand = expr.args[0].value
            if isinstance(operand, (Unquote, UnquoteSplice)):
                # `!` followed by a bang marker would read as a longer marker
                return f"{op}({render(operand)})"
            return op + _wrapped(operand, PREFIX_OPERATORS[op])
        head = _wrapped(expr.head, _ATOM)
        args = ", ".join(
            f"{a.name} = {render(a.value)}" if a.name is not None else render(a.value)
            for a in expr.args
        )
        return f"{head}({args})"
    return _literal_text(expr)


def expr_text(expr: Expression, width: Optional[int] = None) -> str:
    """Render `expr`, truncating to `width` characters (plus `...`) when longer."""
    if width is None:
        width = get_name_width()
    text = render(expr)
    if len(text) > width:
        return text[:width] + "..."
    return text
