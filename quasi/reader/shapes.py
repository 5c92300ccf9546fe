"""Recognition of the quasiquotation operator shapes.

Generic call shapes are turned into the dedicated marker variants exactly once,
when a Call is built (see quasi.reader.builders) or when a foreign tree is passed
through `normalize`. Everything downstream dispatches on the node type.

    UQ(x)   !!(x)   quasi:UQ(x)    !(!(x))       -> Unquote(x)
    UQS(x)  !!!(x)  quasi:UQS(x)   !(!(!(x)))    -> UnquoteSplice(x)
    :=(lhs, rhs)                                  -> DefinitionForm(lhs, rhs)
"""

from __future__ import annotations

from typing import Sequence

from quasi import Expression
from quasi.types.errors import ShapeError
from quasi.types.expression import Arg, Call, DefinitionForm, Unquote, UnquoteSplice
from quasi.types.symbol import Symbol

PACKAGE = "quasi"
UNQUOTE_NAMES = frozenset({"UQ", "!!"})
SPLICE_NAMES = frozenset({"UQS", "!!!"})
DEFINITION_NAME = ":="
BANG = Symbol("!")


def operator_name(head: Expression) -> str | None:
    """Name of a call head, with a `quasi:` qualifier stripped."""
    if not isinstance(head, Symbol):
        return None
    name = head.id
    pkg, sep, local = name.partition(":")
    if sep and pkg == PACKAGE and local:
        return local
    return name


def _single_operand(name: str, args: Sequence[Arg]) -> Expression:
    if len(args) != 1 or args[0].name is not None:
        raise ShapeError(f"`{name}` takes exactly one unnamed operand, got {len(args)} argument(s)")
    return args[0].value


def recognize(head: Expression, args: Sequence[Arg]) -> Expression:
    """Build the node for `head(args)`, turning marker shapes into their variants."""
    name = operator_name(head)
    if name in UNQUOTE_NAMES:
        return Unquote(_single_operand(name, args))
    if name in SPLICE_NAMES:
        return UnquoteSplice(_single_operand(name, args))
    if name == DEFINITION_NAME:
        if len(args) != 2 or any(a.name is not None for a in args):
            raise ShapeError("`:=` takes exactly two unnamed operands: lhs := rhs")
        return DefinitionForm(args[0].value, args[1].value)
    if head == BANG and len(args) == 1 and args[0].name is None:
        operand = args[0].value
        # Bangs nest inside out: !x, then !!x (Unquote), then !!!x (UnquoteSplice)
        if isinstance(operand, Unquote) and operand.from_bangs:
            return UnquoteSplice(operand.expr)
        if isinstance(operand, Call) and operand.head == BANG and len(operand.args) == 1:
            return Unquote(operand.args[0].value, from_bangs=True)
    return Call(head, tuple(args))


def normalize(expr: Expression) -> Expression:
    """Rebuild `expr` bottom-up so that every marker shape uses its dedicated variant."""
    if isinstance(expr, Call):
        head = normalize(expr.head)
        args = [Arg(a.name, normalize(a.value)) for a in expr.args]
        return recognize(head, args)
    if isinstance(expr, Unquote):
        return Unquote(normalize(expr.expr), expr.from_bangs)
    if isinstance(expr, UnquoteSplice):
        return UnquoteSplice(normalize(expr.expr))
    if isinstance(expr, DefinitionForm):
        return DefinitionForm(normalize(expr.lhs), normalize(expr.rhs))
    return expr
