"""Definition forms: `lhs := rhs` inside captured arguments.

Two ways of consuming a definition:

- `as_definition` / `partition_definitions` keep the full LHS expression and
  return Definition(lhs, rhs) pairs, both sides interpolated independently.
- `resolve_definition_names` treats `x := expr` as a synonym of the named
  argument `x = expr`, except that the LHS may be unquoted (`!!var := expr`).
  The LHS must then reduce to a symbol or a string, which becomes the entry's
  name. An explicit name on the same entry is overridden with a
  ConflictWarning.
"""

from __future__ import annotations

import logging
import warnings

from quasi import Expression, EvaluatorFn
from quasi.interpolation import interpolate
from quasi.types.errors import ConflictWarning, ShapeError
from quasi.types.expression import Arg, DefinitionForm, Literal
from quasi.types.quote import Definition, Dots, Quote
from quasi.types.symbol import Symbol

logger = logging.getLogger(__name__)


def is_definition(x: Quote | Expression) -> bool:
    expr = x.expr if isinstance(x, Quote) else x
    return isinstance(expr, DefinitionForm)


def as_definition(quote: Quote, evaluate_fn: EvaluatorFn | None = None) -> Definition:
    """Split a definition-shaped Quote into interpolated LHS and RHS Quotes.

    Raises ShapeError if the Quote's expression is not `lhs := rhs`.
    """
    if not is_definition(quote):
        raise ShapeError(f"Expected a definition `lhs := rhs`, got `{quote.text()}`")
    form: DefinitionForm = quote.expr
    lhs = interpolate(form.lhs, quote.scope, evaluate_fn)
    rhs = interpolate(form.rhs, quote.scope, evaluate_fn)
    return Definition(quote.with_expr(lhs), quote.with_expr(rhs))


def partition_definitions(
    dots: Dots, evaluate_fn: EvaluatorFn | None = None
) -> tuple[Dots, tuple[Definition, ...]]:
    """Separate plain arguments from definitions, preserving relative order in both.

    Definitions keep the explicit name of their entry, if any.
    """
    plain: list[Arg] = []
    defs: list[Definition] = []
    for entry in dots:
        if is_definition(entry.value):
            definition = as_definition(entry.value, evaluate_fn)
            defs.append(definition._replace(name=entry.name or None))
        else:
            plain.append(entry)
    return Dots(plain), tuple(defs)


def definition_name(lhs: Expression) -> str:
    """Name carried by an interpolated LHS: a symbol or a string literal."""
    if isinstance(lhs, Symbol):
        return lhs.id
    if isinstance(lhs, Literal) and isinstance(lhs.value, str):
        return str(lhs.value)
    raise ShapeError("LHS must be a name or string")


def resolve_definition_names(
    dots: Dots, evaluate_fn: EvaluatorFn | None = None, stacklevel: int = 1
) -> Dots:
    """Turn every `lhs := rhs` entry into a named entry `lhs = rhs`.

    `stacklevel` counts frames above the caller of this function that the
    ConflictWarning is attributed to, as in warnings.warn.
    """
    resolved: list[Arg] = []
    overridden: list[str] = []
    for entry in dots:
        quote = entry.value
        if not is_definition(quote):
            resolved.append(entry)
            continue
        definition = as_definition(quote, evaluate_fn)
        name = definition_name(definition.lhs.expr)
        if entry.name:
            overridden.append(entry.name)
        resolved.append(Arg(name, definition.rhs))

    # Warnings go out only after every entry resolved
    for name in overridden:
        logger.debug("explicit name %r overridden by definition LHS", name)
        warnings.warn(
            f"Name `{name}` ignored because a LHS was supplied", ConflictWarning,
            stacklevel=stacklevel + 1,
        )
    return Dots(resolved)
