"""Capturing arguments as Quotes.

Capturing an argument freezes the expression written at the call site together
with the scope it was written in, so that it can later be evaluated (possibly
in an altered scope) without losing access to the call site's variables.
Captured expressions are always interpolated: `!!x` is replaced by the value of
`x` at capture time, and `!!!xs` in dots splices the elements of `xs` in place.

Only the most direct call site of a named argument is observable. If `g`
forwards its own parameter to `fn(bar)`, capturing `fn`'s argument yields the
expression `bar`, not what was passed to `g`. Dots are different: forwarding
`...` does not create a new call site, so every dots entry is captured with the
expression and scope of the call where it was originally written. Capture named
arguments at the outermost level and forward Quotes, or use dots.
"""

from __future__ import annotations

import logging
import numbers
from typing import Iterable, Optional

import numpy as np

from quasi import Value, EvaluatorFn
from quasi.config import get_name_width
from quasi.definitions import partition_definitions, resolve_definition_names
from quasi.evaluation.apply import frame_dots
from quasi.interpolation import interpolate, splice_entries
from quasi.types.environment import Environment
from quasi.types.errors import ConfigError, ShapeError
from quasi.types.expression import Arg, Literal, UnquoteSplice, is_expression
from quasi.types.promise import Promise
from quasi.types.quote import DefsCapture, Dots, Quote
from quasi.types.symbol import Symbol

logger = logging.getLogger(__name__)

DotsSource = Environment | Iterable[Arg]


def as_quote(value: Value, scope: Environment) -> Quote:
    """Coerce a spliced element: Quotes are kept, expressions and values get `scope`."""
    if isinstance(value, Quote):
        return value
    if is_expression(value):
        return Quote(value, scope)
    return Quote(Literal(value), scope)


def capture_argument(
    frame: Environment, name: str | Symbol, evaluate_fn: EvaluatorFn | None = None
) -> Quote:
    """Capture the argument supplied for parameter `name` of the call frame `frame`.

    Returns the interpolated expression written at the immediate call site,
    quoted with the scope of that call site.
    """
    param = name if isinstance(name, Symbol) else Symbol(name)
    binding = frame.frame_get(param)
    if isinstance(binding, Promise):
        expr, scope = binding.expr, binding.env
    else:
        # Rebound or already a value: nothing left to capture but the value itself
        expr, scope = Literal(binding), frame
    quote = Quote(interpolate(expr, scope, evaluate_fn), scope)
    logger.debug("captured argument %s: %s", param, quote.text())
    return quote


def naming_width(named: Value) -> Optional[int]:
    """Validate a `named` flag: None when naming is off, else the truncation width."""
    if isinstance(named, (bool, np.bool_)):
        return get_name_width() if named else None
    if isinstance(named, numbers.Integral) and named >= 0:
        return int(named)
    if isinstance(named, float) and named.is_integer() and named >= 0:
        return int(named)
    raise ConfigError("`named` must be a boolean or a non-negative integer width")


def name_dots(dots: Dots, width: int) -> Dots:
    """Give every unnamed entry the truncated text of its expression as a name."""
    return dots.with_names([e.name if e.name else e.value.text(width) for e in dots])


def _entries(source: DotsSource) -> tuple[Arg, ...]:
    if isinstance(source, Environment):
        return frame_dots(source)
    return tuple(source)


def _splice_dot(entry: Arg, evaluate_fn: EvaluatorFn | None) -> list[Arg]:
    promise: Promise = entry.value
    if entry.name:
        raise ShapeError(f"`!!!` cannot be applied to the named argument `{entry.name}`")
    if evaluate_fn is None:
        from quasi.evaluation.evaluator import evaluate as evaluate_fn
    operand = interpolate(promise.expr.expr, promise.env, evaluate_fn)
    spliced = splice_entries(evaluate_fn(operand, promise.env))
    logger.debug("spliced %d element(s) into dots", len(spliced))
    return [Arg(e.name, as_quote(e.value, promise.env)) for e in spliced]


def capture_dots(
    source: DotsSource, named: Value = False, evaluate_fn: EvaluatorFn | None = None
) -> Dots:
    """Capture dots entries as Quotes, each with the scope it was written in.

    `source` is a call frame (its `...` entries are read) or an iterable of
    Arg(name, Promise) entries. `!!!xs` entries are spliced in place. With
    `named` True (default width) or an integer width, unnamed entries are named
    after the truncated text of their expression.
    """
    width = naming_width(named)
    captured: list[Arg] = []
    for entry in _entries(source):
        promise: Promise = entry.value
        if isinstance(promise.expr, UnquoteSplice):
            captured.extend(_splice_dot(entry, evaluate_fn))
        else:
            expr = interpolate(promise.expr, promise.env, evaluate_fn)
            captured.append(Arg(entry.name, Quote(expr, promise.env)))
    dots = Dots(captured)
    return name_dots(dots, width) if width is not None else dots


def dots(
    source: DotsSource, named: Value = False, evaluate_fn: EvaluatorFn | None = None
) -> Dots:
    """Capture dots, treating `lhs := rhs` entries as the named argument `lhs = rhs`.

    The LHS of a definition may be unquoted and must reduce to a symbol or a
    string. Default names are synthesized after definitions are resolved, so
    only explicitly supplied names conflict with a LHS.
    """
    width = naming_width(named)
    resolved = resolve_definition_names(
        capture_dots(source, evaluate_fn=evaluate_fn), evaluate_fn, stacklevel=2
    )
    return name_dots(resolved, width) if width is not None else resolved


def capture_defs(
    source: DotsSource, named: Value = False, evaluate_fn: EvaluatorFn | None = None
) -> DefsCapture:
    """Capture dots, returning definitions as is, apart from the plain arguments."""
    width = naming_width(named)
    plain, defs = partition_definitions(capture_dots(source, evaluate_fn=evaluate_fn), evaluate_fn)
    if width is not None:
        plain = name_dots(plain, width)
    return DefsCapture(plain, defs)
