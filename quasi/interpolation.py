"""Quasiquotation: resolving unquote markers against a scope.

`interpolate` walks an expression and

- replaces every `!!x` (Unquote) with the value of `x` evaluated in the scope,
  embedded as a Literal (or inlined as is when the value is itself an expression);
- expands every `!!!xs` (UnquoteSplice) found in a call's argument list into
  zero or more sibling arguments, in order.

Splicing anywhere else (the whole expression, a call head, either side of a
definition, an operand of another marker) is a ShapeError. Expressions without
markers are returned unchanged, so interpolation is idempotent on them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from quasi import Expression, Value, EvaluatorFn
from quasi.np_helpers import is_sequence, to_list
from quasi.types.environment import Environment
from quasi.types.errors import ShapeError
from quasi.types.expression import (
    Arg,
    Call,
    DefinitionForm,
    Literal,
    Unquote,
    UnquoteSplice,
    contains_markers,
    is_expression,
)

logger = logging.getLogger(__name__)


def embed(value: Value) -> Expression:
    """Expression values are inlined; anything else becomes a Literal node."""
    return value if is_expression(value) else Literal(value)


def splice_entries(value: Value) -> list[Arg]:
    """Flatten the value of a `!!!` operand into Arg(name, value) entries.

    Mappings contribute their keys as names; Arg items (as produced by the host
    `list` builtin, or a Dots sequence) keep theirs. numpy arrays are unpacked
    into native scalars. None splices nothing.
    """
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [Arg(str(k), v) for k, v in value.items()]
    if not is_sequence(value):
        raise ShapeError(f"`!!!` expects a sequence, got {type(value).__name__}")
    return [item if isinstance(item, Arg) else Arg(None, item) for item in to_list(value)]


def _default_evaluator() -> EvaluatorFn:
    # Lazy import: the evaluator's special forms depend on this module
    from quasi.evaluation.evaluator import evaluate
    return evaluate


def interpolate(
    expr: Expression, scope: Environment, evaluate_fn: EvaluatorFn | None = None
) -> Expression:
    """Return `expr` with its unquote markers resolved against `scope`."""
    if isinstance(expr, UnquoteSplice):
        raise ShapeError("`!!!` can only be used within an argument list")
    if not contains_markers(expr):
        return expr
    if evaluate_fn is None:
        evaluate_fn = _default_evaluator()

    def _walk(node: Expression) -> Expression:
        if isinstance(node, Unquote):
            if isinstance(node.expr, UnquoteSplice):
                raise ShapeError("`!!!` cannot be the operand of `!!`")
            return embed(evaluate_fn(node.expr, scope))
        if isinstance(node, UnquoteSplice):
            raise ShapeError("`!!!` can only be used within an argument list")
        if isinstance(node, DefinitionForm):
            return DefinitionForm(_walk(node.lhs), _walk(node.rhs))
        if isinstance(node, Call):
            if isinstance(node.head, UnquoteSplice):
                raise ShapeError("`!!!` cannot be used as a call head")
            return Call(_walk(node.head), tuple(_walk_args(node.args)))
        return node

    def _walk_args(args: tuple[Arg, ...]) -> list[Arg]:
        result: list[Arg] = []
        for a in args:
            if not isinstance(a.value, UnquoteSplice):
                result.append(Arg(a.name, _walk(a.value)))
                continue
            if a.name is not None:
                raise ShapeError(f"`!!!` cannot be applied to the named argument `{a.name}`")
            entries = splice_entries(evaluate_fn(a.value.expr, scope))
            logger.debug("spliced %d argument(s) into call", len(entries))
            result.extend(Arg(e.name, embed(e.value)) for e in entries)
        return result

    return _walk(expr)
