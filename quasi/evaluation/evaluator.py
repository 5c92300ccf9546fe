"""Core evaluator of the host runtime.

The capture core never evaluates a captured expression. It only needs the
evaluator for the operands of `!!` and `!!!`, and the host needs it to run
closures whose bodies capture their arguments.
"""

from __future__ import annotations

from quasi import Expression, Value
from quasi.evaluation.apply import apply
from quasi.evaluation.special_forms import SPECIAL_FORMS
from quasi.types.closure import DOTS
from quasi.types.environment import Environment
from quasi.types.errors import QuasiError, ShapeError
from quasi.types.expression import Call, DefinitionForm, Literal, Unquote, UnquoteSplice
from quasi.types.promise import Promise
from quasi.types.symbol import Symbol


def evaluate(expr: Expression, env: Environment) -> Value:
    match expr:
        case Symbol():
            if expr == DOTS:
                raise QuasiError("'...' used in an incorrect context")
            value = env.lookup(expr)
            if isinstance(value, Promise):
                return value.force(evaluate)
            return value

        case Literal():
            return expr.value

        case Call(head=head, args=args):
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](args, env, evaluate)
            return apply(evaluate(head, env), args, env, evaluate)

        case Unquote() | UnquoteSplice():
            raise QuasiError("Unquote not valid outside of a captured argument")

        case DefinitionForm():
            raise ShapeError("`:=` is only valid inside a captured argument")

    # --- Non-expression values evaluate to themselves ---
    return expr
