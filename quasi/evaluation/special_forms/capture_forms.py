"""Special forms exposing the capture functions to host code.

    capture(x)                        Quote of the argument bound to parameter x
    capture_dots(..., .named = FALSE) Dots as captured, definitions untouched
    dots(..., .named = FALSE)         Dots with `lhs := rhs` resolved to names
    defs(..., .named = FALSE)         DefsCapture(dots, defs)

The dots forms collect their own call-site arguments plus any forwarded `...`,
exactly like a closure call would.
"""

from quasi import Value, EvaluatorFn
from quasi.capture import capture_argument, capture_defs, capture_dots, dots
from quasi.evaluation.apply import collect_promises
from quasi.types.environment import Environment
from quasi.types.errors import QuasiArityError, ShapeError
from quasi.types.expression import Arg
from quasi.types.symbol import Symbol

NAMED_OPTION = ".named"


def capture_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    if len(args) != 1:
        raise QuasiArityError("capture expects exactly 1 argument")
    param = args[0].value
    if not isinstance(param, Symbol):
        raise ShapeError("capture expects the name of a parameter")
    return capture_argument(env, param, evaluate_fn)


def _split_options(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn):
    named: Value = False
    rest: list[Arg] = []
    for a in args:
        if a.name == NAMED_OPTION:
            named = evaluate_fn(a.value, env)
        else:
            rest.append(a)
    return collect_promises(rest, env), named


def capture_dots_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    entries, named = _split_options(args, env, evaluate_fn)
    return capture_dots(entries, named, evaluate_fn)


def dots_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    entries, named = _split_options(args, env, evaluate_fn)
    return dots(entries, named, evaluate_fn)


def defs_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    entries, named = _split_options(args, env, evaluate_fn)
    return capture_defs(entries, named, evaluate_fn)
