from quasi import Expression, Value, EvaluatorFn
from quasi.interpolation import interpolate
from quasi.types.environment import Environment
from quasi.types.errors import QuasiArityError, QuasiError, ShapeError
from quasi.types.expression import Arg
from quasi.types.quote import Quote


def _single(name: str, args: tuple[Arg, ...]) -> Expression:
    if len(args) != 1 or args[0].name is not None:
        raise QuasiArityError(f"{name} expects exactly 1 unnamed argument")
    return args[0].value


def quote_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    return _single("quote", args)


def alist_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """(alist x = foo, bar) -> unevaluated expressions, named ones wrapped in Arg."""
    return [a.value if a.name is None else a for a in args]


def tilde_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """~expr -> Quote of expr with the current scope, without interpolation."""
    return Quote(_single("~", args), env)


def quo_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """quo(expr) -> interpolated Quote of expr with the current scope."""
    return Quote(interpolate(_single("quo", args), env, evaluate_fn), env)


def unquote_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    raise QuasiError("Unquote not valid outside of a captured argument")


def unquote_splice_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    raise QuasiError("Unquote-splicing not valid outside of a captured argument")


def definition_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    raise ShapeError("`:=` is only valid inside a captured argument")
