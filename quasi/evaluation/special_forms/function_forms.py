from quasi import Value, EvaluatorFn
from quasi.types.closure import Closure, Param
from quasi.types.environment import Environment
from quasi.types.errors import QuasiArityError, QuasiInvalidSymbol
from quasi.types.expression import Arg
from quasi.types.symbol import Symbol


def function_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """
    function(x, y = default, ..., body)
    The last argument is the body; the others declare the formals.
    """
    if not args or args[-1].name is not None:
        raise QuasiArityError("function requires a body as its last, unnamed argument")
    formals: list[Param] = []
    for a in args[:-1]:
        if a.name is not None:
            formals.append(Param(Symbol(a.name), a.value))
        elif isinstance(a.value, Symbol):
            formals.append(Param(a.value))
        else:
            raise QuasiInvalidSymbol(f"Invalid formal argument {a.value!r}")
    return Closure(formals, args[-1].value, env)


def assign_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """
    name <- value
    Binds in the current frame and returns the value.
    """
    if len(args) != 2:
        raise QuasiArityError("<- requires exactly 2 arguments")
    name, val_expr = args[0].value, args[1].value
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value


def block_form(args: tuple[Arg, ...], env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """{ expr1; expr2; ... } evaluates in order and returns the last value."""
    result = None
    for a in args:
        result = evaluate_fn(a.value, env)
    return result
