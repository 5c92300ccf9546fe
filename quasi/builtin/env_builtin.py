"""Built-in functions for the quasi host runtime.

Builtins are called as `fn(env, args)` with evaluated arguments; named
arguments arrive wrapped in Arg(name, value).
"""
from __future__ import annotations

import numpy as np

from quasi import Value
from quasi.types.environment import Environment
from quasi.types.errors import QuasiArityError, QuasiTypeError
from quasi.types.expression import Arg
from quasi.types.symbol import Symbol


def _positional(name: str, args: list[Value]) -> list[Value]:
    if any(isinstance(a, Arg) for a in args):
        raise QuasiTypeError(f"{name} does not accept named arguments")
    return args


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[Value]) -> Value:
    """Return the sum of all arguments; unary plus for one arg."""
    args = _positional("+", args)
    if not args:
        raise QuasiArityError("+ requires at least 1 argument")
    try:
        result = args[0]
        for x in args[1:]:
            result = result + x
        return result
    except TypeError:
        raise QuasiTypeError("Non-numeric argument to +") from None


def sub(env: Environment, args: list[Value]) -> Value:
    """Subtract the second argument from the first; unary negation for one arg."""
    args = _positional("-", args)
    if len(args) not in (1, 2):
        raise QuasiArityError("- requires 1 or 2 arguments")
    try:
        return -args[0] if len(args) == 1 else args[0] - args[1]
    except TypeError:
        raise QuasiTypeError("Non-numeric argument to -") from None


def mul(env: Environment, args: list[Value]) -> Value:
    args = _positional("*", args)
    if len(args) != 2:
        raise QuasiArityError("* requires exactly 2 arguments")
    try:
        return args[0] * args[1]
    except TypeError:
        raise QuasiTypeError("Non-numeric argument to *") from None


def div(env: Environment, args: list[Value]) -> Value:
    args = _positional("/", args)
    if len(args) != 2:
        raise QuasiArityError("/ requires exactly 2 arguments")
    try:
        return args[0] / args[1]
    except TypeError:
        raise QuasiTypeError("Non-numeric argument to /") from None


def colon(env: Environment, args: list[Value]) -> np.ndarray:
    """from:to -> integer vector, inclusive, counting down when from > to."""
    args = _positional(":", args)
    if len(args) != 2:
        raise QuasiArityError(": requires exactly 2 arguments")
    start, stop = args
    step = 1 if stop >= start else -1
    return np.arange(start, stop + step, step)


def combine(env: Environment, args: list[Value]) -> np.ndarray:
    """c(...) -> flat numpy vector of all (possibly vector) arguments."""
    args = _positional("c", args)
    if not args:
        return np.array([])
    return np.concatenate([np.atleast_1d(np.asarray(a)) for a in args])


def equals(env: Environment, args: list[Value]) -> Value:
    args = _positional("==", args)
    if len(args) != 2:
        raise QuasiArityError("== requires exactly 2 arguments")
    return args[0] == args[1]


def logical_not(env: Environment, args: list[Value]) -> Value:
    args = _positional("!", args)
    if len(args) != 1:
        raise QuasiArityError("! requires exactly 1 argument")
    if isinstance(args[0], np.ndarray):
        return np.logical_not(args[0])
    return not args[0]


# -------------------------------
# Lists and strings
# -------------------------------
def list_builtin(env: Environment, args: list[Value]) -> list[Value]:
    """list(x = 1, 2) -> [Arg('x', 1), 2]; named elements keep their names when spliced."""
    return list(args)


def paste(env: Environment, args: list[Value]) -> str:
    """paste(..., sep = " ") -> arguments converted to text and joined."""
    sep = " "
    parts: list[str] = []
    for a in args:
        if isinstance(a, Arg):
            if a.name != "sep":
                raise QuasiTypeError(f"paste got an unexpected argument `{a.name}`")
            sep = str(a.value)
        elif isinstance(a, np.ndarray):
            parts.extend(str(x) for x in a.tolist())
        else:
            parts.append(str(a))
    return sep.join(parts)


def register(env: Environment) -> None:
    """Define the builtins and constants in `env`."""
    env.define(Symbol("+"), add)
    env.define(Symbol("-"), sub)
    env.define(Symbol("*"), mul)
    env.define(Symbol("/"), div)
    env.define(Symbol(":"), colon)
    env.define(Symbol("c"), combine)
    env.define(Symbol("=="), equals)
    env.define(Symbol("!"), logical_not)
    env.define(Symbol("list"), list_builtin)
    env.define(Symbol("paste"), paste)
    env.define(Symbol("TRUE"), True)
    env.define(Symbol("FALSE"), False)
    env.define(Symbol("NULL"), None)
