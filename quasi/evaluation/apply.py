"""Application engine for the host runtime.

Closure calls are lazy: every argument is bound as a Promise of the expression
written at the call site, paired with the caller's scope. A bare `...` argument
forwards the caller's own dots entries untouched, so each entry keeps the scope
of the call site where it was originally written, however many frames it
passes through. That is what lets `capture_dots` attach the right scope to
every element.

Python builtins receive evaluated arguments as `fn(env, args)`; named
arguments are wrapped in Arg(name, value).
"""

from __future__ import annotations

from typing import Callable, Iterable

from quasi import Value, EvaluatorFn
from quasi.types.closure import DOTS, Closure
from quasi.types.environment import Environment
from quasi.types.errors import QuasiArityError, QuasiError, QuasiTypeError
from quasi.types.expression import Arg
from quasi.types.promise import Promise
from quasi.types.symbol import Symbol


def frame_dots(env: Environment) -> tuple[Arg, ...]:
    """The `...` entries visible from `env`: Arg(name, Promise) in call order."""
    if env.find(DOTS) is None:
        raise QuasiError("'...' used in an incorrect context")
    return tuple(env.lookup(DOTS))


def collect_promises(args: Iterable[Arg], env: Environment) -> list[Arg]:
    """Turn call-site arguments into Arg(name, Promise), forwarding `...` as is."""
    entries: list[Arg] = []
    for a in args:
        if a.name is None and isinstance(a.value, Symbol) and a.value == DOTS:
            entries.extend(frame_dots(env))
        else:
            entries.append(Arg(a.name, Promise(a.value, env)))
    return entries


def _describe(entry: Arg) -> str:
    from quasi.deparse import render
    text = render(entry.value.expr)
    return f"{entry.name} = {text}" if entry.name else text


def bind_arguments(fn: Closure, entries: list[Arg]) -> Environment:
    """Create the call frame of `fn` for the given promise entries.

    Matching follows three passes: exact names, then positions (for formals
    declared before `...`), then whatever is left goes to `...`. Formals after
    `...` can only be matched by name. Missing formals with a default get a
    promise of the default expression evaluated in the new frame.
    """
    frame = Environment(outer=fn.env)
    formal_ids = [p.name.id for p in fn.formals]
    named_formals = {i for i in formal_ids if i != DOTS.id}

    bound: dict[str, Promise] = {}
    consumed: set[int] = set()
    for i, e in enumerate(entries):
        if e.name is not None and e.name in named_formals:
            if e.name in bound:
                raise QuasiArityError(f"formal argument \"{e.name}\" matched by multiple actual arguments")
            bound[e.name] = e.value
            consumed.add(i)

    positional: list[str] = []
    for f in formal_ids:
        if f == DOTS.id:
            break
        if f not in bound:
            positional.append(f)

    dots: list[Arg] = []
    for i, e in enumerate(entries):
        if i in consumed:
            continue
        if e.name is None and positional:
            bound[positional.pop(0)] = e.value
        elif fn.has_dots:
            dots.append(e)
        else:
            raise QuasiArityError(f"unused argument ({_describe(e)})")

    for p in fn.formals:
        if p.name == DOTS:
            frame.define(DOTS, tuple(dots))
        elif p.name.id in bound:
            frame.define(p.name, bound[p.name.id])
        elif p.default is not None:
            frame.define(p.name, Promise(p.default, frame))
        else:
            raise QuasiArityError(f"argument \"{p.name}\" is missing, with no default")
    return frame


def apply(
    head: Closure | Callable[[Environment, list[Value]], Value] | object,
    args: Iterable[Arg],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Closure or a Python callable to unevaluated call-site arguments."""
    if isinstance(head, Closure):
        frame = bind_arguments(head, collect_promises(args, env))
        return evaluate_fn(head.body, frame)
    elif callable(head):
        values: list[Value] = []
        for e in collect_promises(args, env):
            v = e.value.force(evaluate_fn)
            values.append(v if e.name is None else Arg(e.name, v))
        return head(env, values)
    else:
        raise QuasiTypeError(f"Cannot apply non-function {head!r}")
