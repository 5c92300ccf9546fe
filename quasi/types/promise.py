from __future__ import annotations

from quasi import Expression, Value, EvaluatorFn
from quasi.types.environment import Environment

_UNFORCED = object()


class Promise:
    """An argument expression not yet evaluated, paired with the scope it was written in."""

    __slots__ = ("expr", "env", "_value")

    def __init__(self, expr: Expression, env: Environment):
        self.expr: Expression = expr
        self.env: Environment = env
        self._value = _UNFORCED

    @property
    def forced(self) -> bool:
        return self._value is not _UNFORCED

    def force(self, evaluate_fn: EvaluatorFn) -> Value:
        """Evaluate once in the promise's own scope and cache the result."""
        if self._value is _UNFORCED:
            self._value = evaluate_fn(self.expr, self.env)
        return self._value

    def __repr__(self):
        return f"<Promise {self.expr!r}>"
