"""Lexical scopes for quasi.

An Environment stores bindings of Symbols to values and supports nested scopes
via an `outer` link. The host runtime creates one Environment per call frame;
parameter bindings in a frame hold Promises (unevaluated argument expressions
together with the scope they were written in), which is what the capture
functions read. The capture core itself never defines or rebinds anything.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from quasi import Value
from quasi.types.errors import QuasiInvalidSymbol, QuasiUnboundSymbol
from quasi.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer", "__weakref__")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Value] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: Value) -> None:
        """Bind `name` to `value` in this frame.

        Raises QuasiInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise QuasiInvalidSymbol(f"Cannot define {name} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> Value:
        """Look up the raw binding of `name`, walking the chain outward.

        Promises are returned unforced; forcing is the evaluator's job.
        Raises QuasiUnboundSymbol if not found.
        """
        env = self.find(name)
        if env is None:
            raise QuasiUnboundSymbol(f"Cannot lookup unbound symbol {name}")
        return env.vars[name]

    def frame_get(self, name: Symbol) -> Value:
        """Raw binding of `name` in this frame only (no outward walk)."""
        try:
            return self.vars[name]
        except KeyError:
            raise QuasiUnboundSymbol(f"{name} is not bound in this frame") from None

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def depth(self) -> int:
        """Number of enclosing scopes (0 for a root scope)."""
        n, env = 0, self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {id(self):#x} depth={self.depth()}>"
