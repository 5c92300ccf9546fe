"""Captured expressions: Quote, Dots and Definition."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable, NamedTuple, Optional, overload

from quasi import Expression
from quasi.types.environment import Environment
from quasi.types.expression import Arg


class Quote:
    """An expression frozen together with the scope it was written in.

    Quotes are immutable; `with_expr` and `with_scope` return new Quotes.
    """

    __slots__ = ("expr", "scope")

    def __init__(self, expr: Expression, scope: Environment):
        object.__setattr__(self, "expr", expr)
        object.__setattr__(self, "scope", scope)

    def __setattr__(self, key, value):
        raise AttributeError("Quote is immutable")

    def with_expr(self, expr: Expression) -> Quote:
        return Quote(expr, self.scope)

    def with_scope(self, scope: Environment) -> Quote:
        return Quote(self.expr, scope)

    def text(self, width: Optional[int] = None) -> str:
        from quasi.deparse import expr_text
        return expr_text(self.expr, width)

    def __eq__(self, other) -> bool:
        # Scopes compare by identity: two frames with equal bindings are still distinct
        return isinstance(other, Quote) and self.scope is other.scope and self.expr == other.expr

    def __hash__(self) -> int:
        return hash((self.expr, id(self.scope)))

    def __repr__(self):
        return f"<Quote ~{self.text()} {self.scope!r}>"


class Definition(NamedTuple):
    lhs: Quote
    rhs: Quote
    # explicit argument name the definition was supplied under, if any
    name: Optional[str] = None


class Dots(Sequence):
    """Ordered, immutable sequence of Arg(name, Quote) entries.

    Order is call-site order. Names are optional and not required to be unique.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Arg | Quote] = ()):
        self._entries: tuple[Arg, ...] = tuple(
            e if isinstance(e, Arg) else Arg(None, e) for e in entries
        )

    @overload
    def __getitem__(self, i: int) -> Arg: ...
    @overload
    def __getitem__(self, i: slice) -> Dots: ...

    def __getitem__(self, i):
        if isinstance(i, slice):
            return Dots(self._entries[i])
        return self._entries[i]

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        return isinstance(other, Dots) and self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    @property
    def names(self) -> list[Optional[str]]:
        return [e.name for e in self._entries]

    @property
    def quotes(self) -> list[Quote]:
        return [e.value for e in self._entries]

    def get(self, name: str, default=None) -> Optional[Quote]:
        """First Quote carrying `name`."""
        for e in self._entries:
            if e.name == name:
                return e.value
        return default

    def with_names(self, names: Sequence[Optional[str]]) -> Dots:
        if len(names) != len(self._entries):
            raise ValueError(f"Expected {len(self._entries)} names, got {len(names)}")
        return Dots(Arg(n, e.value) for n, e in zip(names, self._entries))

    def __repr__(self):
        inner = ", ".join(
            f"{e.name} = {e.value.text()}" if e.name else e.value.text() for e in self._entries
        )
        return f"Dots({inner})"


class DefsCapture(NamedTuple):
    dots: Dots
    defs: tuple[Definition, ...]
