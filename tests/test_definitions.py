import warnings

import pytest

from quasi.capture import capture_defs, dots
from quasi.definitions import (
    as_definition,
    definition_name,
    is_definition,
    partition_definitions,
    resolve_definition_names,
)
from quasi.reader.builders import arg, call, define, lit, sym, uq
from quasi.types.errors import ConflictWarning, ShapeError
from quasi.types.expression import Arg
from quasi.types.promise import Promise
from quasi.types.quote import Definition, DefsCapture, Dots, Quote
from quasi.types.symbol import Symbol


def test_as_definition_splits_lhs_and_rhs(env):
    q = Quote(define(sym("x"), call("f", sym("a"))), env)
    d = as_definition(q)
    assert d == Definition(Quote(sym("x"), env), Quote(call("f", sym("a")), env))


def test_as_definition_interpolates_both_sides(env):
    q = Quote(define(uq(sym("var")), call("f", uq(sym("x")))), env)
    d = as_definition(q)
    assert d.lhs.expr == lit("foo")
    assert d.rhs.expr == call("f", lit(1))
    assert d.lhs.scope is env and d.rhs.scope is env


def test_as_definition_rejects_plain_arguments(env, interp):
    # y = expr is a named argument, not a definition
    captured = interp.eval(call("capture_dots", arg("y", sym("expr"))))
    with pytest.raises(ShapeError):
        as_definition(captured.quotes[0])


def test_is_definition(env):
    assert is_definition(define(sym("a"), 1))
    assert is_definition(Quote(define(sym("a"), 1), env))
    assert not is_definition(Quote(call("f", sym("a")), env))


def test_partition_preserves_relative_order(env):
    d1 = Quote(define(sym("a"), 1), env)
    d2 = Quote(define(sym("b"), 2), env)
    p1 = Quote(sym("p"), env)
    p2 = Quote(sym("q"), env)
    plain, defs = partition_definitions(Dots([p1, d1, Arg("named", p2), d2]))
    assert plain == Dots([p1, Arg("named", p2)])
    assert [d.lhs.expr for d in defs] == [sym("a"), sym("b")]
    assert [d.rhs.expr for d in defs] == [lit(1), lit(2)]


def test_partition_keeps_names_of_definitions(env):
    _, defs = partition_definitions(Dots([Arg("var", Quote(define(sym("a"), 1), env))]))
    assert defs[0].name == "var"


def test_resolve_names_treats_definitions_as_named_arguments(env):
    resolved = resolve_definition_names(Dots([
        Quote(define(sym("x"), sym("expr")), env),
        Arg("y", Quote(sym("expr"), env)),
    ]))
    assert resolved.names == ["x", "y"]
    assert [q.expr for q in resolved.quotes] == [sym("expr"), sym("expr")]


def test_resolve_names_accepts_string_lhs(env):
    resolved = resolve_definition_names(Dots([Quote(define("col", 1), env)]))
    assert resolved.names == ["col"]


@pytest.mark.parametrize("lhs", [lit(1), call("f", sym("a")), lit(None)])
def test_resolve_names_rejects_other_lhs(env, lhs):
    with pytest.raises(ShapeError):
        resolve_definition_names(Dots([Quote(define(lhs, 1), env)]))


def test_definition_name_from_symbol():
    assert definition_name(Symbol("abc")) == "abc"


def test_explicit_name_is_overridden_with_warning(env):
    entries = Dots([Arg("given", Quote(define(sym("x"), 1), env))])
    with pytest.warns(ConflictWarning):
        resolved = resolve_definition_names(entries)
    assert resolved.names == ["x"]


def test_failed_resolution_emits_no_warning(env):
    entries = Dots([
        Arg("given", Quote(define(sym("x"), 1), env)),
        Quote(define(lit(2), 1), env),
    ])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        with pytest.raises(ShapeError):
            resolve_definition_names(entries)


# -------------------------
# Through the capture forms
# -------------------------

def test_dots_unquoted_lhs_becomes_name(env, interp):
    # var <- "foo"; dots(!!var := expr)
    d = interp.eval(call("dots", define(uq(sym("var")), sym("expr"))))
    assert d.names == ["foo"]
    assert d.quotes[0] == Quote(sym("expr"), env)


def test_dots_mixes_definitions_and_named_arguments(env, interp):
    d = interp.eval(call("dots", define(sym("x"), sym("expr")), arg("y", sym("expr"))))
    assert d.names == ["x", "y"]


def test_dots_synthesized_names_do_not_conflict(env, interp):
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        d = interp.eval(call("dots", define(sym("x"), 1), call("f", sym("a")), **{".named": True}))
    assert d.names == ["x", "f(a)"]


def test_dots_explicit_name_conflict_warns(env, interp):
    with pytest.warns(ConflictWarning):
        d = interp.eval(call("dots", arg("n", define(sym("x"), 1))))
    assert d.names == ["x"]


def test_dots_api_on_frame(interp):
    frame_fn = call("function", sym("..."), call("dots", sym("...")))
    interp.eval(call("<-", sym("g"), frame_fn))
    d = interp.eval(call("g", define("k", 5)))
    assert d.names == ["k"]
    assert d.quotes[0].expr == lit(5)


def test_defs_returns_definitions_as_is(env, interp):
    # defs(var = foo(baz) := bar(baz), plain)
    result = interp.eval(call("defs",
        arg("var", define(call("foo", sym("baz")), call("bar", sym("baz")))),
        sym("plain"),
    ))
    assert isinstance(result, DefsCapture)
    assert result.dots.quotes == [Quote(sym("plain"), env)]
    (d,) = result.defs
    assert d.name == "var"
    assert d.lhs == Quote(call("foo", sym("baz")), env)
    assert d.rhs == Quote(call("bar", sym("baz")), env)


def test_defs_interpolates_both_sides(env, interp):
    result = interp.eval(call("defs", define(call("f", uq(sym("x"))), uq(sym("y")))))
    (d,) = result.defs
    assert d.lhs.expr == call("f", lit(1))
    assert d.rhs.expr == lit(2)


def test_defs_names_only_plain_arguments(env, interp):
    result = interp.eval(call("defs", define(sym("a"), 1), call("g", sym("h")), **{".named": True}))
    assert result.dots.names == ["g(h)"]
    assert result.defs[0].name is None


def test_capture_defs_and_dots_accept_entries(env):
    entries = [Arg(None, Promise(define(sym("a"), 1), env)), Arg(None, Promise(sym("b"), env))]
    assert capture_defs(entries).dots.quotes == [Quote(sym("b"), env)]
    assert dots(entries).names == ["a", None]


def test_conflict_warning_points_at_caller(env):
    entries = Dots([Arg("given", Quote(define(sym("x"), 1), env))])
    with pytest.warns(ConflictWarning) as record:
        resolve_definition_names(entries)
    assert record[0].filename == __file__


def test_conflict_warning_from_dots_points_at_caller(env):
    entries = [Arg("given", Promise(define(sym("x"), 1), env))]
    with pytest.warns(ConflictWarning) as record:
        dots(entries)
    assert record[0].filename == __file__
