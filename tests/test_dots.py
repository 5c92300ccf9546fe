import numpy as np
import pytest

from quasi.capture import capture_dots, naming_width
from quasi.reader.builders import arg, call, lit, sym, uq, uqs
from quasi.types.environment import Environment
from quasi.types.errors import ConfigError, QuasiError, ShapeError
from quasi.types.expression import Arg
from quasi.types.promise import Promise
from quasi.types.quote import Dots, Quote
from quasi.types.symbol import Symbol


def defun(interp, name, *formals_and_body):
    interp.eval(call("<-", sym(name), call("function", *formals_and_body)))


def exprs(dots):
    return [q.expr for q in dots.quotes]


def test_order_is_preserved_around_splices(env, interp):
    d = interp.eval(call("capture_dots", sym("a"), uqs(call("alist", sym("x"), sym("y"))), sym("b")))
    assert exprs(d) == [sym("a"), sym("x"), sym("y"), sym("b")]


def test_splice_of_values_becomes_literal_quotes(env, interp):
    d = interp.eval(call("capture_dots", uqs(call("list", sym("x"), sym("y"), 3))))
    assert exprs(d) == [lit(1), lit(2), lit(3)]
    assert all(q.scope is env for q in d.quotes)


def test_splice_empty_contributes_nothing(env, interp):
    env.define(Symbol("empty"), [])
    d = interp.eval(call("capture_dots", sym("a"), uqs(sym("empty")), sym("b")))
    assert exprs(d) == [sym("a"), sym("b")]


def test_splice_three_elements_gives_three_independent_quotes(env, interp):
    env.define(Symbol("three"), [sym("p"), sym("q"), sym("r")])
    d = interp.eval(call("capture_dots", uqs(sym("three"))))
    assert len(d) == 3
    assert exprs(d) == [sym("p"), sym("q"), sym("r")]
    assert len({id(q) for q in d.quotes}) == 3


def test_splice_keeps_names_from_mappings_and_lists(env, interp):
    d = interp.eval(call("capture_dots",
        uqs(call("list", arg("x", call(":", 1, 3)), arg("y", call("~", sym("var"))))),
        arg("z", 10),
    ))
    assert d.names == ["x", "y", "z"]
    assert d.get("x").expr == lit(np.array([1, 2, 3]))
    assert d.get("z").expr == lit(10)


def test_splice_keeps_prebuilt_quotes_and_their_scope(env, interp):
    other = Environment()
    q = Quote(sym("w"), other)
    env.define(Symbol("qs"), [q])
    d = interp.eval(call("capture_dots", uqs(sym("qs"))))
    assert d.quotes == [q]
    assert d.quotes[0].scope is other


def test_splice_raw_expressions_get_capture_scope(env, interp):
    d = interp.eval(call("capture_dots", uqs(call("alist", arg("x", sym("foo")), arg("y", sym("bar"))))))
    assert d.names == ["x", "y"]
    assert exprs(d) == [sym("foo"), sym("bar")]
    assert all(q.scope is env for q in d.quotes)


def test_splice_numpy_vector_into_dots(env, interp):
    d = interp.eval(call("capture_dots", uqs(call(":", 1, 3)), sym("b")))
    assert exprs(d) == [lit(1), lit(2), lit(3), sym("b")]


def test_splice_operand_is_interpolated(env, interp):
    d = interp.eval(call("capture_dots", uqs(call("list", uq(sym("var"))))))
    assert exprs(d) == [lit("foo")]


def test_named_splice_is_shape_error(env, interp):
    with pytest.raises(ShapeError):
        interp.eval(call("capture_dots", arg("n", uqs(call("list", 1)))))


def test_splice_of_scalar_is_shape_error(env, interp):
    with pytest.raises(ShapeError):
        interp.eval(call("capture_dots", uqs(sym("x"))))


def test_plain_entries_are_interpolated(env, interp):
    d = interp.eval(call("capture_dots", call("f", uq(sym("x"))), arg("k", uq(sym("var")))))
    assert exprs(d) == [call("f", lit(1)), lit("foo")]
    assert d.names == [None, "k"]


def test_dots_are_captured_across_forwarding(interp):
    # fn <- function(...) capture_dots(y = a + b, ...); fn(z = a + b)
    defun(interp, "fn", sym("..."), call("capture_dots", arg("y", call("+", sym("a"), sym("b"))), sym("...")))
    d = interp.eval(call("fn", z=call("+", sym("a"), sym("b"))))
    assert d.names == ["y", "z"]
    assert exprs(d) == [call("+", sym("a"), sym("b"))] * 2
    y, z = d.quotes
    assert y.scope is not interp.env
    assert y.scope.outer is interp.env
    assert z.scope is interp.env


def test_each_element_keeps_its_own_scope_through_several_frames(interp):
    # inner <- function(...) capture_dots(...)
    # middle <- function(...) { m <- 2; inner(!!m, m, ...) }
    # outer(top)
    defun(interp, "inner", sym("..."), call("capture_dots", sym("...")))
    defun(interp, "middle", sym("..."), call("{",
        call("<-", sym("m"), 2),
        call("inner", uq(sym("m")), sym("m"), sym("...")),
    ))
    interp.define("m", 1)
    d = interp.eval(call("middle", sym("top"), uq(sym("m"))))
    assert exprs(d) == [lit(2), sym("m"), sym("top"), lit(1)]
    first, second, third, fourth = d.quotes
    assert first.scope is second.scope
    assert first.scope is not interp.env
    assert third.scope is interp.env
    assert fourth.scope is interp.env


def test_named_argument_in_dots_only_sees_innermost_call(interp):
    # fn <- function(...) capture_dots(x = x); fn(x = a + b)
    defun(interp, "fn", sym("..."), call("capture_dots", arg("x", sym("x"))))
    d = interp.eval(call("fn", x=call("+", sym("a"), sym("b"))))
    assert exprs(d) == [sym("x")]


def test_capture_dots_from_frame(interp):
    defun(interp, "fn", sym("..."), call("capture_dots", sym("...")))
    d = interp.eval(call("fn", sym("a"), arg("b", sym("c"))))
    assert isinstance(d, Dots)
    assert d.names == [None, "b"]


def test_capture_dots_api_reads_frame_entries():
    caller = Environment()
    frame = Environment()
    frame.define(Symbol("..."), (Arg(None, Promise(sym("a"), caller)), Arg("k", Promise(sym("b"), caller))))
    d = capture_dots(frame)
    assert d == Dots([Arg(None, Quote(sym("a"), caller)), Arg("k", Quote(sym("b"), caller))])


def test_capture_dots_without_dots_in_scope():
    with pytest.raises(QuasiError):
        capture_dots(Environment())


# -------------------------
# Naming
# -------------------------

def test_named_true_uses_expression_text(env, interp, monkeypatch):
    monkeypatch.delenv("QUASI_NAME_WIDTH", raising=False)
    d = interp.eval(call("capture_dots", call("foo", sym("bar")), arg("given", sym("z")), **{".named": True}))
    assert d.names == ["foo(bar)", "given"]


def test_named_width_truncates(env, interp):
    d = interp.eval(call("capture_dots", call("foo", sym("bar")), **{".named": 3}))
    assert d.names == ["foo..."]


def test_named_width_from_environment(env, interp, monkeypatch):
    monkeypatch.setenv("QUASI_NAME_WIDTH", "2")
    d = interp.eval(call("capture_dots", call("+", sym("a"), sym("b")), **{".named": sym("TRUE")}))
    assert d.names == ["a ..."]


def test_named_false_leaves_names_alone(env, interp):
    d = interp.eval(call("capture_dots", sym("a"), **{".named": False}))
    assert d.names == [None]


def test_naming_applies_to_spliced_elements(env, interp):
    d = interp.eval(call("capture_dots", uqs(call("alist", call("g", sym("h")))), **{".named": True}))
    assert d.names == ["g(h)"]


@pytest.mark.parametrize("named", [-1, "yes", None, 1.5, [True]])
def test_invalid_named_flag_is_config_error(named):
    with pytest.raises(ConfigError):
        naming_width(named)


def test_invalid_named_flag_fails_before_capturing(env, interp):
    with pytest.raises(ConfigError):
        interp.eval(call("capture_dots", call("f", uq(sym("missing"))), **{".named": "yes"}))


@pytest.mark.parametrize("named, expected", [(0, 0), (7, 7), (np.int64(4), 4), (3.0, 3), (False, None)])
def test_valid_named_flags(named, expected):
    assert naming_width(named) == expected


def test_invalid_width_in_environment(monkeypatch):
    monkeypatch.setenv("QUASI_NAME_WIDTH", "wide")
    with pytest.raises(ConfigError):
        naming_width(True)


def test_negated_unquote_in_dots(env, interp):
    d = interp.eval(call("capture_dots", call("!", call("UQ", sym("x")))))
    assert exprs(d) == [call("!", lit(1))]
