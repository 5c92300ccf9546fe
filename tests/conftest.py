import pytest

from quasi.interpreter import Interpreter
from quasi.types.symbol import Symbol


@pytest.fixture
def interp():
    """A fresh host session with the builtins registered."""
    return Interpreter()


@pytest.fixture
def env(interp):
    """Global scope of the session, with a few bound variables."""
    e = interp.env
    e.define(Symbol("x"), 1)
    e.define(Symbol("y"), 2)
    e.define(Symbol("var"), "foo")
    return e

