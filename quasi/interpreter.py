from quasi import Expression, Value
from quasi.builtin.env_builtin import register
from quasi.evaluation.evaluator import evaluate
from quasi.types.environment import Environment
from quasi.types.symbol import Symbol


class Interpreter:
    """
    Host session for quasi expressions.
    Maintains a global Environment with the builtins registered across calls.
    """
    def __init__(self):
        self.env = Environment()
        register(self.env)

    def define(self, name, value: Value) -> None:
        """Bind a Python value (or Closure) in the global scope."""
        self.env.define(name if isinstance(name, Symbol) else Symbol(name), value)

    def eval(self, *exprs: Expression, env: Environment | None = None) -> Value:
        """Evaluate expressions in order; returns the last result."""
        scope = env if env is not None else self.env
        result = None
        for expr in exprs:
            result = evaluate(expr, scope)
        return result
