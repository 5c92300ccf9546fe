# Core type aliases for quasi's data model.
# Expressions are trees of Symbol, Literal and Call nodes (see quasi.types.expression),
# plus the dedicated marker variants produced by the builders. Runtime values are
# plain Python objects (numbers, strings, numpy arrays, Quotes, closures, ...).
#
# Naming guidance:
# - Expression: use in builder/interpolation/capture code to denote unevaluated trees.
# - Value:      use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

# Runtime value alias
Value = Any
# Expression trees (Symbol | Literal | Call | Unquote | UnquoteSplice | DefinitionForm)
Expression = Any

# Evaluator function type: evaluates an expression in an environment
EvaluatorFn = Callable[..., Value]
