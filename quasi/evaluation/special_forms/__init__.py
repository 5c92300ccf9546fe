"""Registry of special forms for the quasi evaluator.

Maps Symbols to handler functions that receive their arguments unevaluated.
The evaluator consults this table before ordinary function application.
"""

from quasi.types.symbol import Symbol
from quasi.evaluation.special_forms.quote_forms import (
    quote_form, alist_form, tilde_form, quo_form,
    unquote_form, unquote_splice_form, definition_form,
)
from quasi.evaluation.special_forms.function_forms import function_form, assign_form, block_form
from quasi.evaluation.special_forms.capture_forms import capture_form, capture_dots_form, dots_form, defs_form

SPECIAL_FORMS = {
    Symbol("quote"): quote_form,
    Symbol("alist"): alist_form,
    Symbol("~"): tilde_form,
    Symbol("quo"): quo_form,
    Symbol("UQ"): unquote_form,
    Symbol("!!"): unquote_form,
    Symbol("UQS"): unquote_splice_form,
    Symbol("!!!"): unquote_splice_form,
    Symbol(":="): definition_form,
    Symbol("function"): function_form,
    Symbol("<-"): assign_form,
    Symbol("{"): block_form,
    Symbol("capture"): capture_form,
    Symbol("capture_dots"): capture_dots_form,
    Symbol("dots"): dots_form,
    Symbol("defs"): defs_form,
}
