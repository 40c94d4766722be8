"""Registry of special forms for the Lisper evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before ordinary function application, so a
special form name cannot be shadowed by a binding.
"""

from lisper.types.symbol import Symbol
from lisper.evaluation.special_forms.if_form import if_form
from lisper.evaluation.special_forms.lambda_form import lambda_form
from lisper.evaluation.special_forms.defun_form import defun_form
from lisper.evaluation.special_forms.define_form import define_form
from lisper.evaluation.special_forms.set_form import set_form
from lisper.evaluation.special_forms.quote_form import quote_form
from lisper.evaluation.special_forms.progn_form import progn_form

SPECIAL_FORMS = {
    Symbol("if"): if_form,
    Symbol("lambda"): lambda_form,
    Symbol("defun"): defun_form,
    Symbol("def"): define_form,
    Symbol("define"): define_form,
    Symbol("set!"): set_form,
    Symbol("quote"): quote_form,
    Symbol("progn"): progn_form,
    Symbol("begin"): progn_form,
}
