"""Interpreter-internal exceptions."""


class ExpressionSyntaxError(ValueError):
    """Raised when an expression does not fit the macro grammar.

    Never escapes the interpreter: grammar rules treat it as "this form
    does not apply" and fall through to the next rule.
    """
