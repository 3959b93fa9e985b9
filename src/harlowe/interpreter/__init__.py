"""Macro and expression interpreter for passage markup."""

from .assignments import AssignmentExecutor, apply_set_macros, is_arithmetic_command
from .conditionals import Branch, ConditionalChain, ConditionalEvaluator, parse_chain, remove_orphaned_branches
from .context import EvaluationContext
from .expressions import ExpressionEvaluator
from .links import extract_choices, parse_link_text, strip_links
from .printing import PrintResolver
from .visited import VisitedEvaluator

__all__ = [
    "AssignmentExecutor",
    "Branch",
    "ConditionalChain",
    "ConditionalEvaluator",
    "EvaluationContext",
    "ExpressionEvaluator",
    "PrintResolver",
    "VisitedEvaluator",
    "apply_set_macros",
    "extract_choices",
    "is_arithmetic_command",
    "parse_chain",
    "parse_link_text",
    "remove_orphaned_branches",
    "strip_links",
]
