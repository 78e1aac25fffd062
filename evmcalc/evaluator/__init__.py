"""
Evaluator module: walks expression ASTs to produce values.
"""

from .context import EvaluationContext
from .diagnostics import Diagnostic, DiagnosticSeverity, EvalDiagnostics
from .evaluator import Evaluator

__all__ = [
    'EvaluationContext',
    'Diagnostic',
    'DiagnosticSeverity',
    'EvalDiagnostics',
    'Evaluator',
]
