"""
Evaluation context passed down the AST walk.

The context is immutable: entering an unchecked block or a deeper node
produces a derived copy, so the unchecked flag stays scoped to its subtree
and never leaks to sibling expressions. The diagnostics collector and the
config are shared by every derived copy.
"""

from dataclasses import dataclass, field, replace

from ..config import EvaluatorConfig
from ..errors import RecursionLimitExceededError
from .diagnostics import EvalDiagnostics


@dataclass(frozen=True)
class EvaluationContext:
    """Holds the state needed while evaluating one line."""

    config: EvaluatorConfig = field(default_factory=EvaluatorConfig)
    diagnostics: EvalDiagnostics = field(default_factory=EvalDiagnostics)

    # Wrapping arithmetic inside unchecked(...)
    unchecked: bool = False

    # Current AST depth
    depth: int = 0

    def as_unchecked(self) -> 'EvaluationContext':
        return replace(self, unchecked=True)

    def descend(self, position: int = 0) -> 'EvaluationContext':
        """Return the context for a child node, enforcing the depth limit."""
        depth = self.depth + 1
        if depth > self.config.max_depth:
            raise RecursionLimitExceededError(
                f'expression nested deeper than {self.config.max_depth} levels', position
            )
        return replace(self, depth=depth)

    def now(self) -> int:
        """Current Unix timestamp in whole seconds."""
        return int(self.config.clock())
