"""
Diagnostic collection for a single evaluation.

Records non-fatal observations made while evaluating a line, such as a
fractional literal being rounded or a unit conversion being truncated.
Errors are never recorded here; they are raised.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for evaluation diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    position: Optional[int] = None

    def __str__(self) -> str:
        if self.position is not None:
            return f'[{self.severity.value}] position {self.position}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class EvalDiagnostics:
    """
    Collects diagnostics during evaluation.

    Usage:
        diag = EvalDiagnostics()
        diag.warn_literal_rounded('1.5', 2, position=0)
        # ... after evaluation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    # =========================================================================
    # SPECIFIC DIAGNOSTICS
    # =========================================================================

    def warn_literal_rounded(self, raw: str, rounded: int, position: Optional[int] = None) -> None:
        """Warn that a fractional literal was rounded to an integer."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f"literal '{raw}' is not an integer; rounded to {rounded}",
            position=position,
        ))

    def warn_conversion_truncated(
        self,
        from_unit: str,
        to_unit: str,
        position: Optional[int] = None,
    ) -> None:
        """Warn that a unit conversion discarded a remainder."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'conversion from {from_unit} to {to_unit} is not exact; result truncated',
            position=position,
        ))

    def info_price_rounded(self, digits: int, position: Optional[int] = None) -> None:
        """Note that a price was rounded to the configured precision."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I002',
            message=f'price rounded to {digits} fraction digits',
            position=position,
        ))

    def info_unchecked(self, position: Optional[int] = None) -> None:
        """Note that a result wrapped inside an unchecked block."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message='arithmetic wrapped modulo 2**256 inside unchecked(...)',
            position=position,
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print collected diagnostics to stderr (or the given file).

        Info-level entries are only printed in verbose mode.
        """
        if file is None:
            file = sys.stderr

        for d in self._diagnostics:
            if d.severity == DiagnosticSeverity.WARNING or self._verbose:
                print(f'  {d}', file=file)
