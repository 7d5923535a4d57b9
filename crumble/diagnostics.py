"""
Diagnostic sink shared by the scanner and parser.

The sink collects every reported error, writes it to an output stream and
keeps the "had error" flag a driver uses to choose the exit status. One sink
is owned by the driver and reset between independent runs.

Author: crumble maintainers
"""

import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO, Tuple


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A single error or warning attached to a source line."""
    message: str
    line: int
    severity: str = "error"  # "error", "warning"
    where: str = ""          # location fragment such as " at end"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"[line {self.line}] {self.severity.capitalize()}{self.where}: {self.message}"

    def details(self) -> str:
        """Render the diagnostic with its code, help text and suggestions."""
        result = str(self)
        if self.code:
            result += f" ({self.code})"
        if self.help_text:
            result += f"\n  help: {self.help_text}"
        for suggestion in self.suggestions:
            result += f"\n    - {suggestion}"
        return result


class DiagnosticSink:
    """Records diagnostics and the had-error condition."""

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Where rendered diagnostics are written. Defaults to
                stderr; use ``quiet()`` for a sink that writes nothing.
        """
        self.stream: Optional[TextIO] = stream if stream is not None else sys.stderr
        self.diagnostics: List[Diagnostic] = []
        self.had_error = False

    @classmethod
    def quiet(cls) -> "DiagnosticSink":
        """Create a sink that only records, without writing anywhere."""
        sink = cls()
        sink.stream = None
        return sink

    def report(self, line: int, message: str, where: str = "") -> Diagnostic:
        """Record an error at ``line`` and mark the sink as failed."""
        return self.add(Diagnostic(message=message, line=line, where=where))

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        """Record a prebuilt diagnostic."""
        self.diagnostics.append(diagnostic)
        if diagnostic.severity == "error":
            self.had_error = True

        logger.debug("diagnostic %s", diagnostic.details())
        if self.stream is not None:
            print(diagnostic, file=self.stream)

        return diagnostic

    def reset(self) -> None:
        """Clear the had-error flag and recorded diagnostics."""
        self.diagnostics.clear()
        self.had_error = False

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    def __len__(self) -> int:
        return len(self.diagnostics)
