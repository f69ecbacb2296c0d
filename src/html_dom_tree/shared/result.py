"""Result objects and diagnostic types for html-dom-tree.

Every tree operation reports what it did through an EditResult, so callers
can tell an edit that changed nothing apart from one that did.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages, e.g. why an edit was a no-op
    WARNING = auto()    # Warnings about potential issues
    ERROR = auto()      # Error conditions


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to dictionary representation."""
        result: Dict[str, Any] = {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result


@dataclass
class EditResult:
    """Outcome of a single tree operation."""

    operation: str
    changes: int = 0
    processing_time_ms: float = 0.0
    arguments: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate edit result."""
        if not self.operation:
            raise ValueError("Operation name cannot be empty")
        if self.changes < 0:
            raise ValueError("changes must be >= 0")

    @property
    def changed(self) -> bool:
        """Check if the operation modified the tree."""
        return self.changes > 0

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            "operation": self.operation,
            "arguments": dict(self.arguments),
            "changes": self.changes,
            "changed": self.changed,
            "processing_time_ms": self.processing_time_ms,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "correlation_id": self.correlation_id,
        }
