"""Shared utilities for html-dom-tree.

This module provides configuration objects, result types and logging helpers
used across the tokenizer, the tree engine and the API layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    EditorConfig,
    GlobalConfig,
    TokenizationConfig,
    TreeConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    EditResult,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "EditorConfig",
    "GlobalConfig",
    "TokenizationConfig",
    "TreeConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "EditResult",
]
