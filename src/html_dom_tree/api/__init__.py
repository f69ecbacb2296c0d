"""Public parsing API and integration adapters."""

from .adapters import ConversionResult, LxmlAdapter
from .parser import parse, parse_file, parse_stream, parse_string, write_file

__all__ = [
    "ConversionResult",
    "LxmlAdapter",
    "parse",
    "parse_file",
    "parse_stream",
    "parse_string",
    "write_file",
]
