"""html-dom-tree.

Parses a line-tokenized HTML-like markup format into a first-child/
next-sibling tree, edits it in place (tag renaming, table-row bolding, tag
removal, word tagging) and serializes it back to the same line format.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: DOMTree editing operations and EditorConfig
- Level 3: TreeBuilder and TagNode for working with the raw node chain
"""

__version__ = "0.1.0"

from .api import parse, parse_file, parse_stream, parse_string, write_file
from .shared.config import EditorConfig, TokenizationConfig, TreeConfig
from .shared.result import EditResult
from .tree import DOMTree, TagNode, TreeBuilder

__all__ = [
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_file",
    "parse_stream",
    "parse_string",
    "write_file",

    # Level 2: Tree and configuration
    "DOMTree",
    "EditResult",
    "EditorConfig",
    "TokenizationConfig",
    "TreeConfig",

    # Level 3: Node chain
    "TagNode",
    "TreeBuilder",
]
