"""Tree engine for html-dom-tree.

Key Components:
    TagNode: First-child/next-sibling node holding an element name or text
    TreeBuilder: Builds a tree from a line token source
    DOMTree: Owns a tree and applies the editing operations to it
"""

from .builder import TreeBuilder, close_source
from .dom import DOMTree
from .node import TagNode, count_nodes, iter_preorder, structurally_equal
from .words import WordSpan, find_whole_word, iter_whole_words

__all__ = [
    "DOMTree",
    "TagNode",
    "TreeBuilder",
    "WordSpan",
    "close_source",
    "count_nodes",
    "find_whole_word",
    "iter_preorder",
    "iter_whole_words",
    "structurally_equal",
]
