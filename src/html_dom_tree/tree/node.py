"""Node model for the markup tree.

The tree is stored as a binary encoding of an n-ary tree: each node links to
its first child and to its next sibling. A node with a first child is an
element; a node without one is a text leaf.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional


@dataclass(eq=False)
class TagNode:
    """A tree node holding either an element name or literal text."""

    tag: str
    first_child: Optional["TagNode"] = None
    sibling: Optional["TagNode"] = None

    @property
    def is_leaf(self) -> bool:
        """Check if this node is a text leaf (no children)."""
        return self.first_child is None

    def iter_siblings(self) -> Iterator["TagNode"]:
        """Iterate over this node and every node after it at the same level."""
        node: Optional[TagNode] = self
        while node is not None:
            yield node
            node = node.sibling

    def iter_children(self) -> Iterator["TagNode"]:
        """Iterate over the direct children of this node."""
        if self.first_child is not None:
            yield from self.first_child.iter_siblings()

    def last_sibling(self) -> "TagNode":
        """Get the last node of the sibling chain starting at this node."""
        node = self
        while node.sibling is not None:
            node = node.sibling
        return node

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "element"
        return f"TagNode({self.tag!r}, {kind})"


def iter_preorder(root: Optional[TagNode]) -> Iterator[TagNode]:
    """Traverse a chain in document order: node, its children, then its siblings."""
    stack: List[TagNode] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.sibling is not None:
            stack.append(node.sibling)
        if node.first_child is not None:
            stack.append(node.first_child)


def count_nodes(root: Optional[TagNode]) -> int:
    """Count every node reachable from root."""
    return sum(1 for _ in iter_preorder(root))


def structurally_equal(left: Optional[TagNode], right: Optional[TagNode]) -> bool:
    """Compare two chains by label and shape."""
    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if a is None or b is None:
            if a is not b:
                return False
            continue
        if a.tag != b.tag:
            return False
        pending.append((a.sibling, b.sibling))
        pending.append((a.first_child, b.first_child))
    return True
