"""DOM tree engine: construction, structural edits and serialization.

A DOMTree owns the root of a first-child/next-sibling tree and mutates it in
place. Every edit is total over the tree: shapes it cannot apply to (no
table, no such row, a name that never occurs) leave the tree unchanged and
are reported through the returned EditResult instead of raising.
"""

import time
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from html_dom_tree.shared import (
    DiagnosticSeverity,
    EditResult,
    TreeConfig,
    get_logger,
)

from .builder import TokenSource, TreeBuilder
from .node import TagNode, count_nodes, iter_preorder
from .words import find_whole_word

RENDER_INDENT = "      "
RENDER_BRANCH = "|---- "


class DOMTree:
    """An HTML-like document tree with in-place editing operations.

    Examples:
        >>> tree = DOMTree.from_tokens(["<p>", "the cat sat", "</p>"])
        >>> tree.add_tag("cat", "b").changes
        1
        >>> tree.get_html().splitlines()
        ['<p>', 'the ', '<b>', 'cat', '</b>', ' sat', '</p>']
    """

    def __init__(
        self,
        root: Optional[TagNode] = None,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize a tree.

        Args:
            root: Existing root node, or None for an empty document
            config: Tag names and serialization settings
            correlation_id: Optional correlation ID for request tracking
        """
        self.root = root
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "dom_tree")
        self.history: List[EditResult] = []

    @classmethod
    def from_tokens(
        cls,
        source: TokenSource,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "DOMTree":
        """Create a tree and build it from a token source."""
        tree = cls(config=config, correlation_id=correlation_id)
        tree.build(source)
        return tree

    @property
    def is_empty(self) -> bool:
        return self.root is None

    @property
    def node_count(self) -> int:
        return count_nodes(self.root)

    def iter_nodes(self) -> Iterator[TagNode]:
        """Iterate over all nodes in document order."""
        return iter_preorder(self.root)

    @contextmanager
    def _operation(self, name: str, **arguments: Any) -> Iterator[EditResult]:
        result = EditResult(
            operation=name,
            arguments=arguments,
            correlation_id=self.correlation_id,
        )
        start_time = time.time()
        self.logger.debug(f"Starting {name}", extra={"arguments": arguments})

        yield result

        result.processing_time_ms = (time.time() - start_time) * 1000
        self.history.append(result)
        self.logger.info(
            f"{name} completed",
            extra={
                "changes": result.changes,
                "processing_time_ms": result.processing_time_ms,
            }
        )

    def _note(self, result: EditResult, message: str, **details: Any) -> None:
        result.add_diagnostic(
            DiagnosticSeverity.INFO, message, "dom_tree", details=details or None
        )

    # Construction

    def build(self, source: TokenSource) -> EditResult:
        """Replace the tree with one built from a token source.

        The source is closed once construction ends.
        """
        with self._operation("build") as result:
            builder = TreeBuilder(self.correlation_id)
            self.root = builder.build(source)
            result.changes = builder.nodes_created
            if self.root is None:
                self._note(result, "Empty input - empty tree created")
        return result

    # Tag renaming

    def replace_tag(self, old_tag: str, new_tag: str) -> EditResult:
        """Rename every node whose label is exactly old_tag.

        Labels are compared literally, so a text leaf whose whole text equals
        old_tag is renamed as well.
        """
        with self._operation("replace_tag", old_tag=old_tag, new_tag=new_tag) as result:
            for node in self.iter_nodes():
                if node.tag == old_tag:
                    node.tag = new_tag
                    result.changes += 1
        return result

    # Table row styling

    def bold_row(self, row: int) -> EditResult:
        """Boldface every column of a row of the first table.

        The bold element is inserted directly under each column element, so
        it wraps the column's previous content. Rows are numbered from 1.
        Text leaves directly under the row are not columns and are left
        unchanged; an out-of-range row is a no-op.
        """
        with self._operation("bold_row", row=row) as result:
            table = self._find_table()
            if table is None:
                self._note(result, "No table element found",
                           table_tag=self.config.table_tag)
                return result

            row_node = self._find_row(table, row)
            if row_node is None:
                self._note(result, "Row out of range", row=row)
                return result

            for column in row_node.iter_children():
                if column.is_leaf:
                    continue
                column.first_child = TagNode(self.config.bold_tag, column.first_child)
                result.changes += 1

            if result.changes == 0:
                self._note(result, "Row has no columns", row=row)
        return result

    def _find_table(self) -> Optional[TagNode]:
        """Find the first table element, searching siblings before children."""
        stack: List[TagNode] = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            if node.tag == self.config.table_tag and not node.is_leaf:
                return node
            if node.first_child is not None:
                stack.append(node.first_child)
            if node.sibling is not None:
                stack.append(node.sibling)
        return None

    def _find_row(self, table: TagNode, row: int) -> Optional[TagNode]:
        if row < 1:
            return None
        row_node = table.first_child
        for _ in range(row - 1):
            row_node = row_node.sibling
            if row_node is None:
                return None
        return row_node

    # Tag removal

    def remove_tag(self, tag: str) -> EditResult:
        """Remove every element labeled tag, keeping its content in place.

        The removed element's children take its position in the sibling
        chain. When tag is a list container, list items directly under it
        become paragraphs.
        """
        with self._operation("remove_tag", tag=tag) as result:
            if self.root is not None:
                result.changes = self._remove_tag(
                    self.root, tag, tag in self.config.list_tags
                )
        return result

    def _remove_tag(self, node: Optional[TagNode], tag: str, is_list: bool) -> int:
        removed = 0
        while node is not None:
            # The slot is re-tested: promoted content may be the tag again
            while node.first_child is not None and node.tag == tag:
                self._unwrap(node, is_list)
                removed += 1

            if node.first_child is not None:
                removed += self._remove_tag(node.first_child, tag, is_list)
            node = node.sibling
        return removed

    def _unwrap(self, node: TagNode, relabel_items: bool) -> None:
        """Replace node by its children, splicing them into its sibling chain."""
        child = node.first_child
        following = node.sibling

        node.tag = child.tag
        node.first_child = child.first_child

        spliced_end = node
        if child.sibling is not None:
            spliced_end = child.sibling.last_sibling()
            node.sibling = child.sibling
            spliced_end.sibling = following

        if relabel_items:
            for item in node.iter_siblings():
                if item.tag == self.config.list_item_tag:
                    item.tag = self.config.paragraph_tag
                if item is spliced_end:
                    break

    # Word tagging

    def add_tag(self, word: str, tag: str) -> EditResult:
        """Wrap every whole-word occurrence of word in text leaves with tag.

        Matching ignores case and accepts one trailing punctuation character
        as part of the word. Text already inside a tag element is left alone.
        """
        with self._operation("add_tag", word=word, tag=tag) as result:
            if not word:
                self._note(result, "Empty word - nothing to tag")
            elif not tag:
                self._note(result, "Empty tag - nothing to wrap with")
            elif self.root is not None:
                result.changes = self._add_tag(self.root, word, tag)
        return result

    def _add_tag(self, node: Optional[TagNode], word: str, tag: str) -> int:
        added = 0
        while node is not None:
            if not node.is_leaf:
                if node.tag != tag:
                    added += self._add_tag(node.first_child, word, tag)
                node = node.sibling
                continue

            span = find_whole_word(node.tag, word, self.config.word_punctuation)
            if span is None:
                node = node.sibling
                continue

            text = node.tag
            left, matched, right = text[:span.start], text[span.start:span.end], text[span.end:]

            after = node.sibling
            if right:
                after = TagNode(right, None, after)

            if left:
                node.tag = left
                node.sibling = TagNode(tag, TagNode(matched), after)
            else:
                node.tag = tag
                node.first_child = TagNode(matched)
                node.sibling = after

            added += 1
            node = after
        return added

    # Serialization

    def get_html(self) -> str:
        """Serialize the tree to the line format, one token per line."""
        parts: List[str] = []
        if self.root is not None:
            self._write_html(self.root, parts)
        return "".join(parts)

    def _write_html(self, node: TagNode, parts: List[str]) -> None:
        separator = self.config.line_separator
        for current in node.iter_siblings():
            if current.is_leaf:
                parts.append(current.tag + separator)
            else:
                parts.append(f"<{current.tag}>{separator}")
                self._write_html(current.first_child, parts)
                parts.append(f"</{current.tag}>{separator}")

    def render(self) -> str:
        """Render the tree as an indented outline for inspection."""
        lines: List[str] = []
        if self.root is not None:
            self._render(self.root, 1, lines)
        return "\n".join(lines)

    def _render(self, node: TagNode, level: int, lines: List[str]) -> None:
        marker = RENDER_INDENT if level == 1 else RENDER_BRANCH
        for current in node.iter_siblings():
            lines.append(RENDER_INDENT * (level - 1) + marker + current.tag)
            if current.first_child is not None:
                self._render(current.first_child, level + 1, lines)

    def __str__(self) -> str:
        return self.get_html()

    def __repr__(self) -> str:
        root_tag = self.root.tag if self.root is not None else None
        return f"DOMTree(root={root_tag!r}, nodes={self.node_count})"
