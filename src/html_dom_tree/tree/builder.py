"""Tree construction from a line token source.

Construction is a recursive descent that mirrors a stack-based parser without
an explicit stack: each call builds one level of siblings and recurses only
when an opening tag needs its children. All levels share one token iterator,
so a closing tag consumed by an inner level is never seen by an outer one.
"""

import time
from typing import Iterable, Iterator, Optional, Union

from html_dom_tree.shared import get_logger
from html_dom_tree.tokenization import Token, make_token

from .node import TagNode

TokenSource = Iterable[Union[str, Token]]


def close_source(source: object) -> None:
    """Close a token source if it holds a resource."""
    close = getattr(source, "close", None)
    if callable(close):
        close()


class TreeBuilder:
    """Builds a first-child/next-sibling tree from a token source.

    The source is consumed once and closed when construction ends, whether the
    source was empty, fully read, or an exception interrupted the build.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")

        self.tokens_consumed = 0
        self.nodes_created = 0
        self.max_depth = 0

    def build(self, source: TokenSource) -> Optional[TagNode]:
        """Build a tree from a token source.

        Args:
            source: Iterable of raw token strings or Token objects

        Returns:
            Root of the tree, or None if the source yielded no tokens
        """
        start_time = time.time()
        self._reset_state()

        try:
            tokens = self._iter_tokens(source)
            first = next(tokens, None)
            if first is None:
                self.logger.info("Empty token source - empty tree created")
                return None

            root = self._new_node(first)
            self._build_level(tokens, root, first, depth=1)
        finally:
            close_source(source)

        self.logger.info(
            "Tree building completed",
            extra={
                "tokens_consumed": self.tokens_consumed,
                "nodes_created": self.nodes_created,
                "max_depth": self.max_depth,
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return root

    def _reset_state(self) -> None:
        self.tokens_consumed = 0
        self.nodes_created = 0
        self.max_depth = 0

    def _iter_tokens(self, source: TokenSource) -> Iterator[Token]:
        for item in source:
            self.tokens_consumed += 1
            yield item if isinstance(item, Token) else make_token(item)

    def _new_node(self, token: Token) -> TagNode:
        self.nodes_created += 1
        return TagNode(token.value)

    def _build_level(
        self,
        tokens: Iterator[Token],
        sub_root: TagNode,
        sub_root_token: Token,
        depth: int
    ) -> TagNode:
        """Build the sibling chain that starts at sub_root.

        Args:
            tokens: Shared token iterator
            sub_root: First node of this level, already created
            sub_root_token: Token sub_root was created from
            depth: Nesting depth of this level (top level is 1)

        Returns:
            sub_root
        """
        self.max_depth = max(self.max_depth, depth)
        current = sub_root
        # Opening token of the current node while it still awaits its children
        pending: Optional[Token] = sub_root_token if sub_root_token.is_opening else None

        for token in tokens:
            if token.is_closing:
                # Ends this level; never materialized as a node
                return sub_root

            if pending is not None:
                child = self._new_node(token)
                current.first_child = child
                current.tag = pending.name
                pending = None
                self._build_level(tokens, child, token, depth + 1)
            else:
                sibling = self._new_node(token)
                current.sibling = sibling
                current = sibling
                pending = token if token.is_opening else None

        return sub_root
