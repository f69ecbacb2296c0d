"""Integration adapter for converting trees to and from lxml.

Text leaves map onto lxml ``text``/``tail`` strings: consecutive leaves are
joined with newlines, and converting back splits text on newlines, dropping
whitespace-only lines such as pretty-printing indentation.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from html_dom_tree.shared import TreeConfig, get_logger
from html_dom_tree.tree import DOMTree, TagNode

TEXT_JOINER = "\n"


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


def _text_lines(text: Optional[str]) -> Iterator[str]:
    if not text:
        return
    for line in text.split(TEXT_JOINER):
        if line.strip():
            yield line


class LxmlAdapter:
    """Bidirectional conversion between DOMTree and lxml.etree elements."""

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "lxml_adapter")

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def to_target(self, tree: DOMTree) -> ConversionResult:
        """Convert a DOMTree to an lxml.etree element.

        The tree must consist of a single top-level element.
        """
        start_time = time.time()

        if not self.is_available():
            return self._create_error_result("lxml is not installed", tree, start_time)
        import lxml.etree as ET

        root = tree.root
        if root is None:
            return self._create_error_result("Tree is empty", tree, start_time)
        if root.is_leaf or root.sibling is not None:
            return self._create_error_result(
                "Tree must have exactly one top-level element", tree, start_time
            )

        try:
            element = self._convert_node_to_lxml(root, ET)
        except ValueError as e:
            return self._create_error_result(
                f"Failed to convert to lxml: {e}", tree, start_time
            )

        processing_time = (time.time() - start_time) * 1000
        self._logger.debug("Converted tree to lxml",
                           extra={"conversion_time_ms": processing_time})
        return ConversionResult(
            success=True,
            converted_data=element,
            original_data=tree,
            conversion_time_ms=processing_time,
            metadata={
                "lxml_version": ET.LXML_VERSION,
                "element_count": sum(1 for _ in element.iter()),
            }
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert an lxml.etree element to a DOMTree.

        Comments and processing instructions are dropped; their tails are
        kept. Elements without any content cannot be represented and are
        dropped with a warning.
        """
        start_time = time.time()

        if not hasattr(target_data, "tag") or not isinstance(target_data.tag, str):
            return self._create_error_result(
                "Target data is not a valid lxml element", target_data, start_time
            )

        warnings: List[str] = []
        tokens = list(self._element_tokens(target_data, warnings))
        tree = DOMTree.from_tokens(tokens, self.config, self.correlation_id)

        processing_time = (time.time() - start_time) * 1000
        return ConversionResult(
            success=True,
            converted_data=tree,
            original_data=target_data,
            conversion_time_ms=processing_time,
            warnings=warnings,
            metadata={"token_count": len(tokens)},
        )

    def _convert_node_to_lxml(self, node: TagNode, ET: Any) -> Any:
        element = ET.Element(node.tag)
        last_child = None
        for child in node.iter_children():
            if child.is_leaf:
                if last_child is None:
                    element.text = self._append_text(element.text, child.tag)
                else:
                    last_child.tail = self._append_text(last_child.tail, child.tag)
            else:
                last_child = self._convert_node_to_lxml(child, ET)
                element.append(last_child)
        return element

    @staticmethod
    def _append_text(existing: Optional[str], text: str) -> str:
        return text if existing is None else existing + TEXT_JOINER + text

    def _element_tokens(self, element: Any, warnings: List[str]) -> Iterator[str]:
        # Strip any "{namespace}" prefix
        name = element.tag.rsplit("}", 1)[-1]
        content: List[str] = list(_text_lines(element.text))
        for child in element:
            if isinstance(child.tag, str):
                content.extend(self._element_tokens(child, warnings))
            content.extend(_text_lines(child.tail))

        if not content:
            warnings.append(f"Dropped empty element <{name}>")
            return

        yield f"<{name}>"
        yield from content
        yield f"</{name}>"

    def _create_error_result(
        self, message: str, original_data: Any, start_time: float
    ) -> ConversionResult:
        self._logger.warning(message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            errors=[message],
        )
