"""Parsing API for html-dom-tree.

Module-level functions that turn a document held in a string, a file or a
stream into a built DOMTree, with logging and correlation tracking.
"""

import io
import time
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from html_dom_tree.shared import EditorConfig, get_logger
from html_dom_tree.tokenization import LineTokenizer, LineTokenSource
from html_dom_tree.tree import DOMTree

InputType = Union[str, bytes, Path, BinaryIO, TextIO]

DEFAULT_ENCODING = "utf-8"
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def _resolve_correlation_id(
    config: EditorConfig, correlation_id: Optional[str]
) -> Optional[str]:
    if correlation_id is None and config.global_.enable_correlation_tracking:
        return str(uuid.uuid4())[:8]
    return correlation_id


def parse(
    input_data: InputType,
    config: Optional[EditorConfig] = None,
    correlation_id: Optional[str] = None
) -> DOMTree:
    """Parse a document from a string, bytes, a Path or a stream.

    Strings and bytes are treated as document content, not as file names;
    pass a Path to read a file.

    Examples:
        >>> tree = parse("<p>\\nhello\\n</p>\\n")
        >>> tree.root.tag
        'p'
    """
    if isinstance(input_data, Path):
        return parse_file(input_data, config=config, correlation_id=correlation_id)
    if isinstance(input_data, bytes):
        text = input_data.decode(DEFAULT_ENCODING, errors="replace")
        return parse_string(text, config=config, correlation_id=correlation_id)
    if isinstance(input_data, str):
        return parse_string(input_data, config=config, correlation_id=correlation_id)
    if hasattr(input_data, "read"):
        return parse_stream(input_data, config=config, correlation_id=correlation_id)
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def parse_string(
    text: str,
    config: Optional[EditorConfig] = None,
    correlation_id: Optional[str] = None
) -> DOMTree:
    """Parse a document held in a string."""
    config = config or EditorConfig()
    correlation_id = _resolve_correlation_id(config, correlation_id)
    logger = get_logger(__name__, correlation_id, "parse_string")

    logger.info(
        "Starting string parse operation",
        extra={
            "content_length": len(text),
            "preview": (
                text[:PREVIEW_LENGTH] + "..." if len(text) > PREVIEW_LENGTH else text
            ),
        }
    )

    tokens = LineTokenizer(config.tokenization).tokenize(text)
    return DOMTree.from_tokens(tokens, config.tree, correlation_id)


def parse_stream(
    stream: Union[BinaryIO, TextIO],
    config: Optional[EditorConfig] = None,
    correlation_id: Optional[str] = None
) -> DOMTree:
    """Parse a document from an open stream.

    The caller owns the stream; it is read to the end but not closed.
    """
    config = config or EditorConfig()
    correlation_id = _resolve_correlation_id(config, correlation_id)
    logger = get_logger(__name__, correlation_id, "parse_stream")

    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        text_stream: TextIO = io.TextIOWrapper(stream, encoding=DEFAULT_ENCODING,
                                               errors="replace")
    else:
        text_stream = stream  # type: ignore[assignment]

    logger.info("Starting stream parse operation",
                extra={"stream_type": type(stream).__name__})

    tokens = LineTokenizer(config.tokenization).tokenize_lines(iter(text_stream))
    tree = DOMTree.from_tokens(tokens, config.tree, correlation_id)

    if text_stream is not stream:
        # Keep the caller's binary stream open
        text_stream.detach()
    return tree


def parse_file(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[EditorConfig] = None,
    correlation_id: Optional[str] = None
) -> DOMTree:
    """Parse a document from a file.

    The file is opened as the token source and closed as soon as the tree is
    built. OSError from opening the file propagates to the caller.

    Args:
        file_path: Path to the document
        encoding: Text encoding (utf-8 if not given)
        config: Editor configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The built DOMTree
    """
    start_time = time.time()
    config = config or EditorConfig()
    correlation_id = _resolve_correlation_id(config, correlation_id)
    logger = get_logger(__name__, correlation_id, "parse_file")

    path_obj = Path(file_path)
    logger.info(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "encoding": encoding}
    )

    stream = path_obj.open(encoding=encoding or DEFAULT_ENCODING, errors="replace")
    source = LineTokenSource(stream, config.tokenization)
    tree = DOMTree.from_tokens(source, config.tree, correlation_id)

    logger.info(
        "File parse completed",
        extra={
            "file_path": str(path_obj),
            "tokens_read": source.tokens_read,
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        }
    )
    return tree


def write_file(
    tree: DOMTree,
    file_path: Union[str, Path],
    encoding: Optional[str] = None
) -> Path:
    """Serialize a tree to a file in the line format."""
    path_obj = Path(file_path)
    path_obj.write_text(tree.get_html(), encoding=encoding or DEFAULT_ENCODING)
    return path_obj
