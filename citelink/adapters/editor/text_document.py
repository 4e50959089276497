"""
TextDocument - Minimal host editor implementing EditorHostPort.

A single paragraph of inline nodes (text runs, citation tokens, opaque
nodes) with a caret inside a text run. Used for service mode, headless
document processing, and as the reference host in tests.

Usage:
    doc = TextDocument()
    doc.type_text("See [2")
    doc.get_text_before_caret()  # "See [2"
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from citelink.core.citation.document_codec import (
    InlineNode,
    deserialize_document,
    serialize_document,
)
from citelink.core.models.citation import CitationToken
from citelink.core.ports.editor import EditorHostPort

logger = logging.getLogger(__name__)


class TextDocument(EditorHostPort):
    """In-memory inline document with a caret."""

    def __init__(self, nodes: Optional[Sequence[InlineNode]] = None):
        self.nodes: List[InlineNode] = list(nodes or [])
        self._caret: Optional[Tuple[int, int]] = None  # (node index, offset)
        self._collapsed = True
        self.place_caret_at_end()

    @classmethod
    def from_records(cls, records: Sequence[Dict[str, Any]]) -> "TextDocument":
        return cls(deserialize_document(records))

    def to_records(self) -> List[Dict[str, Any]]:
        """Serialize, dropping empty text runs."""
        return serialize_document([n for n in self.nodes if n != ""])

    @property
    def text_content(self) -> str:
        return "".join(n if isinstance(n, str) else n.text for n in self.nodes)

    @property
    def citations(self) -> List[CitationToken]:
        return [n for n in self.nodes if isinstance(n, CitationToken)]

    # Selection handling

    def place_caret_at_end(self) -> None:
        if not self.nodes or not isinstance(self.nodes[-1], str):
            self.nodes.append("")
        self._caret = (len(self.nodes) - 1, len(self.nodes[-1]))
        self._collapsed = True

    def set_caret(self, index: int, offset: int) -> None:
        """Place a collapsed caret inside text run `index`."""
        node = self.nodes[index]
        if not isinstance(node, str):
            raise ValueError(f"Node {index} is not a text run")
        if not 0 <= offset <= len(node):
            raise ValueError(f"Offset {offset} outside text run of length {len(node)}")
        self._caret = (index, offset)
        self._collapsed = True

    def expand_selection(self) -> None:
        """Simulate a range selection (no longer collapsed)."""
        self._collapsed = False

    def blur(self) -> None:
        """Simulate focus leaving the editor."""
        self._caret = None

    def type_text(self, text: str) -> None:
        """Insert text at the caret and advance it."""
        if self._caret is None or not self._collapsed:
            raise ValueError("No collapsed caret to type at")
        index, offset = self._caret
        node = self.nodes[index]
        self.nodes[index] = node[:offset] + text + node[offset:]
        self._caret = (index, offset + len(text))

    # EditorHostPort

    def get_text_before_caret(self) -> Optional[str]:
        if self._caret is None or not self._collapsed:
            return None
        index, offset = self._caret
        node = self.nodes[index]
        if not isinstance(node, str):
            return None
        return node[:offset]

    def insert_citation(self, token: CitationToken, replace_length: int = 0) -> None:
        if self._caret is None or not self._collapsed:
            logger.debug("insert_citation called without a collapsed caret")
            return
        index, offset = self._caret
        node = self.nodes[index]
        start = max(0, offset - replace_length)
        self.nodes[index:index + 1] = [node[:start], token, node[offset:]]
        self._caret = (index + 2, 0)

    def replace_citation(self, old: CitationToken, new: CitationToken) -> bool:
        for i, node in enumerate(self.nodes):
            if node is old:
                self.nodes[i] = new
                return True
        for i, node in enumerate(self.nodes):
            if isinstance(node, CitationToken) and node == old:
                self.nodes[i] = new
                return True
        return False
