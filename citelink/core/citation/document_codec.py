"""
Document codec for inline node lists.

Saved documents hold a flat list of inline records. Text runs become
{"type": "text", "text": ...}, tokens become tagged citation records,
and anything else is kept as an OpaqueNode and written back verbatim
so documents round-trip through consumers that do not know a node type.
"""
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Union

from citelink.core.models.citation import (
    CitationToken,
    deserialize_citation,
    is_citation_record,
    serialize_citation,
)

logger = logging.getLogger(__name__)

TEXT_NODE_TYPE = "text"


@dataclass(frozen=True)
class OpaqueNode:
    """A node this subsystem does not understand."""

    record: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return ""


InlineNode = Union[str, CitationToken, OpaqueNode]


def serialize_document(nodes: Sequence[InlineNode]) -> List[Dict[str, Any]]:
    """Encode inline nodes as records."""
    records = []
    for node in nodes:
        if isinstance(node, CitationToken):
            records.append(serialize_citation(node))
        elif isinstance(node, OpaqueNode):
            records.append(copy.deepcopy(node.record))
        else:
            records.append({"type": TEXT_NODE_TYPE, "text": str(node)})
    return records


def deserialize_document(records: Sequence[Dict[str, Any]]) -> List[InlineNode]:
    """
    Decode records to inline nodes.

    Citation records go through the citation deserializer, which never
    fails on a damaged reference; unknown records pass through.
    """
    nodes: List[InlineNode] = []
    for record in records:
        if is_citation_record(record):
            nodes.append(deserialize_citation(record))
        elif isinstance(record, dict) and record.get("type") == TEXT_NODE_TYPE:
            nodes.append(str(record.get("text", "")))
        else:
            logger.debug(f"Keeping unrecognized node: {record!r}")
            nodes.append(OpaqueNode(record=copy.deepcopy(record) if isinstance(record, dict) else {"value": record}))
    return nodes
