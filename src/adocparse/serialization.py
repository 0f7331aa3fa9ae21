"""Tree serialization: JSON round-trip for adocparse nodes.

Converts typed nodes to/from JSON-compatible dicts. Useful for handing a
parsed tree to an out-of-process renderer, caching, and debugging.

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from adocparse import parse
    from adocparse.serialization import to_json, from_json

    doc = parse("== Hello *World*")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import fields
from enum import Enum
from types import MappingProxyType
from typing import Any

from adocparse.config import ParseConfig, SafeMode
from adocparse.location import SourceLocation
from adocparse.nodes import (
    Admonition,
    AdmonitionKind,
    Attribute,
    AttributeReference,
    DelimitedBlock,
    Document,
    Emphasis,
    ListItem,
    ListKind,
    Monospace,
    Node,
    Paragraph,
    Section,
    Strong,
    Text,
)

# Registry of type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Section": Section,
    "Paragraph": Paragraph,
    "ListItem": ListItem,
    "Admonition": Admonition,
    "DelimitedBlock": DelimitedBlock,
    "Text": Text,
    "Strong": Strong,
    "Emphasis": Emphasis,
    "Monospace": Monospace,
    "AttributeReference": AttributeReference,
    "Attribute": Attribute,
}

_ENUM_TYPES: dict[str, type[Enum]] = {
    "ListKind": ListKind,
    "AdmonitionKind": AdmonitionKind,
    "SafeMode": SafeMode,
}


def to_dict(node: Node | Attribute) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, locations, enums and the
    configuration snapshot.

    Args:
        node: Any adocparse node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, (Node, Attribute)):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "end_lineno": value.end_lineno,
            "source_file": value.source_file,
        }
    if isinstance(value, ParseConfig):
        return {
            "_type": "ParseConfig",
            "safe_mode": _serialize_value(value.safe_mode),
            "attribute_overrides": dict(value.attribute_overrides),
            "header_footer": value.header_footer,
        }
    if isinstance(value, Enum):
        return {"_type": type(value).__name__, "value": value.value}
    if isinstance(value, Mapping):
        # Keys are user data and may themselves be "_type"
        return {"_type": "Attributes", "items": dict(value)}
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                end_lineno=value.get("end_lineno"),
                source_file=value.get("source_file"),
            )
        if type_name == "ParseConfig":
            return ParseConfig(
                safe_mode=_deserialize_value(value["safe_mode"]),
                attribute_overrides=value.get("attribute_overrides", {}),
                header_footer=value.get("header_footer", False),
            )
        if type_name == "Attributes":
            return MappingProxyType(dict(value["items"]))
        if type_name in _ENUM_TYPES:
            return _ENUM_TYPES[type_name](value["value"])
        if type_name is not None:
            return from_dict(value)
        return MappingProxyType(dict(value))
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
