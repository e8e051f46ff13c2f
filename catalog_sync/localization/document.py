"""Translation catalog documents.

A document is a tree of ``MappingNode`` interior nodes and ``LeafNode``
leaves. Only the mapping/leaf distinction matters to the sync logic, so any
non-mapping value parsed from a file (string, number, list, null) becomes a
leaf.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Union


def join_path(prefix: str, key: str) -> str:
    """Append ``key`` to a dotted path prefix."""
    return f"{prefix}.{key}" if prefix else key


@dataclass
class LeafNode:
    """A translatable value."""

    value: Any

    @property
    def text(self) -> str:
        """String form used for translation and reporting."""
        if isinstance(self.value, str):
            return self.value
        if self.value is None or isinstance(self.value, (bool, int, float, list)):
            return json.dumps(self.value, ensure_ascii=False, default=str)
        # YAML scalars such as dates and timestamps
        return str(self.value)

    def to_data(self) -> Any:
        return self.value


@dataclass
class MappingNode:
    """An ordered mapping from key to child node."""

    children: Dict[str, "Node"] = field(default_factory=dict)

    def __contains__(self, key: str) -> bool:
        return key in self.children

    def __getitem__(self, key: str) -> "Node":
        return self.children[key]

    def __setitem__(self, key: str, node: "Node") -> None:
        self.children[key] = node

    def __len__(self) -> int:
        return len(self.children)

    def items(self):
        return self.children.items()

    def to_data(self) -> Dict[str, Any]:
        """Convert back to plain nested dicts, keeping key order."""
        return {key: child.to_data() for key, child in self.children.items()}

    def leaf_paths(self, prefix: str = "") -> Iterator[str]:
        """Yield the dotted path of every leaf in document order."""
        for key, child in self.children.items():
            path = join_path(prefix, key)
            match child:
                case MappingNode():
                    yield from child.leaf_paths(path)
                case LeafNode():
                    yield path

    def get_path(self, path: str) -> Optional["Node"]:
        """Return the node at a dotted path, or None if it does not exist."""
        node: Node = self
        for key in path.split("."):
            match node:
                case MappingNode(children=children) if key in children:
                    node = children[key]
                case _:
                    return None
        return node


Node = Union[MappingNode, LeafNode]


def node_from_data(data: Any) -> Node:
    """Build a document tree from parsed JSON or YAML data."""
    if isinstance(data, dict):
        return MappingNode({str(key): node_from_data(value) for key, value in data.items()})
    return LeafNode(data)


def document_from_data(data: Dict[str, Any]) -> MappingNode:
    """Build a document from a top-level mapping."""
    if not isinstance(data, dict):
        raise TypeError(f"Document root must be a mapping, got {type(data).__name__}")
    return MappingNode({str(key): node_from_data(value) for key, value in data.items()})
