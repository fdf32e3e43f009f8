"""Lightweight data models for extracted symbols and call edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# Struct and interface declarations are reported as classes downstream.
KIND_TYPE = "class"
KIND_FUNCTION = "function"
KIND_METHOD = "method"

EDGE_CALLS = "calls"


@dataclass(frozen=True)
class Location:
    path: str
    relative_path: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class Symbol:
    id: str
    name: str
    kind: str
    node_type: str
    location: Location
    source_code: str
    docstring: str | None
    display_name: str
    class_name: str = ""
    parameters: tuple[str, ...] = ()

    @property
    def has_docstring(self) -> bool:
        return self.docstring is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "component_type": self.kind,
            "file_path": self.location.path,
            "relative_path": self.location.relative_path,
            "depends_on": [],
            "source_code": self.source_code,
            "start_line": self.location.start_line,
            "end_line": self.location.end_line,
            "has_docstring": self.has_docstring,
            "docstring": self.docstring or "",
            "parameters": list(self.parameters),
            "node_type": self.node_type,
            "base_classes": [],
            "class_name": self.class_name,
            "display_name": self.display_name,
            "component_id": self.id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Symbol":
        return cls(
            id=data["id"],
            name=data["name"],
            kind=data["component_type"],
            node_type=data.get("node_type", data["component_type"]),
            location=Location(
                path=data["file_path"],
                relative_path=data["relative_path"],
                start_line=data["start_line"],
                end_line=data["end_line"],
            ),
            source_code=data.get("source_code", ""),
            docstring=data.get("docstring") if data.get("has_docstring") else None,
            display_name=data.get("display_name", ""),
            class_name=data.get("class_name", ""),
            parameters=tuple(data.get("parameters") or ()),
        )


@dataclass(frozen=True)
class CallEdge:
    caller: str
    callee: str
    call_line: int
    is_resolved: bool
    relationship_type: str = EDGE_CALLS

    def to_dict(self) -> dict[str, Any]:
        return {
            "caller": self.caller,
            "callee": self.callee,
            "call_line": self.call_line,
            "is_resolved": self.is_resolved,
            "relationship_type": self.relationship_type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CallEdge":
        return cls(
            caller=data["caller"],
            callee=data["callee"],
            call_line=data.get("call_line", 0),
            is_resolved=bool(data.get("is_resolved")),
            relationship_type=data.get("relationship_type", EDGE_CALLS),
        )


@dataclass
class AnalysisResult:
    nodes: list[Symbol] = field(default_factory=list)
    call_relationships: list[CallEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "call_relationships": [edge.to_dict() for edge in self.call_relationships],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        return cls(
            nodes=[Symbol.from_dict(item) for item in data.get("nodes", [])],
            call_relationships=[
                CallEdge.from_dict(item) for item in data.get("call_relationships", [])
            ],
        )
