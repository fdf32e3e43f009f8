"""JSON files for analysis results and their call graphs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import networkx as nx
from networkx.readwrite import json_graph

from .models import AnalysisResult


def save_result(result: AnalysisResult, path: str | Path) -> None:
    _write_json(path, result.to_dict())


def load_result(path: str | Path) -> AnalysisResult:
    return AnalysisResult.from_dict(_read_json(path))


def save_graph(graph: nx.DiGraph, path: str | Path) -> None:
    """Write the call graph in node-link form, with call lines kept sorted."""
    data = json_graph.node_link_data(graph)
    for link in data.get("links", data.get("edges", [])):
        link["lines"] = sorted(link.get("lines", []))
    _write_json(path, data)


def load_graph(path: str | Path) -> nx.DiGraph:
    graph = json_graph.node_link_graph(_read_json(path), directed=True)
    if not isinstance(graph, nx.DiGraph) or graph.is_multigraph():
        raise ValueError(f"{path} does not hold a call graph")
    return graph


def _write_json(path: str | Path, data: dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(data, indent=2), encoding="utf-8")


def _read_json(path: str | Path) -> dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))
