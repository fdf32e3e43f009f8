"""NetworkX call graph construction from an analysis result."""

from __future__ import annotations

import networkx as nx

from .models import KIND_FUNCTION, KIND_METHOD, KIND_TYPE, AnalysisResult


NODE_TYPE = "Type"
NODE_FUNCTION = "Function"
NODE_METHOD = "Method"
NODE_EXTERNAL = "External"

EDGE_CALLS = "CALLS"

_NODE_TYPES = {
    KIND_TYPE: NODE_TYPE,
    KIND_FUNCTION: NODE_FUNCTION,
    KIND_METHOD: NODE_METHOD,
}


def build_graph(result: AnalysisResult) -> nx.DiGraph:
    graph = nx.DiGraph()

    for symbol in result.nodes:
        graph.add_node(
            symbol.id,
            type=_NODE_TYPES.get(symbol.kind, NODE_FUNCTION),
            name=symbol.name,
            class_name=symbol.class_name,
            path=symbol.location.relative_path,
            start_line=symbol.location.start_line,
            external=False,
        )

    for edge in result.call_relationships:
        if edge.callee not in graph:
            _ensure_external(graph, edge.callee)
        if graph.has_edge(edge.caller, edge.callee):
            graph[edge.caller][edge.callee]["lines"].append(edge.call_line)
            continue
        graph.add_edge(
            edge.caller,
            edge.callee,
            type=EDGE_CALLS,
            resolved=edge.is_resolved,
            lines=[edge.call_line],
        )

    return graph


def _ensure_external(graph: nx.DiGraph, node_id: str) -> None:
    if node_id not in graph:
        graph.add_node(
            node_id,
            type=NODE_EXTERNAL,
            name=node_id.split(".")[-1],
            class_name="",
            path=None,
            start_line=None,
            external=True,
        )
