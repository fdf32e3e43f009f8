"""Collect declared symbols from a Go Tree-sitter AST."""

from __future__ import annotations

from .identifiers import identifier_for
from .models import KIND_FUNCTION, KIND_METHOD, KIND_TYPE, Location, Symbol
from .parser import ParsedSource
from .symbols import SymbolTableBuilder
from .syntax import (
    TYPE_KINDS,
    comment_text,
    doc_comments,
    node_text,
    parameter_names,
    receiver,
)


def collect_symbols(parsed: ParsedSource, builder: SymbolTableBuilder) -> list[Symbol]:
    """Return the symbols declared in ``parsed`` and register their ids.

    The ids are only meaningful for resolution once every file of the run
    has gone through this function and the builder has been frozen.
    """
    symbols: list[Symbol] = []
    for node in parsed.tree.root_node.named_children:
        handler = _HANDLERS.get(node.type)
        if handler is None:
            continue
        for symbol in handler(node, parsed):
            builder.add(symbol.id)
            symbols.append(symbol)
    return symbols


def _collect_types(node, parsed: ParsedSource) -> list[Symbol]:
    source_bytes = parsed.source_bytes
    group_doc = doc_comments(node)
    symbols: list[Symbol] = []

    for spec in node.named_children:
        if spec.type != "type_spec":
            continue
        type_node = spec.child_by_field_name("type")
        name_node = spec.child_by_field_name("name")
        if type_node is None or name_node is None:
            continue
        node_type = TYPE_KINDS.get(type_node.type)
        if node_type is None:
            continue

        name = node_text(name_node, source_bytes)
        doc = doc_comments(spec) or group_doc
        symbols.append(
            Symbol(
                id=identifier_for(parsed.relative_path, name),
                name=name,
                kind=KIND_TYPE,
                node_type=node_type,
                location=_location(spec, parsed),
                source_code=_source_span(spec, doc, source_bytes),
                docstring=_docstring(doc, source_bytes),
                display_name=f"{node_type} {name}",
            )
        )

    return symbols


def _collect_function(node, parsed: ParsedSource) -> list[Symbol]:
    source_bytes = parsed.source_bytes
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return []

    name = node_text(name_node, source_bytes)
    doc = doc_comments(node)
    if node.type == "method_declaration":
        _, class_name = receiver(node, source_bytes)
        kind = KIND_METHOD
        display_name = f"method {class_name}.{name}"
    else:
        class_name = ""
        kind = KIND_FUNCTION
        display_name = f"func {name}"

    return [
        Symbol(
            id=identifier_for(parsed.relative_path, name, class_name),
            name=name,
            kind=kind,
            node_type=kind,
            location=_location(node, parsed),
            source_code=_source_span(node, doc, source_bytes),
            docstring=_docstring(doc, source_bytes),
            display_name=display_name,
            class_name=class_name,
            parameters=parameter_names(node, source_bytes),
        )
    ]


_HANDLERS = {
    "type_declaration": _collect_types,
    "function_declaration": _collect_function,
    "method_declaration": _collect_function,
}


def _location(node, parsed: ParsedSource) -> Location:
    return Location(
        path=parsed.path,
        relative_path=parsed.relative_path,
        start_line=node.start_point[0] + 1,
        end_line=node.end_point[0] + 1,
    )


def _source_span(node, doc: list, source_bytes: bytes) -> str:
    start = doc[0].start_byte if doc else node.start_byte
    return _slice(source_bytes, start, node.end_byte)


def _slice(source_bytes: bytes, start: int, end: int) -> str:
    if start < 0 or end > len(source_bytes) or start > end:
        return ""
    return source_bytes[start:end].decode("utf-8", errors="replace")


def _docstring(doc: list, source_bytes: bytes) -> str | None:
    if not doc:
        return None
    return comment_text([node_text(comment, source_bytes) for comment in doc])
