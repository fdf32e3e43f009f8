"""Helpers over tree-sitter Go nodes shared by the collector and the resolver."""

from __future__ import annotations

import re


FUNCTION_TYPES = {"function_declaration", "method_declaration"}
TYPE_KINDS = {"struct_type": "struct", "interface_type": "interface"}

# Comments that are compiler directives rather than documentation.
_DIRECTIVE = re.compile(r"(line |extern |export |[a-z0-9]+:[a-z0-9])")


def node_text(node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8")


def position(node) -> tuple[int, int]:
    """1-based (line, column) of ``node``, columns counted in bytes."""
    row, column = node.start_point
    return row + 1, column + 1


def type_to_string(node, source_bytes: bytes) -> str:
    """Render a receiver type expression; unknown forms render as ``""``."""
    if node is None:
        return ""
    kind = node.type
    if kind in ("type_identifier", "identifier", "package_identifier"):
        return node_text(node, source_bytes)
    if kind == "pointer_type":
        return "*" + type_to_string(_first_named(node), source_bytes)
    if kind == "qualified_type":
        package = type_to_string(node.child_by_field_name("package"), source_bytes)
        name = type_to_string(node.child_by_field_name("name"), source_bytes)
        return f"{package}.{name}"
    if kind == "generic_type":
        base = type_to_string(node.child_by_field_name("type"), source_bytes)
        arguments = node.child_by_field_name("type_arguments")
        rendered = [
            type_to_string(child, source_bytes)
            for child in _named(arguments)
        ]
        return f"{base}[{', '.join(rendered)}]"
    if kind == "type_elem":
        return " | ".join(type_to_string(child, source_bytes) for child in _named(node))
    return ""


def receiver(node, source_bytes: bytes) -> tuple[str, str]:
    """Return ``(receiver name, receiver base type)`` of a method declaration.

    Pointer receivers map to the same base type as value receivers. Free
    functions return two empty strings.
    """
    if node.type != "method_declaration":
        return "", ""
    params = node.child_by_field_name("receiver")
    for param in _named(params):
        if param.type != "parameter_declaration":
            continue
        name_node = param.child_by_field_name("name")
        name = node_text(name_node, source_bytes) if name_node is not None else ""
        type_string = type_to_string(param.child_by_field_name("type"), source_bytes)
        if type_string.startswith("*"):
            type_string = type_string[1:]
        return name, type_string
    return "", ""


def parameter_names(node, source_bytes: bytes) -> tuple[str, ...]:
    params = node.child_by_field_name("parameters")
    names: list[str] = []
    for param in _named(params):
        if param.type not in ("parameter_declaration", "variadic_parameter_declaration"):
            continue
        for name_node in param.children_by_field_name("name"):
            names.append(node_text(name_node, source_bytes))
    return tuple(names)


def doc_comments(node) -> list:
    """Return the comment nodes forming the doc comment of ``node``, in order.

    A doc comment is the group of comments whose last line sits directly above
    the declaration. Comments on consecutive lines belong to one group; a
    comment sharing a line with the preceding token trails that token instead.
    """
    group: list = []
    boundary = node.start_point[0]
    sibling = node.prev_sibling
    while sibling is not None:
        if _is_line_break(sibling):
            sibling = sibling.prev_sibling
            continue
        if sibling.type != "comment":
            break
        end_row = sibling.end_point[0]
        if group:
            if end_row < boundary - 1:
                break
        elif end_row != boundary - 1:
            break
        group.append(sibling)
        boundary = sibling.start_point[0]
        sibling = sibling.prev_sibling

    if sibling is not None:
        token_row = sibling.end_point[0]
        while group and group[-1].start_point[0] == token_row:
            group.pop()

    group.reverse()
    return group


def comment_text(comments: list[str]) -> str:
    """Text of a comment group with markers and directives removed."""
    lines: list[str] = []
    for comment in comments:
        if comment.startswith("//"):
            comment = comment[2:]
            if comment.startswith(" "):
                comment = comment[1:]
            elif _DIRECTIVE.match(comment):
                continue
        elif comment.startswith("/*"):
            comment = comment[2:-2]
        lines.extend(line.rstrip() for line in comment.split("\n"))

    kept: list[str] = []
    for line in lines:
        # Drop leading blank lines and collapse interior runs.
        if line or (kept and kept[-1]):
            kept.append(line)
    return "\n".join(kept).strip()


def _named(node) -> list:
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def _first_named(node):
    children = _named(node)
    return children[0] if children else None


def _is_line_break(node) -> bool:
    return not node.is_named and node.type in ("\n", "\0")
