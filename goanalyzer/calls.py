"""Resolve call expressions inside Go declarations to call edges."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterator, Protocol

from .facts import DeclaredObject, TypeFacts, base_type_name
from .identifiers import identifier_for, is_within_root, relative_to_root
from .models import CallEdge
from .parser import ParsedSource
from .symbols import SymbolTable
from .syntax import FUNCTION_TYPES, node_text, position, receiver


logger = logging.getLogger(__name__)

BUILTIN_FUNCTIONS = {
    "append", "cap", "clear", "close", "complex", "copy", "delete", "imag",
    "len", "max", "min", "make", "new", "panic", "print", "println", "real",
    "recover",
}
BUILTIN_TYPES = {
    "bool", "byte", "complex64", "complex128", "error", "float32", "float64",
    "int", "int8", "int16", "int32", "int64", "rune", "string",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr", "any", "comparable",
}
BUILTIN_CONSTANTS = {"true", "false", "nil", "iota"}


def is_builtin(name: str) -> bool:
    return name in BUILTIN_FUNCTIONS or name in BUILTIN_TYPES or name in BUILTIN_CONSTANTS


@dataclass(frozen=True)
class CallSite:
    """The declaration a call expression sits in."""

    caller: str
    relative_path: str
    class_name: str = ""
    receiver_name: str = ""


@dataclass(frozen=True)
class Target:
    callee: str
    is_resolved: bool


class Resolver(Protocol):
    def resolve(self, call, site: CallSite) -> Target | None:
        """Classify one ``call_expression`` node, or return None to drop it."""


class HeuristicResolver:
    """Guess call targets from syntax alone.

    Bare names are assumed to live in the caller's file; ``recv.Method()``
    through the caller's own receiver is assumed to be a method of the same
    type. Everything else is reported as written.
    """

    def __init__(self, table: SymbolTable, source_bytes: bytes) -> None:
        self._table = table
        self._source_bytes = source_bytes

    def resolve(self, call, site: CallSite) -> Target | None:
        function = call.child_by_field_name("function")
        if function is None:
            return None

        if function.type == "identifier":
            name = node_text(function, self._source_bytes)
            if is_builtin(name):
                return Target(name, False)
            symbol_id = identifier_for(site.relative_path, name)
            return Target(symbol_id, symbol_id in self._table)

        if function.type == "selector_expression":
            operand = function.child_by_field_name("operand")
            field = function.child_by_field_name("field")
            if operand is None or field is None or operand.type != "identifier":
                return None
            operand_name = node_text(operand, self._source_bytes)
            field_name = node_text(field, self._source_bytes)
            if site.receiver_name and operand_name == site.receiver_name:
                symbol_id = identifier_for(site.relative_path, field_name, site.class_name)
                return Target(symbol_id, symbol_id in self._table)
            callee = f"{operand_name}.{field_name}"
            return Target(callee, callee in self._table)

        return None


class TypedResolver:
    """Resolve calls through type-checker facts, deferring to ``fallback``.

    Calls whose identifier has no recorded fact, or whose fact names a variable
    or field holding a function value, are handed to the fallback unchanged.
    """

    def __init__(
        self,
        table: SymbolTable,
        facts: TypeFacts,
        root: str,
        source_bytes: bytes,
        fallback: Resolver,
    ) -> None:
        self._table = table
        self._facts = facts
        self._root = root
        self._source_bytes = source_bytes
        self._fallback = fallback

    def resolve(self, call, site: CallSite) -> Target | None:
        target = self._resolve_typed(call)
        if target is None:
            return self._fallback.resolve(call, site)
        return target

    def _resolve_typed(self, call) -> Target | None:
        function = call.child_by_field_name("function")
        if function is None:
            return None

        if function.type == "identifier":
            obj = self._facts.use_at(position(function))
            if obj is None or obj.is_value:
                return None
            return self._target(obj, "")

        if function.type == "selector_expression":
            field = function.child_by_field_name("field")
            if field is None:
                return None
            where = position(field)
            selection = self._facts.selection_at(where)
            if selection is not None:
                receiver_type = selection.method.receiver or selection.receiver
                return self._target(selection.method, base_type_name(receiver_type))
            obj = self._facts.use_at(where)
            if obj is not None and not obj.is_value:
                return self._target(obj, base_type_name(obj.receiver or ""))

        return None

    def _target(self, obj: DeclaredObject, class_name: str) -> Target:
        if obj.builtin or obj.path is None:
            return Target(obj.name, False)
        if is_within_root(self._root, obj.path):
            declared_in = os.path.normpath(os.path.join(self._root, obj.path))
            symbol_id = identifier_for(
                relative_to_root(self._root, declared_in), obj.name, class_name
            )
            return Target(symbol_id, symbol_id in self._table)
        callee = f"{obj.package}.{obj.name}" if obj.package else obj.name
        return Target(callee, False)


def resolver_for(
    parsed: ParsedSource, table: SymbolTable, facts: TypeFacts | None = None
) -> Resolver:
    heuristic = HeuristicResolver(table, parsed.source_bytes)
    if facts is None:
        return heuristic
    return TypedResolver(table, facts, parsed.root, parsed.source_bytes, heuristic)


def resolve_calls(
    parsed: ParsedSource, table: SymbolTable, facts: TypeFacts | None = None
) -> list[CallEdge]:
    """Return one edge per classifiable call inside the declarations of ``parsed``."""
    if not isinstance(table, SymbolTable):
        raise TypeError("resolve_calls needs a frozen SymbolTable")

    resolver = resolver_for(parsed, table, facts)
    logger.debug(
        "Resolving calls in %s with %s", parsed.relative_path, type(resolver).__name__
    )

    edges: list[CallEdge] = []
    for node in parsed.tree.root_node.named_children:
        if node.type not in FUNCTION_TYPES:
            continue
        body = node.child_by_field_name("body")
        if body is None:
            continue
        site = _call_site(node, parsed)
        for call in _iter_calls(body):
            target = resolver.resolve(call, site)
            if target is None:
                continue
            edges.append(
                CallEdge(
                    caller=site.caller,
                    callee=target.callee,
                    call_line=call.start_point[0] + 1,
                    is_resolved=target.is_resolved,
                )
            )
    return edges


def _call_site(node, parsed: ParsedSource) -> CallSite:
    name = node_text(node.child_by_field_name("name"), parsed.source_bytes)
    receiver_name, class_name = receiver(node, parsed.source_bytes)
    return CallSite(
        caller=identifier_for(parsed.relative_path, name, class_name),
        relative_path=parsed.relative_path,
        class_name=class_name,
        receiver_name=receiver_name,
    )


def _iter_calls(node) -> Iterator:
    # Pre-order, so an outer call is reported before the calls in its arguments.
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "call_expression":
            yield current
        stack.extend(reversed(current.named_children))
