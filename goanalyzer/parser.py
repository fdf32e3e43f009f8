"""Tree-sitter based parser for Go sources."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from tree_sitter import Parser

from .identifiers import relative_to_root
from .ts_lang import load_go_language


class GoParseError(ValueError):
    def __init__(self, path: str, line: int | None) -> None:
        where = f"{path}:{line}" if line is not None else path
        super().__init__(f"syntax error in {where}")
        self.path = path
        self.line = line


@dataclass
class ParsedSource:
    tree: object
    source_bytes: bytes
    path: str
    relative_path: str
    root: str


class GoParser:
    def __init__(self) -> None:
        self._parser = Parser(load_go_language())

    def parse_bytes(self, source_bytes: bytes, path: str, root: str = ".") -> ParsedSource:
        """Parse ``source_bytes`` as the file ``path`` inside the analysis ``root``.

        ``path`` may be relative; it is resolved against ``root`` so callers can
        hand in either the path they discovered or a root-relative one.
        """
        abs_root = os.path.abspath(root)
        abs_path = path if os.path.isabs(path) else os.path.join(abs_root, path)
        abs_path = os.path.normpath(abs_path)

        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            line = source_bytes.count(b"\n", 0, exc.start) + 1
            raise GoParseError(abs_path, line) from exc

        tree = self._parser.parse(source_bytes)
        if tree.root_node.has_error:
            raise GoParseError(abs_path, _first_error_line(tree.root_node))

        return ParsedSource(
            tree=tree,
            source_bytes=source_bytes,
            path=abs_path,
            relative_path=relative_to_root(abs_root, abs_path),
            root=abs_root,
        )

    def parse_text(self, source_text: str, path: str, root: str = ".") -> ParsedSource:
        return self.parse_bytes(source_text.encode("utf-8"), path, root)

    def parse_file(self, path: str, root: str = ".") -> ParsedSource:
        with open(path, "rb") as handle:
            source_bytes = handle.read()
        return self.parse_bytes(source_bytes, os.path.abspath(path), root)


def parse_files(
    parser: GoParser, paths: Iterable[str], root: str = "."
) -> Iterable[tuple[str, ParsedSource]]:
    for path in paths:
        yield path, parser.parse_file(path, root)


def _first_error_line(node) -> int | None:
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1
    for child in node.children:
        if child.has_error:
            line = _first_error_line(child)
            if line is not None:
                return line
    return None
