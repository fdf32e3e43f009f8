"""Type-checker facts supplied alongside parsed Go files.

The analyzer never type-checks Go itself. A helper built on ``go/types`` can
dump, per file, what each identifier and method selector refers to; this
module loads that dump. The expected JSON layout is::

    {
      "files": {
        "pkg/server.go": {
          "uses": [
            {"line": 12, "column": 5,
             "object": {"name": "Println", "package": "fmt", "kind": "func",
                        "path": "/usr/lib/go/src/fmt/print.go"}}
          ],
          "selections": [
            {"line": 14, "column": 7, "receiver": "*pkg.Server",
             "method": {"name": "Close", "package": "pkg",
                        "path": "pkg/conn.go", "receiver": "*Conn"}}
          ]
        }
      }
    }

Positions are 1-based lines and byte columns of the referring identifier
(the selected name for selectors), as reported by ``token.Position``.
File keys and object paths may be absolute or relative to the analysis root.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .identifiers import relative_to_root


logger = logging.getLogger(__name__)

Position = tuple[int, int]

# Object kinds as named by go/types; struct fields are vars there too.
OBJECT_FUNC = "func"
OBJECT_VAR = "var"


class FactsError(ValueError):
    pass


@dataclass(frozen=True)
class DeclaredObject:
    name: str
    path: str | None = None
    package: str | None = None
    receiver: str | None = None
    builtin: bool = False
    kind: str = OBJECT_FUNC

    @property
    def is_value(self) -> bool:
        """True for variables and struct fields, which hold function values."""
        return self.kind == OBJECT_VAR

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeclaredObject":
        return cls(
            name=data["name"],
            path=data.get("path"),
            package=data.get("package"),
            receiver=data.get("receiver"),
            builtin=bool(data.get("builtin", False)),
            kind=data.get("kind") or OBJECT_FUNC,
        )


@dataclass(frozen=True)
class Selection:
    method: DeclaredObject
    receiver: str = ""


@dataclass
class TypeFacts:
    uses: dict[Position, DeclaredObject] = field(default_factory=dict)
    selections: dict[Position, Selection] = field(default_factory=dict)

    def use_at(self, position: Position) -> DeclaredObject | None:
        return self.uses.get(position)

    def selection_at(self, position: Position) -> Selection | None:
        return self.selections.get(position)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TypeFacts":
        uses = {
            (item["line"], item["column"]): DeclaredObject.from_dict(item["object"])
            for item in data.get("uses", [])
        }
        selections = {
            (item["line"], item["column"]): Selection(
                method=DeclaredObject.from_dict(item["method"]),
                receiver=item.get("receiver") or "",
            )
            for item in data.get("selections", [])
        }
        return cls(uses=uses, selections=selections)


def base_type_name(type_string: str) -> str:
    """Strip pointers and the package qualifier from a Go type string.

    ``*example.com/app/store.Cache[K, V]`` becomes ``Cache[K, V]``.
    """
    base = type_string.lstrip("*")
    bracket = base.find("[")
    head, tail = (base, "") if bracket < 0 else (base[:bracket], base[bracket:])
    return head.rsplit(".", 1)[-1] + tail


def load_type_facts(path: str | Path, root: str | Path = ".") -> dict[str, TypeFacts]:
    """Load a facts dump, keyed by file path relative to ``root``."""
    abs_root = os.path.abspath(root)
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FactsError(f"Invalid facts file {path}: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("files"), dict):
        raise FactsError(f"Facts file {path} has no 'files' mapping")

    facts: dict[str, TypeFacts] = {}
    for file_key, file_data in payload["files"].items():
        file_path = os.path.normpath(os.path.join(abs_root, file_key))
        try:
            facts[relative_to_root(abs_root, file_path)] = TypeFacts.from_dict(file_data)
        except (KeyError, TypeError, AttributeError) as exc:
            raise FactsError(f"Malformed facts for {file_key}: {exc!r}") from exc

    logger.debug("Loaded type facts for %d files from %s", len(facts), path)
    return facts
