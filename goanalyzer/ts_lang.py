"""Tree-sitter Go grammar loader."""

from __future__ import annotations

from tree_sitter import Language


def load_go_language() -> Language:
    try:
        import tree_sitter_go
    except ImportError as exc:  # pragma: no cover - import guard
        raise RuntimeError("tree_sitter_go is not installed") from exc
    return Language(tree_sitter_go.language())
