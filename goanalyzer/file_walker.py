"""File walking utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


DEFAULT_EXCLUDES = {".git", ".hg", ".svn", "vendor", "testdata", "node_modules"}


def iter_go_files(
    root: str | Path,
    excludes: Iterable[str] | None = None,
    include_tests: bool = False,
) -> list[str]:
    root_path = Path(root)
    exclude_set = set(DEFAULT_EXCLUDES if excludes is None else excludes)
    matches: list[str] = []

    for path in root_path.rglob("*.go"):
        relative = path.relative_to(root_path)
        if any(part in exclude_set for part in relative.parts[:-1]):
            continue
        if not include_tests and path.name.endswith("_test.go"):
            continue
        matches.append(str(path))

    return sorted(matches)
