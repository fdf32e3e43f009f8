"""Analyzer settings resolved from arguments and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from .file_walker import DEFAULT_EXCLUDES


TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AnalyzerConfig:
    root: str = "."
    excludes: frozenset[str] = frozenset(DEFAULT_EXCLUDES)
    include_tests: bool = False
    facts_path: str | None = None


def resolve_config(
    root: str | None = None,
    excludes: Iterable[str] | None = None,
    include_tests: bool | None = None,
    facts_path: str | None = None,
) -> AnalyzerConfig:
    """Fill settings not given explicitly from ``GOANALYZER_*`` variables."""
    root = root or os.getenv("GOANALYZER_ROOT") or "."

    if excludes is None:
        env_excludes = os.getenv("GOANALYZER_EXCLUDES")
        if env_excludes:
            excludes = [part.strip() for part in env_excludes.split(",") if part.strip()]
        else:
            excludes = DEFAULT_EXCLUDES

    if include_tests is None:
        include_tests = os.getenv("GOANALYZER_INCLUDE_TESTS", "").lower() in TRUE_VALUES

    facts_path = facts_path or os.getenv("GOANALYZER_FACTS") or None

    return AnalyzerConfig(
        root=root,
        excludes=frozenset(excludes),
        include_tests=include_tests,
        facts_path=facts_path,
    )
