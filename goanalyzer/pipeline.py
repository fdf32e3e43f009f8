"""End-to-end pipeline from Go sources to symbols and call edges."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Mapping

from .calls import resolve_calls
from .config import AnalyzerConfig, resolve_config
from .extract import collect_symbols
from .facts import TypeFacts, load_type_facts
from .file_walker import DEFAULT_EXCLUDES, iter_go_files
from .graph import build_graph
from .models import AnalysisResult
from .parser import GoParser, ParsedSource, parse_files
from .storage import save_graph, save_result
from .symbols import SymbolTableBuilder


logger = logging.getLogger(__name__)


def analyze(
    sources: Iterable[ParsedSource],
    facts: Mapping[str, TypeFacts] | None = None,
) -> AnalysisResult:
    """Collect symbols from every source, then resolve the calls of every source.

    Resolution only starts once all files have been collected: a call into a
    file that has not been collected yet would otherwise come out unresolved.
    """
    sources = list(sources)
    facts = facts or {}

    builder = SymbolTableBuilder()
    result = AnalysisResult()
    for parsed in sources:
        symbols = collect_symbols(parsed, builder)
        logger.debug("Collected %d symbols from %s", len(symbols), parsed.relative_path)
        result.nodes.extend(symbols)

    table = builder.freeze()

    for parsed in sources:
        edges = resolve_calls(parsed, table, facts.get(parsed.relative_path))
        logger.debug("Emitted %d call edges for %s", len(edges), parsed.relative_path)
        result.call_relationships.extend(edges)

    resolved = sum(1 for edge in result.call_relationships if edge.is_resolved)
    logger.info(
        "Analyzed %d files: %d symbols, %d calls (%d resolved)",
        len(sources),
        len(result.nodes),
        len(result.call_relationships),
        resolved,
    )
    return result


def analyze_file(
    path: str,
    root: str = ".",
    facts: Mapping[str, TypeFacts] | None = None,
) -> AnalysisResult:
    parser = GoParser()
    return analyze([parser.parse_file(path, root)], facts)


def analyze_root(
    config: AnalyzerConfig,
    files: Iterable[str] | None = None,
) -> AnalysisResult:
    if files is None:
        files = iter_go_files(config.root, config.excludes, config.include_tests)

    parser = GoParser()
    sources = [parsed for _, parsed in parse_files(parser, files, config.root)]

    facts = None
    if config.facts_path:
        facts = load_type_facts(config.facts_path, config.root)

    return analyze(sources, facts)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract Go symbols and call relationships as JSON"
    )
    parser.add_argument("--root", help="Root directory of the repository")
    parser.add_argument(
        "--file",
        action="append",
        dest="files",
        help="Analyze only this Go file (repeatable)",
    )
    parser.add_argument("--facts", help="Type facts JSON produced by a go/types helper")
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Directory name to skip, added to the defaults (repeatable)",
    )
    parser.add_argument(
        "--include-tests",
        action="store_true",
        default=None,
        help="Also analyze _test.go files",
    )
    parser.add_argument("--output", help="Write the analysis JSON here instead of stdout")
    parser.add_argument("--graph", help="Also write the call graph as node-link JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    excludes = None
    if args.exclude:
        excludes = set(DEFAULT_EXCLUDES) | set(args.exclude)

    config = resolve_config(
        root=args.root,
        excludes=excludes,
        include_tests=args.include_tests,
        facts_path=args.facts,
    )

    # GoParseError and FactsError are ValueErrors.
    try:
        result = analyze_root(config, args.files)
    except (ValueError, OSError) as exc:
        print(f"Error analyzing {config.root}: {exc}", file=sys.stderr)
        return 1

    if args.output:
        save_result(result, args.output)
    else:
        print(json.dumps(result.to_dict(), indent=2))

    if args.graph:
        save_graph(build_graph(result), args.graph)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
