"""Go symbol and call-relationship extraction."""

from .calls import resolve_calls
from .extract import collect_symbols
from .file_walker import iter_go_files
from .graph import build_graph
from .identifiers import identifier_for
from .parser import GoParseError, GoParser
from .pipeline import analyze, analyze_file, analyze_root
from .storage import load_graph, load_result, save_graph, save_result
from .symbols import SymbolTable, SymbolTableBuilder

__all__ = [
    "GoParseError",
    "GoParser",
    "SymbolTable",
    "SymbolTableBuilder",
    "analyze",
    "analyze_file",
    "analyze_root",
    "build_graph",
    "collect_symbols",
    "identifier_for",
    "iter_go_files",
    "load_graph",
    "load_result",
    "resolve_calls",
    "save_graph",
    "save_result",
]
