"""Set of symbol ids known to a run, split into a write phase and a read phase.

Symbols are registered in a :class:`SymbolTableBuilder` while files are
collected. Call resolution only accepts the :class:`SymbolTable` returned by
:meth:`SymbolTableBuilder.freeze`, so resolving against a half-built set of
ids requires going out of one's way.
"""

from __future__ import annotations

from typing import Iterable, Iterator


class SymbolTableBuilder:
    def __init__(self) -> None:
        self._ids: set[str] = set()
        self._frozen = False

    def add(self, symbol_id: str) -> None:
        if self._frozen:
            raise RuntimeError("symbol table already frozen")
        self._ids.add(symbol_id)

    def update(self, symbol_ids: Iterable[str]) -> None:
        for symbol_id in symbol_ids:
            self.add(symbol_id)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "SymbolTable":
        self._frozen = True
        return SymbolTable(self._ids)


class SymbolTable:
    def __init__(self, symbol_ids: Iterable[str] = ()) -> None:
        self._ids = frozenset(symbol_ids)

    def __contains__(self, symbol_id: object) -> bool:
        return symbol_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)
