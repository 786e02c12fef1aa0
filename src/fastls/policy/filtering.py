"""Name-based entry filtering: dotfile rules plus optional ignore patterns."""

from __future__ import annotations

from collections.abc import Iterable

import pathspec

from fastls.fs.entry import EntryRecord
from fastls.options import ListingOptions

DOT_ENTRIES = frozenset({".", ".."})


class FilterPolicy:
    def __init__(self, options: ListingOptions) -> None:
        self.include_all = options.include_all
        self.almost_all = options.almost_all
        self._spec = self._build_spec(options.ignore_patterns)

    @staticmethod
    def _build_spec(patterns: Iterable[str]) -> pathspec.PathSpec | None:
        lines = [line.strip() for line in patterns if line and line.strip()]
        if not lines:
            return None
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)

    def include(self, name: str) -> bool:
        if self._spec is not None and self._spec.match_file(name):
            return False
        if self.include_all:
            return True
        if self.almost_all:
            return name not in DOT_ENTRIES
        return not name.startswith(".")

    def apply(self, entries: Iterable[EntryRecord]) -> list[EntryRecord]:
        return [entry for entry in entries if self.include(entry.name)]

    def descend_into(self, entry: EntryRecord) -> bool:
        """Whether recursive listing enters ``entry``.

        Only real directories that pass :meth:`include` are entered, and
        dotted names only when every entry is being shown.
        """
        if not entry.is_dir or entry.name in DOT_ENTRIES:
            return False
        if not self.include(entry.name):
            return False
        return self.include_all or not entry.name.startswith(".")


def include(name: str, options: ListingOptions) -> bool:
    return FilterPolicy(options).include(name)
