"""Turns ordered sections into output lines for each display mode."""

from __future__ import annotations

import math
import shutil
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from fastls.fs.entry import DirectorySection, EntryRecord
from fastls.options import ListingOptions
from fastls.policy.sorting import resolve_time_source
from fastls.render.formatting import (
    RECENT_WINDOW,
    block_count,
    classify_char,
    format_flags,
    format_mode,
    format_size,
    format_time,
    quote_name,
)
from fastls.render.names import NameCache, group_cache, user_cache


class SectionRenderer:
    def __init__(
        self,
        options: ListingOptions,
        write: Callable[[str], None],
        *,
        users: NameCache | None = None,
        groups: NameCache | None = None,
        width: int | None = None,
        column_padding: int = 2,
        recent_window: timedelta = RECENT_WINDOW,
        now: datetime | None = None,
    ) -> None:
        self.options = options
        self.write = write
        self.users = users or user_cache()
        self.groups = groups or group_cache()
        self.width = width
        self.column_padding = column_padding
        self.recent_window = recent_window
        self.now = now
        self.time_source = resolve_time_source(options)
        self._emitted = False

    def render_all(self, sections: Iterable[DirectorySection]) -> None:
        for section in sections:
            self.render(section)

    def render(self, section: DirectorySection) -> None:
        if section.show_header:
            if self._emitted:
                self.write("")
            self.write(f"{section.label}:")
        self._emitted = True

        mode = self.options.display_mode
        if mode == "long":
            self._render_long(section)
        elif mode == "stream":
            self._render_stream(section)
        elif mode in ("columns", "across"):
            self._render_columns(section, across=mode == "across")
        else:
            self._render_simple(section)

    def display_name(self, entry: EntryRecord, section: DirectorySection) -> str:
        name = entry.path if section.is_loose_files else entry.name
        if self.options.quote:
            name = quote_name(name)
        if self.options.classify:
            name += classify_char(entry)
        elif self.options.slash and entry.is_dir:
            name += "/"
        return name

    def _prefix(self, entry: EntryRecord) -> str:
        prefix = ""
        if self.options.inode:
            prefix += f"{entry.inode:8d} "
        if self.options.blocks:
            prefix += f"{block_count(entry.blocks, self.options.kilobytes):6d} "
        return prefix

    def _render_simple(self, section: DirectorySection) -> None:
        for entry in section.entries:
            self.write(self._prefix(entry) + self.display_name(entry, section))

    def _render_stream(self, section: DirectorySection) -> None:
        if not section.entries:
            return
        self.write(", ".join(self.display_name(entry, section) for entry in section.entries))

    def _render_columns(self, section: DirectorySection, *, across: bool) -> None:
        cells = [self._prefix(entry) + self.display_name(entry, section) for entry in section.entries]
        if not cells:
            return
        width = self.width or shutil.get_terminal_size((80, 24)).columns
        cell_width = max(len(cell) for cell in cells) + self.column_padding
        ncols = max(1, width // cell_width)
        nrows = math.ceil(len(cells) / ncols)
        for row in range(nrows):
            if across:
                indexes = range(row * ncols, min((row + 1) * ncols, len(cells)))
            else:
                indexes = range(row, len(cells), nrows)
            line = "".join(cells[index].ljust(cell_width) for index in indexes)
            self.write(line.rstrip())

    def _render_long(self, section: DirectorySection) -> None:
        if section.entries and not section.is_loose_files:
            total = sum(entry.blocks for entry in section.entries)
            self.write(f"total {block_count(total, self.options.kilobytes)}")
        for entry in section.entries:
            self.write(self.long_line(entry, section))

    def long_line(self, entry: EntryRecord, section: DirectorySection) -> str:
        opts = self.options
        parts: list[str] = []
        if opts.inode:
            parts.append(f"{entry.inode:8d}")
        if opts.blocks:
            parts.append(f"{block_count(entry.blocks, opts.kilobytes):6d}")
        parts.append(format_mode(entry))
        parts.append(f"{entry.links:3d}")
        if not opts.group_format:
            owner = str(entry.uid) if opts.numeric else self.users.get(entry.uid)
            parts.append(f"{owner:<8}")
        group = str(entry.gid) if opts.numeric else self.groups.get(entry.gid)
        parts.append(f"{group:<8}")
        if opts.flags:
            parts.append(format_flags(entry.flags))
        if entry.kind.is_device:
            parts.append(f"{entry.major:3d}, {entry.minor:3d}")
        else:
            parts.append(f"{format_size(entry.size, opts.human):>8}")
        parts.append(
            format_time(
                self.time_source.of(entry),
                full=opts.full_time,
                now=self.now,
                recent_window=self.recent_window,
            )
        )
        name = self.display_name(entry, section)
        if entry.symlink_target is not None:
            name += f" -> {entry.symlink_target}"
        parts.append(name)
        return " ".join(parts)
