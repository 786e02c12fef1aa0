"""Flat option set produced by the command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from fastls.fs.probe import FollowLinks

DisplayMode = Literal["long", "stream", "columns", "across", "simple"]

# (short flag, field name, help text); the CLI builds one click option per row.
FLAG_TABLE: tuple[tuple[str, str, str], ...] = (
    ("-1", "one", "Force output to be one entry per line."),
    ("-A", "almost_all", "List all entries except for '.' and '..'."),
    ("-a", "all", "Include directory entries whose names begin with a dot."),
    ("-C", "columns", "Force multi-column output, filled down."),
    ("-c", "change_time", "Use the status change time instead of modification time."),
    ("-d", "directory", "List directories as plain files (do not search them)."),
    ("-F", "classify", "Append a type indicator (one of */=@|) to names."),
    ("-f", "no_sort", "Do not sort the output. Implies -a."),
    ("-g", "group_format", "Long format without the owner."),
    ("-H", "follow_roots", "Follow symbolic links given on the command line."),
    ("-h", "human", "With long format, print human-readable sizes."),
    ("-i", "inode", "Print each entry's inode number."),
    ("-k", "kilobytes", "Report block counts in kilobytes."),
    ("-L", "follow", "Follow symbolic links given on the command line."),
    ("-l", "long_format", "List in long format."),
    ("-m", "stream", "Stream output: names separated by commas."),
    ("-n", "numeric", "Long format with numeric user and group ids."),
    ("-o", "flags", "Include file flags in long format output."),
    ("-p", "slash", "Append '/' to directory names."),
    ("-q", "quote", "Print non-graphic characters in names as '?'."),
    ("-R", "recursive", "Recursively list subdirectories."),
    ("-r", "reverse", "Reverse the order of the sort."),
    ("-S", "size_sort", "Sort by size, largest first."),
    ("-s", "blocks", "Print the number of blocks used by each entry."),
    ("-T", "full_time", "Print complete time information."),
    ("-t", "time_sort", "Sort by time, most recent first."),
    ("-u", "access_time", "Use the last access time instead of modification time."),
    ("-x", "across", "Multi-column output, filled across."),
)


@dataclass(slots=True)
class ListingOptions:
    one: bool = False
    almost_all: bool = False
    all: bool = False
    columns: bool = False
    change_time: bool = False
    directory: bool = False
    classify: bool = False
    no_sort: bool = False
    group_format: bool = False
    follow_roots: bool = False
    human: bool = False
    inode: bool = False
    kilobytes: bool = False
    follow: bool = False
    long_format: bool = False
    stream: bool = False
    numeric: bool = False
    flags: bool = False
    slash: bool = False
    quote: bool = False
    recursive: bool = False
    reverse: bool = False
    size_sort: bool = False
    blocks: bool = False
    full_time: bool = False
    time_sort: bool = False
    access_time: bool = False
    across: bool = False
    ignore_patterns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.no_sort:
            self.all = True
            self.size_sort = False
            self.time_sort = False
        if self.group_format or self.numeric:
            self.long_format = True

    @property
    def include_all(self) -> bool:
        return self.all or self.no_sort

    @property
    def follow_links(self) -> FollowLinks:
        if self.follow or self.follow_roots:
            return FollowLinks.ALWAYS
        return FollowLinks.NEVER

    @property
    def display_mode(self) -> DisplayMode:
        if self.long_format:
            return "long"
        if self.stream:
            return "stream"
        if self.across and not self.one:
            return "across"
        if self.columns and not self.one:
            return "columns"
        return "simple"

