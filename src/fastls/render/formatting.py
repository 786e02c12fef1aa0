"""Pure text helpers for the display modes."""

from __future__ import annotations

import stat
from datetime import datetime, timedelta

from fastls.fs.entry import EntryKind, EntryRecord

BLOCK_SIZE = 512
RECENT_WINDOW = timedelta(days=182)

_TYPE_CHARS: dict[EntryKind, str] = {
    EntryKind.DIRECTORY: "d",
    EntryKind.SYMLINK: "l",
    EntryKind.FIFO: "p",
    EntryKind.SOCKET: "s",
    EntryKind.BLOCK_DEVICE: "b",
    EntryKind.CHAR_DEVICE: "c",
    EntryKind.REGULAR: "-",
}

_SIZE_UNITS = ("K", "M", "G", "T", "P", "E")

# BSD st_flags bits, in display order.
_FLAG_NAMES: tuple[tuple[int, str], ...] = (
    (0x00020000, "nodump"),
    (0x00000020, "arch"),
    (0x00000002, "uappnd"),
    (0x00000004, "uchg"),
    (0x00000010, "sappnd"),
    (0x00000008, "schg"),
)


def _triplet(mode: int, read: int, write: int, execute: int, special: int, marks: str) -> str:
    chars = "r" if mode & read else "-"
    chars += "w" if mode & write else "-"
    if mode & special:
        chars += marks[0] if mode & execute else marks[1]
    else:
        chars += "x" if mode & execute else "-"
    return chars


def format_mode(entry: EntryRecord) -> str:
    mode = entry.mode
    return (
        _TYPE_CHARS[entry.kind]
        + _triplet(mode, stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "sS")
        + _triplet(mode, stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "sS")
        + _triplet(mode, stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "tT")
    )


def format_size(size: int, human: bool = False) -> str:
    if not human or size < 1024:
        return str(size)
    value = float(size)
    unit = ""
    for unit in _SIZE_UNITS:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f}{unit}"


def format_time(
    timestamp_ns: int,
    *,
    full: bool = False,
    now: datetime | None = None,
    recent_window: timedelta = RECENT_WINDOW,
) -> str:
    moment = datetime.fromtimestamp(timestamp_ns / 1_000_000_000)
    if full:
        return f"{moment:%b} {moment.day:2d} {moment:%H:%M:%S} {moment.year}"
    now = now or datetime.now()
    if now - moment < recent_window:
        return f"{moment:%b} {moment.day:2d} {moment:%H:%M}"
    return f"{moment:%b} {moment.day:2d}  {moment.year}"


def format_flags(flags: int) -> str:
    names = [name for bit, name in _FLAG_NAMES if flags & bit]
    return ",".join(names) if names else "-"


def block_count(blocks: int, kilobytes: bool = False) -> int:
    if kilobytes and blocks > 0:
        return blocks * BLOCK_SIZE // 1024
    return blocks


def classify_char(entry: EntryRecord) -> str:
    if entry.kind is EntryKind.DIRECTORY:
        return "/"
    if entry.kind is EntryKind.SYMLINK:
        return "@"
    if entry.kind is EntryKind.FIFO:
        return "|"
    if entry.kind is EntryKind.SOCKET:
        return "="
    if entry.is_executable:
        return "*"
    return ""


def quote_name(name: str) -> str:
    return "".join(ch if 32 <= ord(ch) <= 126 else "?" for ch in name)
