"""Entry records shared by every stage of the listing pipeline."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from enum import Enum


class EntryKind(Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    CHAR_DEVICE = "char-device"
    BLOCK_DEVICE = "block-device"
    FIFO = "fifo"
    SOCKET = "socket"

    @classmethod
    def from_mode(cls, mode: int) -> "EntryKind":
        fmt = stat.S_IFMT(mode)
        return _KIND_BY_FORMAT.get(fmt, cls.REGULAR)

    @property
    def is_device(self) -> bool:
        return self in (EntryKind.CHAR_DEVICE, EntryKind.BLOCK_DEVICE)


_KIND_BY_FORMAT: dict[int, EntryKind] = {
    stat.S_IFREG: EntryKind.REGULAR,
    stat.S_IFDIR: EntryKind.DIRECTORY,
    stat.S_IFLNK: EntryKind.SYMLINK,
    stat.S_IFCHR: EntryKind.CHAR_DEVICE,
    stat.S_IFBLK: EntryKind.BLOCK_DEVICE,
    stat.S_IFIFO: EntryKind.FIFO,
    stat.S_IFSOCK: EntryKind.SOCKET,
}


@dataclass(frozen=True, slots=True)
class EntryRecord:
    """Normalized metadata for one filesystem object."""

    name: str
    path: str
    kind: EntryKind
    mode: int
    size: int = 0
    mtime_ns: int = 0
    atime_ns: int = 0
    ctime_ns: int = 0
    inode: int = 0
    blocks: int = 0
    links: int = 0
    uid: int = 0
    gid: int = 0
    major: int = 0
    minor: int = 0
    symlink_target: str | None = None
    flags: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("entry name must not be empty")
        if self.name != os.sep and os.sep in self.name:
            raise ValueError(f"entry name must be a single path component: {self.name!r}")
        if self.size < 0:
            raise ValueError(f"negative size for {self.name!r}")
        if not self.kind.is_device and (self.major or self.minor):
            raise ValueError(f"device numbers on non-device entry {self.name!r}")
        if self.kind is not EntryKind.SYMLINK and self.symlink_target is not None:
            raise ValueError(f"symlink target on non-symlink entry {self.name!r}")

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def permissions(self) -> int:
        return stat.S_IMODE(self.mode) & 0o777

    @property
    def setuid(self) -> bool:
        return bool(self.mode & stat.S_ISUID)

    @property
    def setgid(self) -> bool:
        return bool(self.mode & stat.S_ISGID)

    @property
    def sticky(self) -> bool:
        return bool(self.mode & stat.S_ISVTX)

    @property
    def is_executable(self) -> bool:
        return bool(self.mode & 0o111)


@dataclass(slots=True)
class DirectorySection:
    """One labelled, filtered and ordered listing handed to the renderer."""

    label: str
    entries: list[EntryRecord] = field(default_factory=list)
    show_header: bool = False

    @property
    def is_loose_files(self) -> bool:
        return self.label == ""
