"""Identity of a directory on disk, independent of the path used to reach it."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class FileIdentifier:
    """A (device, inode) pair.

    Two paths with the same identifier lead to the same directory, which is
    how symlink loops are detected while descending into a source tree.
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_stat(cls, stat_info: os.stat_result) -> "FileIdentifier":
        return cls(stat_info.st_dev, stat_info.st_ino)
