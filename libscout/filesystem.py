"""
File-system access for libscout.

The index never touches disk directly: it asks an injected file-system
object to list directories and read files. LocalFileSystem is the
default, backed by pathlib. Tests and embedders can pass anything with
the same two coroutines.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class DirEntry:
    """One directory listing entry."""

    name: str
    is_dir: bool


class LocalFileSystem:
    """Reads the local disk.

    Both methods are coroutines so the index can await them; errors
    surface as the usual OSError subclasses.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def read_directory(self, path: PathLike) -> List[DirEntry]:
        directory = Path(path)
        entries = [
            DirEntry(name=item.name, is_dir=item.is_dir())
            for item in directory.iterdir()
        ]
        # iterdir() order is filesystem-dependent
        entries.sort(key=lambda entry: entry.name)
        logger.debug("Listed %s (%d entries)", directory, len(entries))
        return entries

    async def read_file(self, path: PathLike) -> str:
        return Path(path).read_text(encoding=self.encoding, errors="replace")
