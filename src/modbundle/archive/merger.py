"""
Merged file set for a single bundle build.

Entries from the kit and every add-on are collected here, keyed by their
output path, before the writer serializes them.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from modbundle.archive.reader import ArchiveEntry, ContentSource
from modbundle.archive.remapper import RemapMode, remap_path
from modbundle.core.exceptions import PathCollisionError

logger = logging.getLogger(__name__)


class CollisionPolicy(str, Enum):
    """What happens when two entries map to the same output path."""
    OVERWRITE = "overwrite"   # last write wins
    ERROR = "error"           # raise PathCollisionError


class MergedFileSet:
    """Path-keyed, insertion-ordered collection of bundle contents."""

    def __init__(self, policy: CollisionPolicy = CollisionPolicy.OVERWRITE):
        self.policy = CollisionPolicy(policy)
        self._files: Dict[str, ContentSource] = {}
        self.replaced = 0

    def insert(self, path: str, source: ContentSource) -> "MergedFileSet":
        """
        Add one file. Under OVERWRITE an existing path keeps its position
        but takes the new content.
        """
        if not path or path.startswith("/"):
            raise ValueError(f"Invalid output path: {path!r}")

        if path in self._files:
            if self.policy == CollisionPolicy.ERROR:
                raise PathCollisionError(path, source.source)
            logger.debug(f"Replacing {path} with content from {source.source or 'unknown source'}")
            self.replaced += 1

        self._files[path] = source
        return self

    def paths(self) -> List[str]:
        return list(self._files)

    def items(self) -> Iterator[Tuple[str, ContentSource]]:
        return iter(self._files.items())

    def get(self, path: str) -> Optional[ContentSource]:
        return self._files.get(path)

    def __contains__(self, path: str) -> bool:
        return path in self._files

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)


def merge_entries(file_set: MergedFileSet, entries: Iterable[ArchiveEntry],
                  mode: RemapMode, addon_id: Optional[str] = None) -> int:
    """
    Remap one archive's entries and insert its files into the set.

    Directory entries and the wrapper folder are skipped.

    Returns:
        Number of files inserted
    """
    inserted = 0
    for entry in entries:
        if entry.is_dir:
            continue
        source = entry.content.source if entry.content is not None else None
        target = remap_path(entry.path, mode, addon_id, source)
        if target is None:
            continue
        file_set.insert(target, entry.content)
        inserted += 1
    return inserted
