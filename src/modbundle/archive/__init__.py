"""Archive reading, path remapping, merging and writing."""

from modbundle.archive.reader import (
    ArchiveEntry,
    BytesContentSource,
    ContentSource,
    ZipContentSource,
    read_archive,
)
from modbundle.archive.remapper import RemapMode, remap_path, strip_top_folder
from modbundle.archive.merger import CollisionPolicy, MergedFileSet, merge_entries
from modbundle.archive.writer import write_archive

__all__ = [
    "ArchiveEntry",
    "BytesContentSource",
    "ContentSource",
    "ZipContentSource",
    "read_archive",
    "RemapMode",
    "remap_path",
    "strip_top_folder",
    "CollisionPolicy",
    "MergedFileSet",
    "merge_entries",
    "write_archive",
]
