"""
Maps raw in-archive paths onto paths inside the bundle.
"""

from enum import Enum
from typing import Optional

from modbundle.core.exceptions import ArchiveFormatError

MODS_DIR = "Mods"
MODS_PREFIX = MODS_DIR + "/"


class RemapMode(str, Enum):
    """Where an archive's files land in the bundle."""
    KIT = "kit"       # bundle root
    ADDON = "addon"   # Mods/<addon-id>/


def validate_addon_id(addon_id: Optional[str]) -> str:
    """Return the id unchanged if it can be used as a single path segment."""
    if not addon_id:
        raise ValueError("Add-on id must not be empty")
    if "/" in addon_id:
        raise ValueError(f"Add-on id '{addon_id}' must not contain '/'")
    return addon_id


def strip_top_folder(path: str) -> str:
    """
    Remove the first segment of a path like repo-main/path/to/file.
    Returns "" when nothing follows the first segment.
    """
    parts = path.split("/")
    if len(parts) <= 1:
        return ""
    return "/".join(parts[1:])


def _check_segments(raw_path: str, relative: str, source: Optional[str]) -> None:
    # a trailing "/" marks a directory; any other empty segment is malformed
    if not relative:
        return
    segments = relative.split("/")
    if relative.endswith("/"):
        segments = segments[:-1]
    if "" in segments:
        raise ArchiveFormatError(source, f"empty path segment in member '{raw_path}'")


def remap_path(raw_path: str, mode: RemapMode, addon_id: Optional[str] = None,
               source: Optional[str] = None) -> Optional[str]:
    """
    Compute the bundle path for a raw archive path.

    The wrapper folder is always stripped. Add-on files are re-rooted under
    Mods/<addon_id>/, dropping one leading Mods/ the add-on may already carry.
    Returns None when the path is the wrapper folder itself.

    Raises:
        ArchiveFormatError: The path has an empty segment below the wrapper folder
    """
    if mode == RemapMode.ADDON:
        validate_addon_id(addon_id)

    stripped = strip_top_folder(raw_path)
    if not stripped:
        return None

    if mode == RemapMode.KIT:
        _check_segments(raw_path, stripped, source)
        return stripped

    if stripped.startswith(MODS_PREFIX):
        stripped = stripped[len(MODS_PREFIX):]
    _check_segments(raw_path, stripped, source)
    return f"{MODS_PREFIX}{addon_id}/{stripped}"
