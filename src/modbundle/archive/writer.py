"""
Serializes a merged file set into one in-memory ZIP archive.
"""

import io
import zipfile
import logging
from typing import Callable, Optional

from modbundle.archive.merger import MergedFileSet
from modbundle.core.exceptions import ArchiveFormatError, WriteError

logger = logging.getLogger(__name__)

# Fixed member metadata so identical inputs give identical archives
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
FILE_MODE = 0o100644

COMPRESSION_METHODS = {
    "deflate": zipfile.ZIP_DEFLATED,
    "store": zipfile.ZIP_STORED,
}

ProgressSink = Callable[[float], None]


def _notify(progress_sink: Optional[ProgressSink], percent: float) -> None:
    if progress_sink is None:
        return
    try:
        progress_sink(percent)
    except Exception as e:
        logger.warning(f"Progress observer failed: {e}")


def write_archive(file_set: MergedFileSet, progress_sink: Optional[ProgressSink] = None,
                  compression: str = "deflate") -> bytes:
    """Write every file in the set to a new ZIP archive.

    Directories are not written; they follow from the '/' separators in
    the member names.

    Args:
        file_set: Output paths and their content sources
        progress_sink: Called with a non-decreasing percentage after each file
        compression: "deflate" or "store"

    Returns:
        The finished archive

    Raises:
        ArchiveFormatError: If a source archive member cannot be decompressed
        WriteError: If encoding the output fails
    """
    if compression not in COMPRESSION_METHODS:
        raise WriteError(f"unsupported compression '{compression}'")
    method = COMPRESSION_METHODS[compression]

    total = len(file_set)
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, 'w', compression=method) as zipf:
            for done, (path, source) in enumerate(file_set.items(), start=1):
                info = zipfile.ZipInfo(path, date_time=FIXED_DATE_TIME)
                info.compress_type = method
                info.external_attr = FILE_MODE << 16
                zipf.writestr(info, source.read_bytes())
                _notify(progress_sink, 100.0 * done / total)
    except ArchiveFormatError:
        raise
    except (OSError, ValueError, zipfile.LargeZipFile, RuntimeError) as e:
        raise WriteError(str(e)) from e

    if total == 0:
        _notify(progress_sink, 100.0)

    data = buffer.getvalue()
    logger.info(f"Wrote {total} files ({len(data)} bytes)")
    return data
