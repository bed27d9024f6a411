"""Archive reader component.

Decodes raw ZIP bytes into an ordered list of entries without extracting them.
Entry content stays inside the archive until something asks for it.
"""

import io
import zlib
import zipfile
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from modbundle.core.exceptions import ArchiveFormatError

logger = logging.getLogger(__name__)


class ContentSource(ABC):
    """Something that can produce the bytes of one file on demand."""

    @property
    def source(self) -> Optional[str]:
        """Identifier of the archive the content comes from, if any."""
        return None

    @abstractmethod
    def read_bytes(self) -> bytes:
        """Return the full, decompressed content."""


class BytesContentSource(ContentSource):
    """Content that is already in memory."""

    def __init__(self, data: bytes, source: Optional[str] = None):
        self._data = data
        self._source = source

    @property
    def source(self) -> Optional[str]:
        return self._source

    def read_bytes(self) -> bytes:
        return self._data


class ZipContentSource(ContentSource):
    """Lazily decompresses a single member of an open ZipFile."""

    def __init__(self, zipf: zipfile.ZipFile, info: zipfile.ZipInfo, source: Optional[str] = None):
        self._zipf = zipf
        self._info = info
        self._source = source

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def size(self) -> int:
        return self._info.file_size

    def read_bytes(self) -> bytes:
        try:
            return self._zipf.read(self._info)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ArchiveFormatError(self._source, f"cannot decompress '{self._info.filename}': {e}") from e
        except RuntimeError as e:
            # encrypted member, or NotImplementedError for an unsupported compression method
            raise ArchiveFormatError(self._source, f"cannot read '{self._info.filename}': {e}") from e


class ArchiveEntry:
    """One member of a source archive."""

    def __init__(self, path: str, is_dir: bool, content: Optional[ContentSource] = None):
        self.path = path
        self.is_dir = is_dir
        self.content = None if is_dir else content

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"ArchiveEntry({self.path!r}, {kind})"


def read_archive(raw_bytes: bytes, source: Optional[str] = None) -> List[ArchiveEntry]:
    """Enumerate the entries of a ZIP archive held in memory.

    Args:
        raw_bytes: The complete archive
        source: Identifier used in error messages (usually the URL)

    Returns:
        Entries in central-directory order

    Raises:
        ArchiveFormatError: If the bytes are not a readable ZIP archive
    """
    if not raw_bytes:
        raise ArchiveFormatError(source, "archive is empty")

    try:
        zipf = zipfile.ZipFile(io.BytesIO(raw_bytes), 'r')
        infos = zipf.infolist()
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, EOFError) as e:
        raise ArchiveFormatError(source, str(e)) from e

    entries = []
    for info in infos:
        if info.is_dir():
            entries.append(ArchiveEntry(info.filename, True))
        else:
            entries.append(ArchiveEntry(info.filename, False, ZipContentSource(zipf, info, source)))

    logger.debug(f"Read {len(entries)} entries from {source or 'archive'}")
    return entries
