# src/modbundle/core/exceptions.py
"""
Error hierarchy for bundle builds.

Every failure aborts the whole build; callers catch BundleError to report
exactly one terminal outcome.
"""

from typing import Optional


class BundleError(Exception):
    """Base class for all bundle build failures."""


class FetchError(BundleError):
    """A source archive could not be downloaded."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = "",
                 source: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.source = source
        detail = f"{status_code} {reason}".strip() if status_code is not None else reason
        message = f"Failed to fetch {url}"
        if detail:
            message += f" - {detail}"
        super().__init__(message)


class ArchiveFormatError(BundleError):
    """Raw bytes could not be decoded as a ZIP archive."""

    def __init__(self, source: Optional[str], reason: str):
        self.source = source
        self.reason = reason
        where = source or "<unnamed archive>"
        super().__init__(f"Invalid archive {where}: {reason}")


class WriteError(BundleError):
    """The output archive could not be encoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to write bundle: {reason}")


class PathCollisionError(BundleError):
    """Two entries mapped to the same output path under the strict policy."""

    def __init__(self, path: str, source: Optional[str] = None):
        self.path = path
        self.source = source
        where = f" (from {source})" if source else ""
        super().__init__(f"Duplicate output path '{path}'{where}")


class CatalogError(BundleError):
    """The add-on catalog or the requested selection is invalid."""


class BuildCancelledError(BundleError):
    """The build was cancelled between stages."""

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"Build cancelled before {stage}")
