"""
Bundle orchestrator.

Runs one build as an explicit state machine:

    idle -> fetching_kit -> merging_kit
         -> (fetching_addon -> merging_addon) for each selected add-on
         -> writing -> done

Any error moves the machine to `failed` and is re-raised unchanged. The
merged file set of a failed build is dropped; nothing is returned.
"""

import functools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Iterable, List, Optional, Protocol

from modbundle.archive.merger import CollisionPolicy, MergedFileSet, merge_entries
from modbundle.archive.reader import ArchiveEntry, read_archive
from modbundle.archive.remapper import RemapMode
from modbundle.archive.writer import write_archive
from modbundle.bundle.progress import ProgressCallback, ProgressReporter
from modbundle.catalog.schemas import AddonCatalog, AddonDescriptor
from modbundle.core.exceptions import BuildCancelledError

logger = logging.getLogger(__name__)

# Share of the overall percentage spent on fetching and merging; writing gets the rest
FETCH_MERGE_SHARE = 60.0


class BuildState(str, Enum):
    IDLE = "idle"
    FETCHING_KIT = "fetching_kit"
    MERGING_KIT = "merging_kit"
    FETCHING_ADDON = "fetching_addon"
    MERGING_ADDON = "merging_addon"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


class Fetcher(Protocol):
    def fetch(self, url: str, source: Optional[str] = None) -> bytes:
        ...


class BundleResult:
    """The single artifact of a successful build."""

    def __init__(self, filename: str, data: bytes, paths: List[str], addons: List[str]):
        self.filename = filename
        self.data = data
        self.paths = paths
        self.addons = addons

    @property
    def size(self) -> int:
        return len(self.data)


class BundleOrchestrator:
    """
    Builds a bundle from the kit and a selection of catalog add-ons.
    """

    def __init__(
        self,
        catalog: AddonCatalog,
        fetcher: Fetcher,
        kit_url: str,
        product_name: str = "MH2p",
        collision_policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
        compression: str = "deflate",
        max_concurrent_fetches: int = 1,
    ):
        """
        Args:
            catalog: Add-ons that may be selected
            fetcher: Object with fetch(url, source=None) -> bytes
            kit_url: Location of the base kit archive
            product_name: Prefix of the output file name
            collision_policy: How duplicate output paths are handled
            compression: "deflate" or "store"
            max_concurrent_fetches: Add-on downloads allowed in flight at once
        """
        self.catalog = catalog
        self.fetcher = fetcher
        self.kit_url = kit_url
        self.product_name = product_name
        self.collision_policy = CollisionPolicy(collision_policy)
        self.compression = compression
        self.max_concurrent_fetches = max(1, max_concurrent_fetches)

        self.state = BuildState.IDLE
        self.addon_index: Optional[int] = None
        self.error: Optional[Exception] = None

    @classmethod
    def from_settings(cls, settings, catalog: Optional[AddonCatalog] = None,
                      fetcher: Optional[Fetcher] = None) -> "BundleOrchestrator":
        """Construct from a Settings instance, creating the catalog and fetcher if not given."""
        from modbundle.bundle.fetcher import HttpFetcher
        from modbundle.catalog.loader import resolve_catalog

        return cls(
            catalog=catalog if catalog is not None else resolve_catalog(settings.catalog_path),
            fetcher=fetcher or HttpFetcher(timeout=settings.fetch_timeout, user_agent=settings.user_agent),
            kit_url=settings.kit_url,
            product_name=settings.product_name,
            collision_policy=CollisionPolicy(settings.collision_policy),
            compression=settings.compression,
            max_concurrent_fetches=settings.max_concurrent_fetches,
        )

    @property
    def filename(self) -> str:
        return f"{self.product_name}_ModKit_Mods_Bundle.zip"

    def build(self, addon_ids: Iterable[str], brand: Optional[str] = None,
              progress: Optional[ProgressCallback] = None,
              cancel_event: Optional[threading.Event] = None) -> BundleResult:
        """
        Run a complete build. Every call starts from scratch.

        Raises:
            CatalogError: The selection is invalid
            FetchError, ArchiveFormatError, WriteError, PathCollisionError:
                The failing stage's error, unchanged
            BuildCancelledError: cancel_event was set
        """
        self.state = BuildState.IDLE
        self.addon_index = None
        self.error = None
        reporter = ProgressReporter(progress)

        try:
            return self._run(list(addon_ids), brand, reporter, cancel_event)
        except Exception as e:
            self._fail(e)
            raise

    def _run(self, addon_ids: List[str], brand: Optional[str], reporter: ProgressReporter,
             cancel_event: Optional[threading.Event]) -> BundleResult:
        selected = self.catalog.select(addon_ids, brand)
        file_set = MergedFileSet(self.collision_policy)

        steps = 2 * (1 + len(selected))

        def at_step(step: int) -> float:
            return FETCH_MERGE_SHARE * step / steps

        # Kit
        self._enter(BuildState.FETCHING_KIT, cancel_event)
        reporter.emit(self.state.value, at_step(0), "Downloading Mod Kit...")
        kit_entries = self._load(self.kit_url, "kit")

        self._enter(BuildState.MERGING_KIT, cancel_event)
        reporter.emit(self.state.value, at_step(1), "Merging Mod Kit...")
        count = merge_entries(file_set, kit_entries, RemapMode.KIT)
        logger.info(f"Merged {count} kit files")

        # Add-ons
        executor = None
        if self.max_concurrent_fetches > 1 and len(selected) > 1:
            executor = ThreadPoolExecutor(max_workers=self.max_concurrent_fetches)
            loaders = [executor.submit(self._load, addon.url, addon.id).result for addon in selected]
        else:
            loaders = [functools.partial(self._load, addon.url, addon.id) for addon in selected]

        try:
            for i, (addon, load) in enumerate(zip(selected, loaders)):
                self._merge_addon(file_set, i, len(selected), addon, load, reporter, at_step, cancel_event)
        finally:
            if executor is not None:
                # queued fetches are dropped; running ones finish before the build returns
                executor.shutdown(wait=True, cancel_futures=True)

        # Output
        self._enter(BuildState.WRITING, cancel_event)
        reporter.emit(self.state.value, FETCH_MERGE_SHARE, "Creating final ZIP...")
        data = write_archive(
            file_set,
            reporter.scaled(self.state.value, FETCH_MERGE_SHARE, 100.0, "Zipping"),
            compression=self.compression,
        )

        result = BundleResult(self.filename, data, file_set.paths(), [addon.id for addon in selected])
        self._enter(BuildState.DONE)
        reporter.emit(self.state.value, 100.0, "Done")
        return result

    def _merge_addon(self, file_set: MergedFileSet, index: int, total: int, addon: AddonDescriptor,
                     load: Callable[[], List[ArchiveEntry]], reporter: ProgressReporter,
                     at_step: Callable[[int], float], cancel_event: Optional[threading.Event]) -> None:
        self.addon_index = index
        label = f"mod {index + 1}/{total}: {addon.display_name}"

        self._enter(BuildState.FETCHING_ADDON, cancel_event)
        reporter.emit(self.state.value, at_step(2 + 2 * index), f"Downloading {label}...")
        entries = load()

        self._enter(BuildState.MERGING_ADDON, cancel_event)
        reporter.emit(self.state.value, at_step(3 + 2 * index), f"Merging {label}...")
        count = merge_entries(file_set, entries, RemapMode.ADDON, addon.id)
        logger.info(f"Merged {count} files from {addon.id}")

    def _load(self, url: str, source: str) -> List[ArchiveEntry]:
        raw = self.fetcher.fetch(url, source=source)
        return read_archive(raw, source=f"{source} ({url})")

    def _enter(self, state: BuildState, cancel_event: Optional[threading.Event] = None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise BuildCancelledError(state.value)
        suffix = f" [{self.addon_index}]" if state in (BuildState.FETCHING_ADDON, BuildState.MERGING_ADDON) else ""
        logger.info(f"{self.state.value} -> {state.value}{suffix}")
        self.state = state

    def _fail(self, error: Exception) -> None:
        logger.error(f"Build failed during {self.state.value}: {error}")
        self.state = BuildState.FAILED
        self.error = error
