from modbundle.bundle.fetcher import HttpFetcher
from modbundle.bundle.orchestrator import BuildState, BundleOrchestrator, BundleResult
from modbundle.bundle.progress import BuildProgress, ProgressReporter

__all__ = [
    "HttpFetcher",
    "BuildState",
    "BundleOrchestrator",
    "BundleResult",
    "BuildProgress",
    "ProgressReporter",
]
