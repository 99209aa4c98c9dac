"""Runtime configuration for an analysis session."""

from dataclasses import dataclass

from .constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CACHE_MAX_BYTES,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_SCAN_YIELD_INTERVAL,
    SEARCHABLE_EXTENSIONS,
    SUPPORTED_ASSET_EXTENSIONS,
)


@dataclass
class SweepConfig:
    """Tunable settings for scanning and quarantine.

    Attributes:
        batch_size: Assets checked concurrently per engine batch
        scan_yield_interval: Files scanned between cooperative yields
        cache_max_entries: Content cache entry cap
        cache_max_bytes: Content cache estimated memory cap
        supported_extensions: Extensions tracked by the catalog builder
        searchable_extensions: Extensions searched for UUID references
        verbose: Print a warning line for every skipped item
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    scan_yield_interval: int = DEFAULT_SCAN_YIELD_INTERVAL
    cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES
    cache_max_bytes: int = DEFAULT_CACHE_MAX_BYTES
    supported_extensions: frozenset[str] = SUPPORTED_ASSET_EXTENSIONS
    searchable_extensions: frozenset[str] = SEARCHABLE_EXTENSIONS
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.scan_yield_interval < 1:
            raise ValueError(
                f"scan_yield_interval must be positive, got {self.scan_yield_interval}"
            )
        if self.cache_max_entries < 0 or self.cache_max_bytes < 0:
            raise ValueError("Cache limits must not be negative")
