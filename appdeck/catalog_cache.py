#===============================================================================
#  AppDeck | catalog_cache.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-11
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  In-memory catalog of installed apps, merged with the config overlay.
#
#  Two refresh modes:
#    - soft: drop entries whose path vanished, re-apply category/usage from
#      config.json. Never runs discovery, never adds entries.
#    - hard: run discovery, merge, replace the whole list.
#
#  Icons are never fetched here; that's done lazily, per path, by the caller.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import threading
from typing import Callable, List

from .errors import NotFoundError
from .fs_discovery import discover_bundles
from .metadata_store import MetadataStore
from .models import AppConfig, CatalogEntry, RawBundle

logger = logging.getLogger(__name__)

Probe = Callable[[], List[RawBundle]]


def merge_bundle(bundle: RawBundle, config: AppConfig) -> CatalogEntry:
    return CatalogEntry(
        display_name=bundle.display_name,
        identity_path=bundle.path,
        is_system=bundle.is_system,
        category=config.categories.get(bundle.path),
        usage_count=config.usage_counts.get(bundle.path, 0),
        icon_ref=None,
        last_modified=bundle.last_modified,
    )


def sort_by_name(entries: List[CatalogEntry]) -> List[CatalogEntry]:
    return sorted(entries, key=lambda e: (e.display_name.lower(), e.identity_path))


class CatalogCache:
    """Process-wide catalog. Create one and hand it to whoever serves requests."""

    def __init__(
        self,
        store: MetadataStore,
        probe: Probe = discover_bundles,
        path_exists: Callable[[str], bool] = os.path.exists,
    ):
        self.store = store
        self.probe = probe
        self.path_exists = path_exists
        self._entries: List[CatalogEntry] = []
        self._lock = threading.Lock()

    def get_catalog(self, force_refresh: bool = False) -> List[CatalogEntry]:
        """Return the catalog, soft-refreshing when possible.

        The lock is held for the whole refresh; concurrent callers wait.
        """
        with self._lock:
            if self._entries and not force_refresh:
                self._entries = self._soft_refresh(self._entries)
            else:
                self._entries = self._hard_refresh()
            return list(self._entries)

    def _soft_refresh(self, entries: List[CatalogEntry]) -> List[CatalogEntry]:
        config = self.store.load()
        kept = [
            e.with_overlay(
                config.categories.get(e.identity_path),
                config.usage_counts.get(e.identity_path, 0),
            )
            for e in entries
            if self.path_exists(e.identity_path)
        ]
        pruned = len(entries) - len(kept)
        if pruned:
            logger.info("Pruned %d vanished apps from catalog", pruned)
        return kept

    def _hard_refresh(self) -> List[CatalogEntry]:
        bundles = self.probe()
        config = self.store.load()
        return sort_by_name([merge_bundle(b, config) for b in bundles])

    def record_usage(self, path: str) -> int:
        """Count one launch of *path*. The cache itself is left alone."""
        if not self.path_exists(path):
            raise NotFoundError(path)
        return self.store.increment_usage(path)

    def snapshot(self) -> List[CatalogEntry]:
        with self._lock:
            return list(self._entries)

    def known_paths(self) -> List[str]:
        return [e.identity_path for e in self.snapshot()]

    def clear(self) -> None:
        with self._lock:
            self._entries = []
