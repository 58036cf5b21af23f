#===============================================================================
#  AppDeck | commands.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-24
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Command surface of the catalog engine: one request type per operation, an
#  Ok/Err response, and the handler that owns the catalog cache.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from .catalog_cache import CatalogCache
from .categorizer import Reader, auto_categorize, read_bundle_category
from .errors import AppDeckError, NotFoundError
from .fs_discovery import discover_bundles
from .icons import IconFetcher
from .metadata_store import MetadataStore
from .models import AppConfig
from .settings import Settings, get_settings
from .views import filter_catalog

logger = logging.getLogger(__name__)


# --- requests ---

@dataclass(frozen=True)
class GetCatalog:
    refresh: bool = False


@dataclass(frozen=True)
class RecordUsage:
    path: str


@dataclass(frozen=True)
class SetCategory:
    path: str
    category: str


@dataclass(frozen=True)
class AddUserCategory:
    name: str


@dataclass(frozen=True)
class RemoveUserCategory:
    name: str


@dataclass(frozen=True)
class AutoCategorize:
    pass


@dataclass(frozen=True)
class GetConfig:
    pass


@dataclass(frozen=True)
class SaveConfig:
    config: AppConfig


@dataclass(frozen=True)
class FilterCatalog:
    category: str = "All"
    sort_by: str = "name"
    query: str = ""


@dataclass(frozen=True)
class GetIcon:
    path: str


Request = Union[
    GetCatalog,
    RecordUsage,
    SetCategory,
    AddUserCategory,
    RemoveUserCategory,
    AutoCategorize,
    GetConfig,
    SaveConfig,
    FilterCatalog,
    GetIcon,
]


# --- responses ---

@dataclass(frozen=True)
class Ok:
    payload: Any = None


@dataclass(frozen=True)
class Err:
    message: str


Response = Union[Ok, Err]


class CommandHandler:
    """Serves requests against one injected CatalogCache and MetadataStore."""

    def __init__(
        self,
        cache: CatalogCache,
        store: MetadataStore,
        icons: Optional[IconFetcher] = None,
        bundle_reader: Reader = read_bundle_category,
    ):
        self.cache = cache
        self.store = store
        self.icons = icons
        self.bundle_reader = bundle_reader
        self._routes = {
            GetCatalog: self._get_catalog,
            RecordUsage: self._record_usage,
            SetCategory: self._set_category,
            AddUserCategory: self._add_user_category,
            RemoveUserCategory: self._remove_user_category,
            AutoCategorize: self._auto_categorize,
            GetConfig: self._get_config,
            SaveConfig: self._save_config,
            FilterCatalog: self._filter_catalog,
            GetIcon: self._get_icon,
        }

    def handle(self, request: Request) -> Response:
        method = self._routes.get(type(request))
        if method is None:
            raise TypeError(f"Unsupported request: {type(request).__name__}")
        try:
            return Ok(method(request))
        except AppDeckError as e:
            logger.info("%s rejected: %s", type(request).__name__, e)
            return Err(str(e))

    def _get_catalog(self, req: GetCatalog):
        return self.cache.get_catalog(force_refresh=req.refresh)

    def _record_usage(self, req: RecordUsage):
        return self.cache.record_usage(req.path)

    def _set_category(self, req: SetCategory):
        if not self.cache.path_exists(req.path):
            raise NotFoundError(req.path)
        self.store.set_category(req.path, req.category)

    def _add_user_category(self, req: AddUserCategory):
        self.store.add_category(req.name)

    def _remove_user_category(self, req: RemoveUserCategory):
        self.store.remove_category(req.name)

    def _auto_categorize(self, req: AutoCategorize):
        paths = self.cache.known_paths()
        if not paths:
            paths = [e.identity_path for e in self.cache.get_catalog()]
        auto_categorize(self.store, paths, reader=self.bundle_reader)

    def _get_config(self, req: GetConfig):
        return self.store.get_config()

    def _save_config(self, req: SaveConfig):
        self.store.save_config(req.config)

    def _filter_catalog(self, req: FilterCatalog):
        try:
            return filter_catalog(self.cache.get_catalog(), req.category, req.sort_by, req.query)
        except ValueError as e:
            raise AppDeckError(str(e)) from e

    def _get_icon(self, req: GetIcon):
        if self.icons is None:
            return None
        return self.icons.get_icon(req.path)


def build_handler(settings: Optional[Settings] = None) -> CommandHandler:
    """Wire the production collaborators from settings."""
    settings = settings or get_settings()
    store = MetadataStore.from_settings(settings)
    probe = functools.partial(discover_bundles, mdfind=settings.mdfind)
    cache = CatalogCache(store, probe=probe)
    return CommandHandler(cache, store, IconFetcher(settings.icons_dir))
