#===============================================================================
#  AppDeck | metadata_store.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Load/save and maintenance of the persistent per-user record (category
#  overrides, usage counters, user categories and their order).
#
#  Every mutation re-reads config.json, applies the change and writes the whole
#  record back. There is no shared in-memory copy; two writers racing on the
#  file means the last one wins.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from .constants import BUILTIN_CATEGORY_ORDER
from .errors import PersistenceFailure
from .models import AppConfig, ScriptAction
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def default_config() -> AppConfig:
    return AppConfig()


def migrate_category_order(config: AppConfig) -> AppConfig:
    """Seed an empty category_order with the built-ins, then user categories.

    Idempotent: a non-empty order is left as it is.
    """
    if not config.category_order:
        order = list(BUILTIN_CATEGORY_ORDER)
        for cat in config.user_categories:
            if cat not in order:
                order.append(cat)
        config.category_order = order
    return config


def include_category(config: AppConfig, name: str) -> bool:
    """Make *name* a user category and give it a slot in category_order.

    Returns True if either list changed.
    """
    changed = False
    if name not in config.user_categories:
        config.user_categories.append(name)
        changed = True
    if name not in config.category_order:
        config.category_order.append(name)
        changed = True
    return changed


def load_config(config_path: Path) -> AppConfig:
    """Load the record from disk (or fall back to defaults)."""
    if not config_path.exists():
        return migrate_category_order(default_config())
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Unreadable config %s, using defaults: %s", config_path, e)
        return migrate_category_order(default_config())
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object, using defaults", config_path)
        return migrate_category_order(default_config())
    return migrate_category_order(AppConfig.from_dict(data))


def write_config(config_path: Path, config: AppConfig) -> None:
    """Write via a sibling temp file + os.replace so the old file survives a crash.

    Raises PersistenceFailure; the temp file is gone on every failure path.
    """
    tmp_path: Optional[Path] = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
        # unique per call: concurrent saves must never share a temp file
        fd, tmp_name = tempfile.mkstemp(
            dir=str(config_path.parent), prefix=config_path.name + ".", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(str(tmp_path), str(config_path))  # atomic on same filesystem
    except (OSError, TypeError, ValueError) as e:
        try:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass
        raise PersistenceFailure(f"Failed to save {config_path}: {e}") from e


def save_config(config_path: Path, config: AppConfig) -> bool:
    """Persist the record. A failed write is logged and dropped."""
    try:
        write_config(config_path, config)
        return True
    except PersistenceFailure as e:
        logger.error("%s", e)
        return False


class MetadataStore:
    """config.json bound to a path, plus the mutations the catalog needs."""

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MetadataStore":
        return cls((settings or get_settings()).config_file)

    def load(self) -> AppConfig:
        return load_config(self.config_path)

    def save(self, config: AppConfig) -> bool:
        return save_config(self.config_path, config)

    # --- raw passthrough ---

    def get_config(self) -> AppConfig:
        return self.load()

    def save_config(self, config: AppConfig) -> bool:
        return self.save(config)

    # --- catalog overlay ---

    def add_category(self, name: str) -> None:
        config = self.load()
        if include_category(config, name):
            self.save(config)

    def remove_category(self, name: str) -> None:
        """Drop a user category and un-categorize every path assigned to it."""
        config = self.load()
        config.user_categories = [c for c in config.user_categories if c != name]
        config.categories = {p: c for p, c in config.categories.items() if c != name}
        self.save(config)

    def set_category(self, path: str, category: str) -> None:
        config = self.load()
        config.categories[path] = category
        self.save(config)

    def increment_usage(self, path: str) -> int:
        config = self.load()
        count = config.usage_counts.get(path, 0) + 1
        config.usage_counts[path] = count
        self.save(config)
        return count

    def set_category_order(self, order: List[str]) -> None:
        config = self.load()
        config.category_order = list(order)
        for cat in config.user_categories:
            if cat not in config.category_order:
                config.category_order.append(cat)
        self.save(config)

    # --- scripts (stored alongside, launched elsewhere) ---

    def add_script(self, script: ScriptAction) -> None:
        config = self.load()
        config.scripts.append(script)
        self.save(config)

    def remove_script(self, name: str) -> None:
        config = self.load()
        config.scripts = [s for s in config.scripts if s.name != name]
        self.save(config)

    def update_script(self, original_name: str, script: ScriptAction) -> None:
        config = self.load()
        config.scripts = [
            s for s in config.scripts
            if s.name != original_name and s.name != script.name
        ]
        config.scripts.append(script)
        self.save(config)
