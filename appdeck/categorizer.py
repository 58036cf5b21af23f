#===============================================================================
#  AppDeck | categorizer.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-18
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Best-effort auto-categorization of apps from the LSApplicationCategoryType
#  key in each bundle's Info.plist.
#
#  Notes
#  -----
#  - Only paths without a category are looked at; user choices are never
#    overwritten.
#  - No guessing from the app name. Apps without a recognised category type
#    stay uncategorized.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Optional

from .constants import CATEGORY_HINTS, DEFAULTS, INFO_PLIST_KEY
from .errors import ClassificationFailure
from .metadata_store import MetadataStore, include_category

logger = logging.getLogger(__name__)

Reader = Callable[[str], Optional[str]]


def extract_category_type(bundle_path: str) -> str:
    """Read LSApplicationCategoryType via `defaults read`; raise on failure."""
    info = Path(bundle_path) / "Contents" / "Info"
    if not info.with_suffix(".plist").exists():
        raise ClassificationFailure(f"No Info.plist in {bundle_path}")
    try:
        p = subprocess.run(
            [DEFAULTS, "read", str(info), INFO_PLIST_KEY],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise ClassificationFailure(f"Could not run {DEFAULTS}: {e}") from e
    if p.returncode != 0:
        raise ClassificationFailure(f"{INFO_PLIST_KEY} missing for {bundle_path} (rc={p.returncode})")
    return p.stdout.strip()


def read_bundle_category(bundle_path: str) -> Optional[str]:
    try:
        value = extract_category_type(bundle_path)
    except ClassificationFailure as e:
        logger.debug("%s", e)
        return None
    return value or None


def classify_category_identifier(identifier: Optional[str]) -> Optional[str]:
    """Map e.g. 'public.app-category.developer-tools' to 'Development'."""
    if not identifier:
        return None
    ident = identifier.lower()
    for hint, category in CATEGORY_HINTS:
        if hint in ident:
            return category
    return None


def auto_categorize(
    store: MetadataStore,
    paths: Iterable[str],
    reader: Reader = read_bundle_category,
) -> int:
    """Categorize every uncategorized path that we can; return how many were.

    config.json is written once at the end, and only if something changed.
    """
    config = store.load()
    assigned = 0

    for path in paths:
        if path in config.categories:
            continue
        try:
            category = classify_category_identifier(reader(path))
        except Exception as e:  # per-entry failures never abort the batch
            logger.warning("Could not classify %s: %s", path, e)
            continue
        if not category:
            continue

        config.categories[path] = category
        include_category(config, category)
        assigned += 1

    if assigned:
        store.save(config)
        logger.info("Auto-categorized %d apps", assigned)
    return assigned
