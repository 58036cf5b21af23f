#===============================================================================
#  AppDeck | views.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-20
#  Last Update : 2026-02-20
#
#  Summary
#  -------
#  Sidebar filtering and sorting of catalog entries.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Iterable, List

from .constants import FREQUENT_LIMIT
from .models import CatalogEntry

SORT_KEYS = ("name", "usage", "date")


def filter_catalog(
    entries: Iterable[CatalogEntry],
    category: str = "All",
    sort_by: str = "name",
    query: str = "",
) -> List[CatalogEntry]:
    """Entries visible under a sidebar category, searched and sorted.

    Categories:
      - All       : everything
      - System    : system apps only
      - User Apps : everything that is not a system app
      - Frequent  : top used apps (usage > 0), most used first
      - Scripts   : no catalog entries (scripts come from config.json)
      - <other>   : non-system apps assigned to that category
    """
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by!r} (expected one of {', '.join(SORT_KEYS)})")

    result = list(entries)

    if query:
        q = query.lower()
        result = [e for e in result if q in e.display_name.lower()]

    if category == "System":
        result = [e for e in result if e.is_system]
    elif category == "User Apps":
        result = [e for e in result if not e.is_system]
    elif category == "Scripts":
        result = []
    elif category == "Frequent":
        result = [e for e in result if e.usage_count > 0]
        result.sort(key=lambda e: e.usage_count, reverse=True)
        result = result[:FREQUENT_LIMIT]
    elif category != "All":
        result = [e for e in result if not e.is_system and e.category == category]

    if sort_by == "name":
        result.sort(key=lambda e: e.display_name.lower())
    elif sort_by == "usage":
        result.sort(key=lambda e: e.usage_count, reverse=True)
    else:
        result.sort(key=lambda e: e.last_modified, reverse=True)

    return result
