#===============================================================================
#  AppDeck | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Shared data models: discovered bundles, catalog entries and the persisted
#  config record.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .constants import (
    BUILTIN_CATEGORY_ORDER,
    DEFAULT_SHORTCUT,
    DEFAULT_THEME,
    DEFAULT_WALLPAPER_BLUR,
    DEFAULT_WALLPAPER_FIT,
    DEFAULT_WALLPAPER_OVERLAY,
    DEFAULT_WALLPAPER_POSITION,
    TAXONOMY,
)


@dataclass(frozen=True)
class RawBundle:
    """One application bundle as reported by the discovery probe."""
    path: str           # absolute path, stable key
    display_name: str   # bundle filename without .app
    is_system: bool
    last_modified: int  # seconds since epoch, 0 if unknown


@dataclass(frozen=True)
class CatalogEntry:
    """Discovery facts plus the overlay resolved from config at merge time."""
    display_name: str
    identity_path: str
    is_system: bool
    category: Optional[str] = None
    usage_count: int = 0
    icon_ref: Optional[str] = None
    last_modified: int = 0

    def with_overlay(self, category: Optional[str], usage_count: int) -> "CatalogEntry":
        return replace(self, category=category, usage_count=usage_count)

    def to_dict(self) -> Dict[str, Any]:
        # Field names match the JSON the desktop front-end consumes.
        return {
            "name": self.display_name,
            "path": self.identity_path,
            "is_system": self.is_system,
            "category": self.category,
            "usage_count": self.usage_count,
            "icon_data": self.icon_ref,
            "date_modified": self.last_modified,
        }


@dataclass
class ScriptAction:
    name: str
    command: str
    cwd: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "command": self.command, "cwd": self.cwd}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ScriptAction":
        return ScriptAction(
            name=str(data.get("name", "")),
            command=str(data.get("command", "")),
            cwd=data.get("cwd") or None,
        )


def _str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items() if isinstance(v, str)}


def _count_map(value: Any) -> Dict[str, int]:
    if not isinstance(value, dict):
        return {}
    out: Dict[str, int] = {}
    for k, v in value.items():
        # bool is an int subclass; a stray true/false is not a count
        if isinstance(v, int) and not isinstance(v, bool) and v >= 0:
            out[str(k)] = v
    return out


def _str_list(value: Any, default: List[str]) -> List[str]:
    if not isinstance(value, list):
        return list(default)
    return [v for v in value if isinstance(v, str)]


def _num(value: Any, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


@dataclass
class AppConfig:
    """The persisted per-user record (config.json).

    Only categories/usage_counts/user_categories/category_order matter to the
    catalog engine; the rest is carried through untouched.
    """
    categories: Dict[str, str] = field(default_factory=dict)       # path -> category
    usage_counts: Dict[str, int] = field(default_factory=dict)     # path -> launches
    user_categories: List[str] = field(default_factory=lambda: list(TAXONOMY))
    category_order: List[str] = field(default_factory=lambda: list(BUILTIN_CATEGORY_ORDER))
    shortcut: str = DEFAULT_SHORTCUT
    scripts: List[ScriptAction] = field(default_factory=list)
    theme: str = DEFAULT_THEME
    wallpaper: Optional[str] = None
    wallpaper_blur: float = DEFAULT_WALLPAPER_BLUR
    wallpaper_overlay: float = DEFAULT_WALLPAPER_OVERLAY
    wallpaper_fit: str = DEFAULT_WALLPAPER_FIT
    wallpaper_position: str = DEFAULT_WALLPAPER_POSITION
    extras: Dict[str, Any] = field(default_factory=dict)           # unknown keys, kept on save

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extras)
        data.update({
            "categories": dict(self.categories),
            "usage_counts": dict(self.usage_counts),
            "user_categories": list(self.user_categories),
            "category_order": list(self.category_order),
            "shortcut": self.shortcut,
            "scripts": [s.to_dict() for s in self.scripts],
            "theme": self.theme,
            "wallpaper": self.wallpaper,
            "wallpaper_blur": self.wallpaper_blur,
            "wallpaper_overlay": self.wallpaper_overlay,
            "wallpaper_fit": self.wallpaper_fit,
            "wallpaper_position": self.wallpaper_position,
        })
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AppConfig":
        """Build a record from parsed JSON; bad fields fall back to defaults.

        A missing ``category_order`` becomes an empty list so the load-time
        migration can repopulate it.
        """
        d = AppConfig()
        known = set(d.to_dict())
        scripts = data.get("scripts")
        wallpaper = data.get("wallpaper")
        return AppConfig(
            categories=_str_map(data.get("categories")),
            usage_counts=_count_map(data.get("usage_counts")),
            user_categories=_str_list(data.get("user_categories"), d.user_categories),
            category_order=_str_list(data.get("category_order"), []),
            shortcut=_text(data.get("shortcut"), d.shortcut),
            scripts=[ScriptAction.from_dict(s) for s in scripts if isinstance(s, dict)]
            if isinstance(scripts, list) else [],
            theme=_text(data.get("theme"), d.theme),
            wallpaper=wallpaper if isinstance(wallpaper, str) else None,
            wallpaper_blur=_num(data.get("wallpaper_blur"), d.wallpaper_blur),
            wallpaper_overlay=_num(data.get("wallpaper_overlay"), d.wallpaper_overlay),
            wallpaper_fit=_text(data.get("wallpaper_fit"), d.wallpaper_fit),
            wallpaper_position=_text(data.get("wallpaper_position"), d.wallpaper_position),
            extras={k: v for k, v in data.items() if k not in known},
        )
