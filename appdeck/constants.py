#===============================================================================
#  AppDeck | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Central place for catalog naming conventions, discovery roots and the
#  built-in category taxonomy.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSize

APP_TITLE = "AppDeck"
CONFIG_DIR = Path.home() / "Library" / "Application Support" / "AppDeck"
CONFIG_FILE_NAME = "config.json"
ICON_CACHE_DIR_NAME = "icons"
LOGS_DIR_NAME = "logs"
LOG_FILE_NAME = "appdeck.log"

# --- Discovery (Spotlight) ---
MDFIND = "mdfind"
BUNDLE_QUERY = "kMDItemContentTypeTree == 'com.apple.application-bundle'"
BUNDLE_SUFFIX = ".app"
NESTED_BUNDLE_MARKER = ".app/Contents/"

SEARCH_ROOTS = (
    "/Applications",
    "/System/Applications",
    str(Path.home() / "Applications"),
)

SYSTEM_ROOTS = (
    "/System/Applications",
    "/Applications/Utilities",
)

# --- Bundle metadata ---
DEFAULTS = "defaults"
INFO_PLIST_KEY = "LSApplicationCategoryType"

# --- Categories ---
TAXONOMY = ("Development", "Social", "Design", "Productivity")

BUILTIN_CATEGORY_ORDER = (
    "All",
    "Frequent",
    "Scripts",
    *TAXONOMY,
    "User Apps",
    "System",
)

# Substring of the lower-cased LSApplicationCategoryType -> category.
# Checked in order, first hit wins.
CATEGORY_HINTS = (
    ("developer-tools", "Development"),
    ("social-networking", "Social"),
    ("graphics-design", "Design"),
    ("photography", "Design"),
    ("video", "Design"),
    ("productivity", "Productivity"),
    ("business", "Productivity"),
    ("finance", "Productivity"),
    ("utilities", "Productivity"),
)

FREQUENT_LIMIT = 10

# --- Presentation defaults (co-resident in config.json) ---
DEFAULT_SHORTCUT = "Alt+Space"
DEFAULT_THEME = "Midnight"
DEFAULT_WALLPAPER_BLUR = 10.0
DEFAULT_WALLPAPER_OVERLAY = 0.4
DEFAULT_WALLPAPER_FIT = "cover"
DEFAULT_WALLPAPER_POSITION = "center"

# Icons are rendered at this size before PNG encoding
ICON_SIZE = QSize(128, 128)
