#===============================================================================
#  AppDeck | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-24
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Runtime settings from environment variables / .env file.
#
#    APPDECK_CONFIG_DIR  directory holding config.json, icons/ and logs/
#    APPDECK_LOG_LEVEL   logging level name (default INFO)
#    APPDECK_MDFIND      Spotlight CLI to invoke (default mdfind)
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    CONFIG_DIR,
    CONFIG_FILE_NAME,
    ICON_CACHE_DIR_NAME,
    LOGS_DIR_NAME,
    MDFIND,
)


@dataclass(frozen=True)
class Settings:
    config_dir: Path = CONFIG_DIR
    log_level: str = "INFO"
    mdfind: str = MDFIND

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def icons_dir(self) -> Path:
        return self.config_dir / ICON_CACHE_DIR_NAME

    @property
    def logs_dir(self) -> Path:
        return self.config_dir / LOGS_DIR_NAME


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Load settings once per process. Real environment variables take
    precedence over the .env file next to main.py."""
    global _settings

    if _settings is not None:
        return _settings

    load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env")

    config_dir = os.getenv("APPDECK_CONFIG_DIR")
    _settings = Settings(
        config_dir=Path(config_dir).expanduser() if config_dir else CONFIG_DIR,
        log_level=os.getenv("APPDECK_LOG_LEVEL", "INFO").upper(),
        mdfind=os.getenv("APPDECK_MDFIND", MDFIND),
    )
    return _settings


def reset_settings() -> None:
    """Forget the cached settings (tests change the environment)."""
    global _settings
    _settings = None
