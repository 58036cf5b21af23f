#===============================================================================
#  AppDeck | log_setup.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-24
#  Last Update : 2026-02-24
#
#  Summary
#  -------
#  Logging setup: console + rotating file under <config dir>/logs.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from .constants import LOG_FILE_NAME
from .settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(settings: Settings, console: bool = True) -> logging.Logger:
    root = logging.getLogger("appdeck")
    root.setLevel(getattr(logging, settings.log_level, logging.INFO))
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if console:
        sh = logging.StreamHandler()
        sh.setFormatter(formatter)
        root.addHandler(sh)

    try:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            settings.logs_dir / LOG_FILE_NAME,
            maxBytes=512 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        fh.setFormatter(formatter)
        root.addHandler(fh)
    except OSError as e:
        root.warning("File logging disabled: %s", e)

    return root
