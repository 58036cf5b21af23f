#===============================================================================
#  AppDeck | icons.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-12
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Lazy, per-path icon lookup. Icons are rendered once through Qt's file icon
#  provider, cached as PNG under <config dir>/icons/<md5(path)>.png and handed
#  out as data: URIs.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import base64
import hashlib
import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QBuffer, QByteArray, QFileInfo, QIODevice, QSize
from PySide6.QtWidgets import QApplication, QFileIconProvider

from .constants import ICON_SIZE

logger = logging.getLogger(__name__)


def icon_cache_name(app_path: str) -> str:
    return hashlib.md5(app_path.encode("utf-8")).hexdigest() + ".png"


def to_data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def ensure_qt_app() -> QApplication:
    """QPixmap needs a QApplication; create a bare one if none is running."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def render_icon_png(app_path: str, size: QSize = ICON_SIZE) -> Optional[bytes]:
    ensure_qt_app()
    icon = QFileIconProvider().icon(QFileInfo(app_path))
    if icon.isNull():
        return None
    pixmap = icon.pixmap(size)
    if pixmap.isNull():
        return None

    data = QByteArray()
    buf = QBuffer(data)
    buf.open(QIODevice.WriteOnly)
    try:
        if not pixmap.save(buf, "PNG"):
            return None
    finally:
        buf.close()
    return bytes(data.data())


class IconFetcher:
    def __init__(self, cache_dir: Path, size: QSize = ICON_SIZE):
        self.cache_dir = Path(cache_dir)
        self.size = size

    def cache_path(self, app_path: str) -> Path:
        return self.cache_dir / icon_cache_name(app_path)

    def get_icon(self, app_path: str) -> Optional[str]:
        cached = self.cache_path(app_path)
        if cached.exists():
            try:
                return to_data_uri(cached.read_bytes())
            except OSError as e:
                logger.warning("Icon cache unreadable %s: %s", cached, e)

        if not Path(app_path).exists():
            return None

        png = render_icon_png(app_path, self.size)
        if not png:
            logger.debug("No icon for %s", app_path)
            return None

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            cached.write_bytes(png)
        except OSError as e:
            logger.warning("Could not cache icon for %s: %s", app_path, e)
        return to_data_uri(png)
