#===============================================================================
#  AppDeck | errors.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-24
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Error types raised by the catalog engine. Only NotFoundError ever reaches a
#  caller; the others are recovered where they happen.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations


class AppDeckError(Exception):
    """Base class for catalog engine errors."""


class NotFoundError(AppDeckError):
    """The application path no longer exists on disk."""

    def __init__(self, path: str, message: str = "App not found"):
        super().__init__(message)
        self.path = path


class ProbeFailure(AppDeckError):
    """The Spotlight query could not be run or exited non-zero."""


class PersistenceFailure(AppDeckError):
    """config.json could not be read or written."""


class ClassificationFailure(AppDeckError):
    """Bundle category metadata could not be extracted."""
