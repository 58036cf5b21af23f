#===============================================================================
#  AppDeck | fs_discovery.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Discovery of installed .app bundles through Spotlight (mdfind).
#
#  Discovery is best effort: a bundle whose mtime can't be read still shows up
#  (last_modified = 0), and a query that can't run at all yields no bundles.
#  Callers can't tell "nothing installed" from "mdfind failed"; the failure is
#  only visible in the log.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import PurePosixPath
from typing import Callable, Iterable, List, Sequence

from .constants import (
    BUNDLE_QUERY,
    BUNDLE_SUFFIX,
    MDFIND,
    NESTED_BUNDLE_MARKER,
    SEARCH_ROOTS,
    SYSTEM_ROOTS,
)
from .errors import ProbeFailure
from .models import RawBundle

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str]], str]
MtimeFn = Callable[[str], int]


def mdfind_command(roots: Iterable[str], mdfind: str = MDFIND) -> List[str]:
    cmd = [mdfind]
    for root in roots:
        cmd += ["-onlyin", root]
    cmd.append(BUNDLE_QUERY)
    return cmd


def run_command(cmd: Sequence[str]) -> str:
    """Run a command and return its stdout; raise ProbeFailure on any failure."""
    try:
        p = subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise ProbeFailure(f"Could not run {cmd[0]}: {e}") from e
    if p.returncode != 0:
        raise ProbeFailure(f"{cmd[0]} failed (rc={p.returncode}): {p.stderr.strip()}")
    return p.stdout


def modified_seconds(path: str) -> int:
    """Whole seconds since epoch, 0 when the metadata can't be read."""
    try:
        return max(int(os.stat(path).st_mtime), 0)
    except (OSError, ValueError):
        return 0


def is_system_path(path: str, system_roots: Sequence[str] = SYSTEM_ROOTS) -> bool:
    return any(path.startswith(root) for root in system_roots)


def is_top_level_bundle(path: str) -> bool:
    """True for X.app itself, False for helpers living inside another bundle."""
    if NESTED_BUNDLE_MARKER in path:
        return False
    return PurePosixPath(path).suffix == BUNDLE_SUFFIX


def parse_mdfind_output(
    text: str,
    mtime: MtimeFn = modified_seconds,
    system_roots: Sequence[str] = SYSTEM_ROOTS,
) -> List[RawBundle]:
    """Turn mdfind's one-path-per-line output into sorted, de-duplicated bundles."""
    bundles: List[RawBundle] = []
    seen = set()

    for line in text.splitlines():
        path = line.strip()
        if not path or not is_top_level_bundle(path):
            continue
        if path in seen:
            continue
        seen.add(path)

        name = PurePosixPath(path).stem
        if not name:
            continue

        bundles.append(
            RawBundle(
                path=path,
                display_name=name,
                is_system=is_system_path(path, system_roots),
                last_modified=mtime(path),
            )
        )

    # Two passes keep the sort stable: path first, then name (case-insensitive)
    bundles.sort(key=lambda b: b.path)
    bundles.sort(key=lambda b: b.display_name.lower())
    return bundles


def discover_bundles(
    roots: Sequence[str] = SEARCH_ROOTS,
    runner: Runner = run_command,
    mtime: MtimeFn = modified_seconds,
    mdfind: str = MDFIND,
) -> List[RawBundle]:
    """Query Spotlight for application bundles under the given roots."""
    cmd = mdfind_command(roots, mdfind)
    try:
        output = runner(cmd)
    except ProbeFailure as e:
        logger.error("Application discovery failed: %s", e)
        return []

    bundles = parse_mdfind_output(output, mtime=mtime)
    logger.info("Discovered %d application bundles", len(bundles))
    return bundles
