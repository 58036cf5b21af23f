#===============================================================================
#  AppDeck  |  Application Catalog
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-03-02
#
#  Summary
#  -------
#  Command line front-end for the AppDeck catalog engine. Discovers installed
#  .app bundles via Spotlight and overlays them with the per-user categories and
#  usage counts stored in config.json.
#
#  Usage
#  -----
#    python main.py list [--refresh] [--category C] [--sort name|usage|date]
#                        [--query Q] [--json]
#    python main.py use PATH
#    python main.py set-category PATH NAME
#    python main.py add-category NAME
#    python main.py remove-category NAME
#    python main.py auto-categorize
#    python main.py config
#
#  Files
#  -----
#    ~/Library/Application Support/AppDeck/
#      - config.json                      -> categories, usage, order, scripts, theme
#      - icons/<md5>.png                  -> cached app icons
#      - logs/appdeck.log                 -> rotating log
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project may use third-party libraries (e.g., PySide6, python-dotenv)
#  which are licensed separately by their respective authors. Ensure compliance
#  with their license terms when distributing this software.
#===============================================================================

import argparse
import json
import sys
from typing import List, Optional

from appdeck.commands import (
    AddUserCategory,
    AutoCategorize,
    CommandHandler,
    Err,
    FilterCatalog,
    GetCatalog,
    GetConfig,
    Ok,
    RecordUsage,
    RemoveUserCategory,
    SetCategory,
    build_handler,
)
from appdeck.log_setup import configure_logging
from appdeck.settings import get_settings
from appdeck.views import SORT_KEYS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="appdeck", description="Installed application catalog")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List installed applications")
    p.add_argument("--refresh", action="store_true", help="Re-run discovery")
    p.add_argument("--category", default="All")
    p.add_argument("--sort", default="name", choices=SORT_KEYS)
    p.add_argument("--query", default="")
    p.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    p = sub.add_parser("use", help="Count one launch of an application")
    p.add_argument("path")

    p = sub.add_parser("set-category", help="Assign a category to an application")
    p.add_argument("path")
    p.add_argument("name")

    p = sub.add_parser("add-category", help="Add a user category")
    p.add_argument("name")

    p = sub.add_parser("remove-category", help="Remove a user category")
    p.add_argument("name")

    sub.add_parser("auto-categorize", help="Categorize apps from their Info.plist")
    sub.add_parser("config", help="Print config.json as loaded")
    return parser


def _print_entries(entries, as_json: bool) -> None:
    if as_json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return
    for e in entries:
        tag = "system" if e.is_system else "user"
        print(f"{e.display_name:<32} {e.category or '-':<14} {e.usage_count:>5}  {tag:<6}  {e.identity_path}")


def run(handler: CommandHandler, args: argparse.Namespace) -> int:
    if args.command == "list":
        resp = handler.handle(GetCatalog(refresh=True)) if args.refresh else Ok()
        if not isinstance(resp, Err):
            resp = handler.handle(FilterCatalog(args.category, args.sort, args.query))
        if not isinstance(resp, Err):
            _print_entries(resp.payload, args.json)
    elif args.command == "use":
        resp = handler.handle(RecordUsage(args.path))
    elif args.command == "set-category":
        resp = handler.handle(SetCategory(args.path, args.name))
    elif args.command == "add-category":
        resp = handler.handle(AddUserCategory(args.name))
    elif args.command == "remove-category":
        resp = handler.handle(RemoveUserCategory(args.name))
    elif args.command == "auto-categorize":
        resp = handler.handle(AutoCategorize())
    else:
        resp = handler.handle(GetConfig())
        if not isinstance(resp, Err):
            print(json.dumps(resp.payload.to_dict(), indent=2))

    if isinstance(resp, Err):
        print(f"Error: {resp.message}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings, console=False)
    return run(build_handler(settings), args)


if __name__ == "__main__":
    sys.exit(main())
