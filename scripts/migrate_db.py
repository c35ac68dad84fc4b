#!/usr/bin/env python3
"""
Rewrite the JSON data file in the current schema (default-filled users, admin roles).

Usage:
  python scripts/migrate_db.py [--file path/to/db.json] [--check]
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

# Make the atype package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from atype.core.config import get_settings
from atype.domain.schema import COLLECTIONS
from atype.repositories.json_storage import JsonDocumentStore
from atype.services.errors import StoreCorruptedError


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Migrate the atype JSON data file")
    ap.add_argument("--file", default=str(settings.db_file), help="Data file (default: DB_FILE)")
    ap.add_argument("--check", action="store_true", help="Only report whether the file is up to date")
    args = ap.parse_args()

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    before = json.loads(path.read_text(encoding="utf-8"))
    store = JsonDocumentStore(path, admin_logins=settings.admin_logins, corrupt_policy="fail")
    doc = store.load()
    changed = doc != before

    for name in COLLECTIONS:
        print(f"  {name}: {len(doc[name])}")
    if args.check:
        print("Needs migration" if changed else "Up to date")
        raise SystemExit(1 if changed else 0)
    if changed:
        store.save(doc)
        print(f"OK: {path} migrated")
    else:
        print(f"OK: {path} already up to date")


if __name__ == "__main__":
    try:
        main()
    except (json.JSONDecodeError, StoreCorruptedError) as exc:
        sys.stderr.write(f"Error: data file is not a valid document ({exc})\n")
        raise SystemExit(1)
