from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the atype package importable when running from a plain checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from atype.core import config as core_config  # noqa: E402
from atype.repositories.json_storage import JsonDocumentStore  # noqa: E402


@pytest.fixture()
def db_file(tmp_path, monkeypatch):
    """Point DB_FILE at a temporary path and reset cached settings."""
    path = tmp_path / "db.json"
    monkeypatch.setenv("DB_FILE", str(path))
    monkeypatch.delenv("ADMIN_LOGINS", raising=False)
    monkeypatch.delenv("CORRUPT_DB_POLICY", raising=False)
    core_config.get_settings.cache_clear()
    yield path
    core_config.get_settings.cache_clear()


@pytest.fixture()
def store(db_file):
    return JsonDocumentStore(db_file, admin_logins=core_config.DEFAULT_ADMIN_LOGINS)
