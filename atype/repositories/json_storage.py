"""
JSON-file persistence adapter.

The whole state lives in one document ({users, posts, messages, comments}).
Every operation runs load -> mutate -> save while holding the store lock, so
requests served from the same process cannot overwrite each other's changes.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple
import copy
import json
import logging
import os
import stat
import tempfile
import threading

from atype.core.config import Settings, get_settings
from atype.domain.schema import empty_document, migrate_document
from atype.services.errors import StoreCorruptedError, StoreWriteError

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    """Owns the backing file; callers go through read() or transaction()."""

    def __init__(
        self,
        path: Path | str,
        *,
        admin_logins: Iterable[str] = (),
        corrupt_policy: str = "reset",
    ) -> None:
        self.path = Path(path)
        self.admin_logins = tuple(admin_logins)
        self.corrupt_policy = corrupt_policy
        self._lock = threading.RLock()
        self._cached: Optional[dict] = None
        self._fingerprint: Optional[Tuple[int, int]] = None

    # -------------------------------------- helpers --------------------------------------
    def _stat(self) -> Optional[Tuple[int, int]]:
        try:
            st = self.path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return None
        return (st.st_mtime_ns, st.st_size)

    def _remember(self, doc: dict) -> None:
        self._cached = copy.deepcopy(doc)
        self._fingerprint = self._stat()

    def _file_mode(self) -> int:
        """Mode of the current file, or the umask default for a new one (mkstemp uses 0600)."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except OSError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _reset(self) -> dict:
        doc = empty_document()
        self.save(doc)
        return doc

    # -------------------------------------- public API --------------------------------------
    def load(self) -> dict:
        """Return the migrated document, creating or healing the file when needed."""
        with self._lock:
            fingerprint = self._stat()
            if fingerprint is None:
                logger.info("No data file at %s, creating an empty document", self.path)
                return self._reset()
            if self._cached is not None and fingerprint == self._fingerprint:
                return copy.deepcopy(self._cached)
            try:
                raw = self.path.read_text(encoding="utf-8")
                doc = migrate_document(json.loads(raw), self.admin_logins)
            except ValueError as exc:
                if self.corrupt_policy == "fail":
                    logger.error("Data file %s is corrupt: %s", self.path, exc)
                    raise StoreCorruptedError(f"data file is corrupt: {exc}") from exc
                logger.warning("Data file %s is corrupt (%s); resetting to an empty document", self.path, exc)
                return self._reset()
            self._remember(doc)
            return doc

    def save(self, doc: dict) -> None:
        """Overwrite the backing file with the full document."""
        payload = json.dumps(doc, ensure_ascii=False, indent=2)
        with self._lock:
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.chmod(tmp_name, self._file_mode())
                os.replace(tmp_name, self.path)
            except OSError as exc:
                logger.exception("Could not write data file %s", self.path)
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StoreWriteError("could not persist data") from exc
            # Cached copy is the migrated form so reads stay identical to a fresh load.
            self._remember(migrate_document(copy.deepcopy(doc), self.admin_logins))

    def read(self) -> dict:
        return self.load()

    @contextmanager
    def transaction(self) -> Iterator[dict]:
        """Hold the lock for load -> mutate -> save; nothing is saved if the block raises."""
        with self._lock:
            doc = self.load()
            yield doc
            self.save(doc)


_stores: dict[Path, JsonDocumentStore] = {}
_stores_lock = threading.Lock()


def get_store(settings: Settings | None = None) -> JsonDocumentStore:
    """One store per backing file, configured from Settings."""
    settings = settings or get_settings()
    target = Path(settings.db_file).resolve()
    with _stores_lock:
        store = _stores.get(target)
        if store is None:
            store = JsonDocumentStore(
                target,
                admin_logins=settings.admin_logins,
                corrupt_policy=settings.corrupt_policy,
            )
            _stores[target] = store
        return store
