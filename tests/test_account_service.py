from __future__ import annotations

import pytest

from atype.services.account_service import AccountService
from atype.services.errors import AuthError, ConflictError, UnknownReferenceError, ValidationError


@pytest.fixture()
def svc(store):
    return AccountService(store)


def _user(store, login):
    return next(u for u in store.load()["users"] if u["login"] == login)


def test_register_creates_user_with_defaults(svc, store):
    svc.register("alice", "pw")
    user = _user(store, "alice")
    assert user["passHash"] != "pw"
    assert user["friends"] == []
    assert user["avatar"] == ""
    assert user["role"] == "user"
    assert user["lastLoginAt"] is None
    assert user["mutedUntil"] is None and user["lastPostAt"] is None
    assert user["createdAt"].endswith("Z")


def test_register_duplicate_login_conflicts_and_keeps_first(svc, store):
    svc.register("alice", "first")
    before = _user(store, "alice")
    with pytest.raises(ConflictError):
        svc.register("alice", "second")
    assert _user(store, "alice") == before
    assert len(store.load()["users"]) == 1


def test_login_is_case_sensitive(svc):
    svc.register("Alice", "pw")
    with pytest.raises(AuthError):
        svc.login("alice", "pw")


@pytest.mark.parametrize("login,password", [("", "pw"), ("alice", ""), (None, None)])
def test_register_requires_both_fields(svc, login, password):
    with pytest.raises(ValidationError):
        svc.register(login, password)


def test_login_wrong_password_fails(svc, store):
    svc.register("alice", "pw")
    with pytest.raises(AuthError):
        svc.login("alice", "nope")
    with pytest.raises(AuthError):
        svc.login("nobody", "pw")
    assert _user(store, "alice")["lastLoginAt"] is None


def test_login_updates_only_last_login(svc, store):
    svc.register("alice", "pw")
    before = _user(store, "alice")
    assert svc.login("alice", "pw") == "alice"
    after = _user(store, "alice")
    assert after["lastLoginAt"] is not None
    before.pop("lastLoginAt")
    after.pop("lastLoginAt")
    assert after == before


def test_login_accepts_legacy_hash(svc, store):
    with store.transaction() as doc:
        doc["users"].append({"login": "old", "passHash": "96354"})
    assert svc.login("old", "abc") == "old"


def test_avatar_is_trimmed_or_cleared(svc, store):
    svc.register("alice", "pw")
    svc.update_avatar("alice", "  http://img/a.png \n")
    assert _user(store, "alice")["avatar"] == "http://img/a.png"
    svc.update_avatar("alice", 42)
    assert _user(store, "alice")["avatar"] == ""


def test_avatar_unknown_user(svc):
    with pytest.raises(UnknownReferenceError):
        svc.update_avatar("ghost", "x")
    with pytest.raises(ValidationError):
        svc.update_avatar("", "x")


def _run_blocked(monkeypatch, name, action, store):
    """Run ``action`` in a thread while the patched password function is held; return feed() output."""
    import threading

    import atype.services.account_service as account_service
    from atype.services.post_service import PostService

    started = threading.Event()
    release = threading.Event()
    real = getattr(account_service, name)

    def held(*args):
        started.set()
        release.wait(5)
        return real(*args)

    monkeypatch.setattr(account_service, name, held)
    worker = threading.Thread(target=action)
    worker.start()
    try:
        assert started.wait(5)
        result = []
        reader = threading.Thread(target=lambda: result.append(PostService(store).feed()))
        reader.start()
        reader.join(2)
        # the reader finished while hashing was still in progress
        assert result == [[]]
    finally:
        release.set()
        worker.join(5)


def test_hashing_during_register_does_not_block_readers(svc, store, monkeypatch):
    _run_blocked(monkeypatch, "hash_password", lambda: svc.register("alice", "pw"), store)
    assert _user(store, "alice")["login"] == "alice"


def test_verification_during_login_does_not_block_readers(svc, store, monkeypatch):
    svc.register("alice", "pw")
    _run_blocked(monkeypatch, "verify_password", lambda: svc.login("alice", "pw"), store)
    assert _user(store, "alice")["lastLoginAt"] is not None


def test_register_rechecks_duplicates_after_hashing(svc, store, monkeypatch):
    import atype.services.account_service as account_service

    real = account_service.hash_password

    def racing_hash(password):
        # another registration of the same login lands while hashing
        with store.transaction() as doc:
            doc["users"].append({"login": "alice", "passHash": "other"})
        return real(password)

    monkeypatch.setattr(account_service, "hash_password", racing_hash)
    with pytest.raises(ConflictError):
        svc.register("alice", "pw")
    assert [u["passHash"] for u in store.load()["users"]] == ["other"]
