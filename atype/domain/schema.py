"""Document shape and forward migration of stored documents."""
from __future__ import annotations

from typing import Any, Callable, Iterable, MutableMapping

COLLECTIONS = ("users", "posts", "messages", "comments")


class SchemaError(ValueError):
    """Raised when a parsed document cannot be migrated."""


def empty_document() -> dict:
    return {name: [] for name in COLLECTIONS}


def fill_collections(doc: MutableMapping[str, Any], admin_logins: Iterable[str]) -> None:
    """Create any of the four collections missing from the document."""
    for name in COLLECTIONS:
        if not doc.get(name):
            doc[name] = []
        elif not isinstance(doc[name], list):
            raise SchemaError(f"collection {name!r} is not a list")


def fill_user_fields(doc: MutableMapping[str, Any], admin_logins: Iterable[str]) -> None:
    """Back-fill optional user fields, keeping values that are already valid."""
    migrated = []
    for user in doc["users"]:
        if not isinstance(user, dict):
            migrated.append(user)
            continue
        record = dict(user)
        record["friends"] = user.get("friends") if isinstance(user.get("friends"), list) else []
        record["avatar"] = user.get("avatar") if isinstance(user.get("avatar"), str) else ""
        record["role"] = user.get("role") or "user"
        record["mutedUntil"] = user.get("mutedUntil") or None
        record["lastPostAt"] = user.get("lastPostAt") or None
        migrated.append(record)
    doc["users"] = migrated


def promote_admins(doc: MutableMapping[str, Any], admin_logins: Iterable[str]) -> None:
    """Force role=admin for every login on the allow-list."""
    allowed = set(admin_logins)
    for user in doc["users"]:
        if isinstance(user, dict) and user.get("login") in allowed:
            user["role"] = "admin"


# Ordered; every step must be idempotent since stored files carry no version.
SCHEMA_STEPS: tuple[Callable[[MutableMapping[str, Any], Iterable[str]], None], ...] = (
    fill_collections,
    fill_user_fields,
    promote_admins,
)


def migrate_document(doc: MutableMapping[str, Any], admin_logins: Iterable[str]) -> MutableMapping[str, Any]:
    """Run every schema step in order and return the (mutated) document."""
    if not isinstance(doc, dict):
        raise SchemaError("document root is not an object")
    logins = tuple(admin_logins)
    for step in SCHEMA_STEPS:
        step(doc, logins)
    return doc
