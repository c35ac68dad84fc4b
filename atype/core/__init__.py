"""
Core utilities shared across the atype API.

This package hosts configuration helpers (env vars, paths), password
hashing, logging setup and small helpers for timestamps and ids.
"""
