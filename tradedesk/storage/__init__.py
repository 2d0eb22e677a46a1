"""Workspace persistence."""

from tradedesk.storage.kv_store import KeyValueStore

__all__ = ["KeyValueStore"]
