"""Key-value store for the opaque config / UI-state blobs."""

from srs_pricing.persistence.store import (
    JsonFileSettingsStore,
    SettingsStore,
    SqliteSettingsStore,
    clear_state,
    open_store,
)

__all__ = [
    "JsonFileSettingsStore",
    "SettingsStore",
    "SqliteSettingsStore",
    "clear_state",
    "open_store",
]
