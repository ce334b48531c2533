"""Alias store and its persistence backends."""

from __future__ import annotations

from .repository import (
    AliasFile,
    PocketBaseAliasRepository,
    create_pocketbase_client,
    load_alias_store,
    save_alias_store,
)
from .store import AliasStore, accept_candidate, accept_manual

__all__ = [
    "AliasFile",
    "AliasStore",
    "PocketBaseAliasRepository",
    "accept_candidate",
    "accept_manual",
    "create_pocketbase_client",
    "load_alias_store",
    "save_alias_store",
]
