"""Persistence for the alias table.

Two backends: a flat JSON object on disk, and a PocketBase collection
(identity_aliases with external_id, canonical_id and note fields). Both
load into an AliasStore. Neither ever deletes an entry.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pocketbase import PocketBase

from ..directory.models import normalize_identifier
from ..errors import AliasStoreError
from ..settings import Settings, get_settings
from .store import AliasStore

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "identity_aliases"


def quote_filter_value(value: str) -> str:
    """Quote a string for a PocketBase filter expression.

    Backslashes and double quotes are escaped so vendor-supplied text
    cannot close the string literal.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class AliasFile:
    """Alias table stored as a JSON object {external: canonical}"""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> AliasStore:
        """Load the table. A missing file is an empty table."""
        if not self.path.exists():
            logger.info(f"No alias file at {self.path}, starting with an empty table")
            return AliasStore()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise AliasStoreError(f"Cannot read alias file {self.path}: {e}") from e

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise AliasStoreError(f"Alias file {self.path} must be a JSON object of strings")

        store = AliasStore(data)
        logger.info(f"Loaded {len(store)} aliases from {self.path}")
        return store

    def save(self, store: AliasStore) -> None:
        """Write the table with sorted keys."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(store.entries(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
        except OSError as e:
            raise AliasStoreError(f"Cannot write alias file {self.path}: {e}") from e
        logger.info(f"Saved {len(store)} aliases to {self.path}")


class PocketBaseAliasRepository:
    """Alias table stored in a PocketBase collection"""

    def __init__(self, pb_client: PocketBase, collection: str = DEFAULT_COLLECTION):
        self.pb = pb_client
        self.collection = collection

    def load(self) -> AliasStore:
        try:
            records = self.pb.collection(self.collection).get_full_list()
        except Exception as e:
            raise AliasStoreError(f"Cannot load aliases from collection '{self.collection}': {e}") from e

        aliases: dict[str, str] = {}
        for record in records:
            external = getattr(record, "external_id", None)
            canonical = getattr(record, "canonical_id", None)
            if not external or not canonical:
                logger.warning(f"Skipping incomplete alias record {getattr(record, 'id', '?')}")
                continue
            aliases[external] = canonical

        store = AliasStore(aliases)
        logger.info(f"Loaded {len(store)} aliases from PocketBase collection '{self.collection}'")
        return store

    def save_alias(self, external_id: str, canonical_id: str, note: str | None = None) -> bool:
        """Create or update a single alias record.

        Returns:
            True if a record was created, False if an existing one was updated
        """
        external = normalize_identifier(external_id)
        canonical = normalize_identifier(canonical_id)
        data: dict[str, Any] = {"external_id": external, "canonical_id": canonical}
        if note is not None:
            data["note"] = note

        collection = self.pb.collection(self.collection)
        try:
            existing = collection.get_list(1, 1, {"filter": f"external_id = {quote_filter_value(external)}"})
            if existing.items:
                collection.update(existing.items[0].id, data)
                logger.debug(f"Updated alias {external} -> {canonical}")
                return False
            collection.create(data)
            logger.debug(f"Created alias {external} -> {canonical}")
            return True
        except Exception as e:
            raise AliasStoreError(f"Cannot save alias {external}: {e}") from e

    def save(self, store: AliasStore) -> dict[str, int]:
        """Upsert every entry of a store.

        Returns:
            Stats dict with created and updated counts
        """
        stats = {"created": 0, "updated": 0}
        for external, canonical in store.entries().items():
            if self.save_alias(external, canonical):
                stats["created"] += 1
            else:
                stats["updated"] += 1
        logger.info(f"Saved aliases: {stats['created']} created, {stats['updated']} updated")
        return stats


def create_pocketbase_client(settings: Settings | None = None) -> PocketBase:
    """Create a PocketBase client, authenticating as superuser when credentials are set."""
    settings = settings or get_settings()
    pb = PocketBase(settings.pocketbase_url)
    if settings.pocketbase_admin_email and settings.pocketbase_admin_password:
        try:
            pb.collection("_superusers").auth_with_password(
                settings.pocketbase_admin_email, settings.pocketbase_admin_password
            )
        except Exception as e:
            raise AliasStoreError(f"Failed to authenticate with PocketBase: {e}") from e
    return pb


def load_alias_store(settings: Settings | None = None, pb_client: PocketBase | None = None) -> AliasStore:
    """Load the alias table from the backend selected in settings."""
    settings = settings or get_settings()
    if settings.alias_backend == "pocketbase":
        client = pb_client or create_pocketbase_client(settings)
        return PocketBaseAliasRepository(client, settings.alias_collection).load()
    return AliasFile(settings.alias_path).load()


def save_alias_store(store: AliasStore, settings: Settings | None = None, pb_client: PocketBase | None = None) -> None:
    """Persist the alias table to the backend selected in settings."""
    settings = settings or get_settings()
    if settings.alias_backend == "pocketbase":
        client = pb_client or create_pocketbase_client(settings)
        PocketBaseAliasRepository(client, settings.alias_collection).save(store)
        return
    AliasFile(settings.alias_path).save(store)
