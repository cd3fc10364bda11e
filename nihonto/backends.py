"""Build the asset store and catalog for the configured backend."""

from dataclasses import dataclass

from .catalog.db import CatalogDB
from .catalog.repository import CatalogRepository, SupabaseCatalog
from .config import ConfigError, Settings
from .storage import AssetStore, LocalAssetStore, SupabaseAssetStore


@dataclass
class Backend:
    store: AssetStore
    catalog: CatalogRepository

    def close(self) -> None:
        close = getattr(self.catalog, "close", None)
        if close:
            close()


def open_backend(settings: Settings) -> Backend:
    """Connect to Supabase, or open the local SQLite/filesystem pair.

    Raises ConfigError when the hosted backend is selected without usable credentials.
    """
    settings.require_storage()

    if settings.backend == "local":
        return Backend(
            store=LocalAssetStore(settings.assets_root),
            catalog=CatalogDB(settings.sqlite_path),
        )

    from supabase import SupabaseException, create_client

    try:
        client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    except SupabaseException as e:
        raise ConfigError(f"Invalid Supabase configuration: {e}") from e
    return Backend(
        store=SupabaseAssetStore(client, settings.storage_bucket),
        catalog=SupabaseCatalog(client),
    )
