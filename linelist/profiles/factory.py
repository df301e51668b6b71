from pathlib import Path

from linelist.config.settings import Settings
from linelist.database.connection import init_pool, is_pool_initialized
from linelist.profiles.base import BaseProfileStore
from linelist.profiles.json_file_store import JsonFileProfileStore
from linelist.profiles.postgres_store import PostgresProfileStore


class ProfileStoreFactory:
    """Creates the configured profile store."""

    STORES: tuple[str, ...] = ("json", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseProfileStore:
        store = settings.profile_store.lower()
        if store == "json":
            return JsonFileProfileStore(Path(settings.profile_store_path))
        if store == "postgres":
            if not is_pool_initialized():
                init_pool(settings)
            return PostgresProfileStore()
        raise ValueError(
            f"Unknown profile store '{store}'. Choose from: {list(cls.STORES)}"
        )
