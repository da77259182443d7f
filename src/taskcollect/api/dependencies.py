"""FastAPI dependency injection for shared resources."""

import logging
from functools import lru_cache

from taskcollect.config import Settings
from taskcollect.tasks.collector import CollectionCache
from taskcollect.vault.connector import VaultConnector

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_collection_cache() -> CollectionCache:
    """Get the process-wide collection cache."""
    settings = get_settings()
    return CollectionCache(staleness_seconds=settings.debounce_seconds)


def get_connector(settings: Settings) -> VaultConnector | None:
    """Build a vault connector, or None when the vault is missing."""
    vault_path = settings.vault_path
    if not vault_path or not vault_path.exists():
        return None
    return VaultConnector(
        vault_path,
        include_patterns=settings.include_patterns,
        exclude_patterns=settings.exclude_patterns,
    )
