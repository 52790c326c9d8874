from typing import Any

from aegis.cache import CacheKeys, ReadThroughCache
from aegis.stores.documents import DocumentStore, TableName


class ReferenceCatalog:
    """Read-only reference data kept in the Miscellaneous table: champions and patch version."""

    def __init__(
        self, documents: DocumentStore, cache: ReadThroughCache, *, ttl_seconds: int
    ) -> None:
        self._documents = documents
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    async def _load_data(self, key: str, attribute: str) -> Any:
        item = await self._documents.get_item(TableName.Miscellaneous, key)
        return None if item is None else item.get(attribute)

    async def get_champion_ids(self) -> dict[str, str]:
        async def load() -> dict[str, str] | None:
            champions = await self._load_data(CacheKeys.CHAMP_IDS_KEY, "Data")
            return None if champions is None else {str(k): str(v) for k, v in champions.items()}

        champions = await self._cache.get_or_load(
            CacheKeys.CHAMP_IDS_KEY, load, dict[str, str], self._ttl_seconds
        )
        return champions or {}

    async def get_ddragon_version(self) -> str | None:
        async def load() -> str | None:
            version = await self._load_data(CacheKeys.DDRAGON_VERSION_KEY, "Version")
            return None if version is None else str(version)

        return await self._cache.get_or_load(
            CacheKeys.DDRAGON_VERSION_KEY, load, str, self._ttl_seconds
        )

    async def get_current_patch(self) -> str | None:
        version = await self.get_ddragon_version()
        if version is None:
            return None
        major, _, remainder = version.partition(".")
        minor = remainder.split(".", 1)[0]
        return f"{major}.{minor}" if minor else major
