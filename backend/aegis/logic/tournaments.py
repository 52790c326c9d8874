from aegis.cache import CacheKeys, ReadThroughCache
from aegis.models.tournament import Tournament
from aegis.stores.documents import DocumentStore, TableName
from aegis.utils.id_types import TournamentPId


class TournamentRepository:
    def __init__(self, documents: DocumentStore, cache: ReadThroughCache) -> None:
        self._documents = documents
        self._cache = cache

    async def get_tournament_short_name(self, tournament_pid: TournamentPId) -> str | None:
        async def load() -> str | None:
            item = await self._documents.get_item(TableName.Tournament, tournament_pid)
            return None if item is None else item.get("TournamentShortName")

        return await self._cache.get_or_load(
            f"{CacheKeys.TOURNAMENT_CODE_PREFIX}{tournament_pid}", load, str
        )

    async def create_tournament(self, tournament: Tournament) -> None:
        await self._documents.put_item(
            TableName.Tournament, tournament.to_document(), tournament.tournament_pid
        )
