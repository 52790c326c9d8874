from dataclasses import dataclass

from aegis.cache import CacheClient, ReadThroughCache
from aegis.config import Config
from aegis.logic.catalog import ReferenceCatalog
from aegis.logic.codes import CodeGenerationWorkflow
from aegis.logic.entities import EntityResolver
from aegis.logic.match_records import MatchRecordBuilder
from aegis.logic.seasons import SeasonRepository
from aegis.logic.submission import MatchSubmissionWorkflow
from aegis.logic.tournaments import TournamentRepository
from aegis.logic.validation import ValidationPipeline
from aegis.stores.documents import DocumentStore
from aegis.stores.relational import RelationalStore
from aegis.stores.tournament_api import TournamentApiClient


@dataclass(frozen=True)
class LeagueContext:
    """All league services, wired once against the clients owned by the process entry point."""

    cache: ReadThroughCache
    entities: EntityResolver
    catalog: ReferenceCatalog
    tournaments: TournamentRepository
    seasons: SeasonRepository
    validation: ValidationPipeline
    submission: MatchSubmissionWorkflow
    codes: CodeGenerationWorkflow

    @classmethod
    def build(
        cls,
        settings: Config,
        *,
        documents: DocumentStore,
        relational: RelationalStore,
        cache_client: CacheClient,
        tournament_api: TournamentApiClient,
    ) -> "LeagueContext":
        cache = ReadThroughCache(cache_client)
        entities = EntityResolver(
            documents, salt=settings.hash_id_salt, min_length=settings.hash_id_min_length
        )
        catalog = ReferenceCatalog(documents, cache, ttl_seconds=settings.cache_ttl_seconds)
        tournaments = TournamentRepository(documents, cache)
        validation = ValidationPipeline(entities, catalog, relational)
        return cls(
            cache=cache,
            entities=entities,
            catalog=catalog,
            tournaments=tournaments,
            seasons=SeasonRepository(
                documents,
                cache,
                entities,
                tournaments,
                tournament_api,
                ttl_seconds=settings.cache_ttl_seconds,
            ),
            validation=validation,
            submission=MatchSubmissionWorkflow(
                documents, relational, validation, MatchRecordBuilder(entities, catalog)
            ),
            codes=CodeGenerationWorkflow(documents, tournament_api),
        )
