from aegis.logic.match_records import MatchRecordBuilder
from aegis.logic.validation import ValidationPipeline
from aegis.models.match import (
    MATCH_SETUP_IDS_KEY,
    MatchRecord,
    MatchSetupIndex,
    PendingMatch,
    SetupValidationFailure,
)
from aegis.stores.documents import DocumentStore, TableName
from aegis.stores.relational import RelationalStore
from aegis.utils.id_types import MatchPId
from aegis.utils.logging import logger


class MatchSubmissionWorkflow:
    def __init__(
        self,
        documents: DocumentStore,
        relational: RelationalStore,
        validation: ValidationPipeline,
        records: MatchRecordBuilder,
    ) -> None:
        self._documents = documents
        self._relational = relational
        self._validation = validation
        self._records = records

    async def get_match_setup_index(self) -> MatchSetupIndex:
        item = await self._documents.get_item(TableName.Miscellaneous, MATCH_SETUP_IDS_KEY)
        return MatchSetupIndex() if item is None else MatchSetupIndex.model_validate(item)

    async def submit_match_setup(
        self, match_pid: MatchPId
    ) -> MatchRecord | SetupValidationFailure | None:
        """
        Validate the pending setup of a match and replace it with the canonical record.

        Returns None when there is nothing to submit. The MySQL insert happens before the
        DynamoDB write and nothing is rolled back, so a failure between the two leaves the
        stores diverged. That case is logged and re-raised.
        """
        item = await self._documents.get_item(TableName.Matches, match_pid)
        if item is None:
            logger.error(f"Match ID {match_pid} does not exist.")
            return None

        match = PendingMatch.model_validate(item)
        if match.setup is None:
            logger.error(f"Match ID {match_pid} no longer has a Setup.")
            return None

        validate_messages = await self._validation.validate_setup(match.setup.teams)
        if len(validate_messages) > 0:
            return SetupValidationFailure(setup=match.setup, validate_messages=validate_messages)

        record = await self._records.build(match_pid, match.setup)

        await self._relational.insert_match(record, match.setup)
        try:
            await self._documents.put_item(TableName.Matches, record.to_document(), match_pid)
        except Exception:
            logger.error(
                f"Match {match_pid} was inserted into MySQL but not written to DynamoDB, "
                "stores diverged"
            )
            raise

        setup_index = await self.get_match_setup_index()
        setup_index.match_setup_id_map.pop(match_pid, None)
        await self._documents.put_item(
            TableName.Miscellaneous, setup_index.to_document(), MATCH_SETUP_IDS_KEY
        )
        logger.info(f"Submitted match {match_pid}")
        return record
