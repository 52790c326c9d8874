from hashids import Hashids

from aegis.stores.documents import DocumentStore, TableName
from aegis.utils.id_types import ProfileHId, ProfilePId, TeamHId, TeamPId


class EntityResolver:
    """
    Resolves profile and team display names to their numeric IDs and back.

    Rosters are keyed by hash IDs rather than the numeric IDs. The hash is reversible, which
    lets a roster key be turned back into the entity it refers to. Nothing is cached here;
    callers cache whatever views they derive.
    """

    def __init__(self, documents: DocumentStore, *, salt: str, min_length: int) -> None:
        self._documents = documents
        self._hashids = Hashids(salt=salt, min_length=min_length)

    def profile_hash_id(self, profile_pid: ProfilePId | int) -> ProfileHId:
        return ProfileHId(self._hashids.encode(int(profile_pid)))

    def team_hash_id(self, team_pid: TeamPId | int) -> TeamHId:
        return TeamHId(self._hashids.encode(int(team_pid)))

    def decode_hash_id(self, hash_id: str) -> int | None:
        decoded = self._hashids.decode(hash_id)
        return decoded[0] if len(decoded) == 1 else None

    async def _resolve_id(self, table: TableName, name_attribute: str, name: str) -> int | None:
        key_attribute = f"{table.value}PId"
        rows = await self._documents.scan_table(table, [key_attribute], name_attribute, name)
        if len(rows) < 1:
            return None
        return int(rows[0][key_attribute])

    async def resolve_profile_id(self, profile_name: str) -> ProfilePId | None:
        profile_pid = await self._resolve_id(TableName.Profile, "ProfileName", profile_name)
        return None if profile_pid is None else ProfilePId(profile_pid)

    async def resolve_team_id(self, team_name: str) -> TeamPId | None:
        team_pid = await self._resolve_id(TableName.Team, "TeamName", team_name)
        return None if team_pid is None else TeamPId(team_pid)

    async def _name_of(
        self, table: TableName, hash_id: str | None, name_attribute: str
    ) -> str | None:
        if not hash_id:
            return None
        pid = self.decode_hash_id(hash_id)
        if pid is None:
            return None
        item = await self._documents.get_item(table, pid)
        return None if item is None else item.get(name_attribute)

    async def profile_name(self, profile_hid: ProfileHId | None) -> str | None:
        return await self._name_of(TableName.Profile, profile_hid, "ProfileName")

    async def team_name(self, team_hid: TeamHId | None) -> str | None:
        return await self._name_of(TableName.Team, team_hid, "TeamName")
