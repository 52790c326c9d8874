from typing import Any

from pydantic import BaseModel, ConfigDict

_ABBREVIATIONS = {"pid": "PId", "pids": "PIds", "hid": "HId"}


def to_document_key(field_name: str) -> str:
    """
    Map a snake_case field onto the attribute naming used in the document store,
    e.g. `most_recent_team_hid` becomes `MostRecentTeamHId`.
    """
    return "".join(_ABBREVIATIONS.get(part, part.capitalize()) for part in field_name.split("_"))


class DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_document_key,
        populate_by_name=True,
        extra="allow",
    )

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
