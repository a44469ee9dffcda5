from uuid import UUID

from pydantic import BaseModel, Field

from notesweb.api.client import ApiClient, Result


class NoteSummary(BaseModel):
    """Note as it appears in the notes listing."""

    id: UUID
    title: str | None = None


class Notes(BaseModel):
    """Notes listing payload."""

    data: list[NoteSummary] = Field(default_factory=list)


class Note(BaseModel):
    """Full note, owned by the notes API."""

    id: UUID
    title: str | None = None
    markdown: str


class UpsertNote(BaseModel):
    """Body for creating or replacing a note."""

    id: UUID
    markdown: str


async def search_notes(api: ApiClient) -> Result[Notes]:
    return await api.call("GET", "/notes", response_model=Notes)


async def get_note_by_id(api: ApiClient, note_id: UUID) -> Result[Note]:
    return await api.call("GET", f"/notes/{note_id}", response_model=Note)


async def upsert_note_by_id(api: ApiClient, note: UpsertNote) -> Result[None]:
    return await api.call("PUT", f"/notes/{note.id}", json=note.model_dump(mode="json"))


async def delete_note_by_id(api: ApiClient, note_id: UUID) -> Result[None]:
    return await api.call("DELETE", f"/notes/{note_id}")
