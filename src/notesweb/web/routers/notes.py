from typing import Annotated
from uuid import UUID, uuid4

import structlog
from fastapi import APIRouter, Depends, Form
from pydantic import BaseModel, Field
from starlette.responses import Response

from notesweb.api.client import Err
from notesweb.api.notes import (
    Note,
    NoteSummary,
    UpsertNote,
    delete_note_by_id,
    get_note_by_id,
    search_notes,
    upsert_note_by_id,
)
from notesweb.errors import NotFoundError
from notesweb.web.actions import Redirect, fail, redirect
from notesweb.web.deps import ApiDep, SessionDep
from notesweb.web.openapi import ActionFailure, ErrorResponse

logger = structlog.get_logger(__name__)

router: APIRouter = APIRouter(tags=["notes"])


class NotesPage(BaseModel):
    """Page data shared by every page in the notes section."""

    notes: list[NoteSummary] = Field(..., description="Notes of the current user, for the sidebar")


class NotePage(NotesPage):
    """Page data for a single note."""

    note: Note = Field(..., description="The note being viewed or edited")


async def load_notes(api: ApiDep) -> list[NoteSummary]:
    """Layout loader: the notes listing, or a redirect to sign in if it cannot be fetched."""
    result = await search_notes(api)
    if isinstance(result, Err):
        raise Redirect("/signin")
    return result.data.data


NotesDep = Annotated[list[NoteSummary], Depends(load_notes)]


async def _load_note(api: ApiDep, note_id: UUID) -> Note:
    result = await get_note_by_id(api, note_id)
    if isinstance(result, Err):
        raise NotFoundError("note could not be found")
    return result.data


@router.get(
    "/",
    summary="Notes root",
    description="Redirect to the first note of the listing.",
    operation_id="notesRoot",
    status_code=303,
    responses={
        303: {"description": "Redirect to the first note"},
        404: {"model": ErrorResponse, "description": "Notes could not be fetched, or there are none"},
    },
)
async def notes_root(api: ApiDep) -> Response:
    result = await search_notes(api)
    if isinstance(result, Err):
        raise NotFoundError("notes could not be fetched")

    if not result.data.data:
        raise NotFoundError("not notes found")

    return redirect(f"/{result.data.data[0].id}")


@router.get(
    "/create",
    summary="New note page",
    operation_id="createNotePage",
    responses={303: {"description": "Notes could not be fetched, redirect to `/signin`"}},
)
async def create_note_page(notes: NotesDep) -> NotesPage:
    return NotesPage(notes=notes)


@router.post(
    "/create",
    summary="Create note",
    description="Create a note with a newly generated id and redirect to it.",
    operation_id="createNote",
    status_code=303,
    responses={
        303: {"description": "Note created (or no session, redirect to `/signup`)"},
        400: {"model": ActionFailure, "description": "Empty markdown"},
        500: {"model": ActionFailure, "description": "The notes API rejected the request"},
    },
)
async def create_note(
    api: ApiDep,
    session: SessionDep,
    markdown: Annotated[str | None, Form()] = None,
) -> Response:
    if session is None:
        return redirect("/signup")

    if not markdown:
        return fail(400, "markdown cannot be empty")

    note_id = uuid4()
    result = await upsert_note_by_id(api, UpsertNote(id=note_id, markdown=markdown))
    if isinstance(result, Err):
        return fail(500, "something went wrong")

    logger.info("note_created", note_id=str(note_id))
    return redirect(f"/{note_id}")


@router.get(
    "/{note_id}",
    summary="Note page",
    operation_id="notePage",
    responses={
        303: {"description": "Notes could not be fetched, redirect to `/signin`"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def note_page(note_id: UUID, api: ApiDep, notes: NotesDep) -> NotePage:
    note = await _load_note(api, note_id)
    return NotePage(notes=notes, note=note)


@router.post(
    "/{note_id}/delete",
    summary="Delete note",
    operation_id="deleteNote",
    status_code=303,
    responses={
        303: {"description": "Note deleted, redirect to `/` (or no session, redirect to `/signup`)"},
        500: {"model": ActionFailure, "description": "The notes API rejected the request"},
    },
)
async def delete_note(note_id: UUID, api: ApiDep, session: SessionDep) -> Response:
    if session is None:
        return redirect("/signup")

    result = await delete_note_by_id(api, note_id)
    if isinstance(result, Err):
        return fail(500, "something went wrong")

    logger.info("note_deleted", note_id=str(note_id))
    return redirect("/")


@router.get(
    "/{note_id}/edit",
    summary="Edit note page",
    operation_id="editNotePage",
    responses={
        303: {"description": "Notes could not be fetched, redirect to `/signin`"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def edit_note_page(note_id: UUID, api: ApiDep, notes: NotesDep) -> NotePage:
    note = await _load_note(api, note_id)
    return NotePage(notes=notes, note=note)


@router.post(
    "/{note_id}/edit",
    summary="Save note",
    description="Replace the markdown of a note and redirect back to it.",
    operation_id="editNote",
    status_code=303,
    responses={
        303: {"description": "Note saved (or no session, redirect to `/signup`)"},
        400: {"model": ActionFailure, "description": "Empty markdown"},
        500: {"model": ActionFailure, "description": "The notes API rejected the request"},
    },
)
async def edit_note(
    note_id: UUID,
    api: ApiDep,
    session: SessionDep,
    markdown: Annotated[str | None, Form()] = None,
) -> Response:
    if session is None:
        return redirect("/signup")

    if not markdown:
        return fail(400, "markdown cannot be empty")

    result = await upsert_note_by_id(api, UpsertNote(id=note_id, markdown=markdown))
    if isinstance(result, Err):
        return fail(500, "something went wrong")

    logger.info("note_updated", note_id=str(note_id))
    return redirect(f"/{note_id}")
