"""
SimpleNote: Notes Route Handlers
================================

What:  GET/POST /api/notes and DELETE /api/notes/{id}.
How:   Handlers stay thin: the body is already normalized by
       `parse_note_submission`, the store comes from `get_note_store`, and
       every failure is a SimpleNoteError rendered by the global handler.
       Methods not declared here get FastAPI's 405.
"""

import logging
import re
from typing import List

from fastapi import APIRouter, Depends, Response

from simplenote.dependencies import get_note_store, parse_note_submission
from simplenote.exceptions import ValidationError
from simplenote.schemas.note import (
    ErrorResponse,
    NoteCreatedResponse,
    NoteResponse,
    NoteSubmission,
)
from simplenote.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

# [0-9] rather than \d: int() would also accept other Unicode digits
NOTE_ID_PATTERN = re.compile(r"-?[0-9]+")
INT4_MIN, INT4_MAX = -(2**31), 2**31 - 1


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="List all notes, newest first",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteResponse]:
    return await store.list_notes()


@router.post(
    "/notes",
    response_model=NoteCreatedResponse,
    responses={
        400: {"description": "Empty form or malformed JSON", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Create a note from a JSON or form body",
    description=(
        "Accepts `application/json` ({\"title\": ..., \"body\": ...}, both optional) "
        "or a form body with `title` and/or `body`. A form with neither field set "
        "is rejected."
    ),
)
async def create_note(
    submission: NoteSubmission = Depends(parse_note_submission),
    store: NoteStore = Depends(get_note_store),
) -> NoteCreatedResponse:
    note_id = await store.insert_note(submission.title, submission.body)
    return NoteCreatedResponse(id=note_id)


@router.delete(
    "/notes/",
    status_code=204,
    responses={400: {"description": "Missing note id", "model": ErrorResponse}},
    include_in_schema=False,
)
async def delete_note_without_id() -> Response:
    raise ValidationError(message="Note id is required", field="id")


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses={
        400: {"description": "Note id is not an integer", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a note",
    description="Deleting an id that does not exist also returns 204.",
)
async def delete_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> Response:
    """
    Delete one note.

    The id must be plain ASCII digits with an optional leading minus and
    fit the SERIAL column (int4); anything else is a 400 before the store
    is touched.
    """
    if not NOTE_ID_PATTERN.fullmatch(note_id):
        raise ValidationError(
            message=f"Note id '{note_id}' is not an integer",
            field="id",
        )

    numeric_id = int(note_id)
    if not INT4_MIN <= numeric_id <= INT4_MAX:
        raise ValidationError(
            message=f"Note id '{note_id}' is out of range",
            field="id",
        )

    await store.delete_note(numeric_id)
    return Response(status_code=204)
