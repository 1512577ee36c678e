"""
SimpleNote: Request Dependencies
================================

What:  FastAPI dependencies shared by the route modules.
How:   The store and page renderer live on `app.state` (set by create_app);
       handlers receive them through Depends() instead of module globals.
       `parse_note_submission` turns a JSON or form body into a
       NoteSubmission before the handler runs.
"""

import logging

import pydantic
from fastapi import Request

from simplenote.exceptions import ValidationError
from simplenote.schemas.note import NoteSubmission
from simplenote.services.note_store import NoteStore
from simplenote.services.page import PageRenderer

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.store


def get_page_renderer(request: Request) -> PageRenderer:
    return request.app.state.page


async def parse_note_submission(request: Request) -> NoteSubmission:
    """
    Normalize a POST /api/notes body into a NoteSubmission.

    JSON bodies:
        Must be an object. `title` and `body` are optional strings (null
        counts as missing); other keys are ignored.

    Form bodies (anything that is not JSON):
        `title` and `body` come from the body, else from the query string.
        Accepted only when one of them is present and non-empty.

    Raises:
        ValidationError: malformed JSON, wrong field types, or an empty form.
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()

    if media_type == JSON_MEDIA_TYPE:
        try:
            payload = await request.json()
        except ValueError as e:
            raise ValidationError(message="Request body is not valid JSON") from e

        if not isinstance(payload, dict):
            raise ValidationError(message="Request body must be a JSON object")

        try:
            return NoteSubmission.model_validate(payload)
        except pydantic.ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ValidationError(
                message="Note title and body must be strings",
                field=",".join(fields) or None,
            ) from e

    form = await request.form()
    # Body fields win; the query string fills in whatever the body lacks
    title = form.get("title", request.query_params.get("title"))
    body = form.get("body", request.query_params.get("body"))
    # multipart file parts are not text; treat them as absent
    title = title if isinstance(title, str) else ""
    body = body if isinstance(body, str) else ""

    if not title and not body:
        raise ValidationError(message="A note needs a title or a body")

    return NoteSubmission(title=title, body=body)
