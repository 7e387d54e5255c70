"""Feed API endpoints: note lifecycle, listing and search."""

from typing import Optional, Type, TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.background import SideEffectRunner, get_side_effect_runner
from ..core.cache import NotesCache, get_notes_cache
from ..core.exceptions import NoteFeedError, ValidationError
from ..core.images import ImageStorage, get_image_storage
from ..core.notifications import WebSocketNotifier, get_notifier
from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import (
    NoteCreate,
    NoteCreatedResponse,
    NoteDetailResponse,
    NoteFeedResponse,
    NoteHistoryResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteUpdate,
    NoteUpdatedResponse,
)
from ..core.services import NoteService, QueryService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/feed", tags=["feed"])

NoteForm = TypeVar("NoteForm", NoteCreate, NoteUpdate)


def get_note_service(
    session: AsyncSession = Depends(get_db_session),
    cache: NotesCache = Depends(get_notes_cache),
    notifier: WebSocketNotifier = Depends(get_notifier),
    images: ImageStorage = Depends(get_image_storage),
    runner: SideEffectRunner = Depends(get_side_effect_runner),
) -> NoteService:
    return NoteService(session, cache=cache, notifier=notifier, images=images, runner=runner)


def get_query_service(
    session: AsyncSession = Depends(get_db_session),
    cache: NotesCache = Depends(get_notes_cache),
) -> QueryService:
    return QueryService(session, cache=cache)


def _parse_form(schema: Type[NoteForm], title: str, content: str) -> NoteForm:
    """Validate multipart note fields with the JSON schema rules."""
    try:
        return schema(title=title, content=content)
    except PydanticValidationError as e:
        raise ValidationError(
            violations=[
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                    "value": err.get("input"),
                }
                for err in e.errors()
            ]
        ) from e


def _has_file(image: Optional[UploadFile]) -> bool:
    return image is not None and bool(image.filename)


@router.post("/note", response_model=NoteCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    title: str = Form(...),
    content: str = Form(...),
    image: Optional[UploadFile] = File(None),
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
    images: ImageStorage = Depends(get_image_storage),
):
    """Create a note, optionally with an image."""
    request = _parse_form(NoteCreate, title, content)
    image_url = await images.save(image) if _has_file(image) else None

    try:
        note = await note_service.create_note(
            current_user_id, request.title, request.content, image_url=image_url
        )
    except NoteFeedError:
        if image_url:
            await images.release(image_url)
        raise

    body = NoteResponse.from_model(note)
    return NoteCreatedResponse(note=body, creator=body.creator)


@router.get("/notes", response_model=NoteFeedResponse)
async def list_notes(
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    current_user_id: UUID = Depends(get_current_user_id),
    query_service: QueryService = Depends(get_query_service),
):
    """List all notes, newest first."""
    return await query_service.list_notes(page=page, per_page=per_page)


@router.get("/search", response_model=NoteSearchResponse)
async def search_notes(
    search_text: str = Query("", description="Case-insensitive text to look for"),
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    current_user_id: UUID = Depends(get_current_user_id),
    query_service: QueryService = Depends(get_query_service),
):
    """Search notes by title and content."""
    return await query_service.search_notes(search_text, page=page, per_page=per_page)


@router.get("/note/{note_id}", response_model=NoteDetailResponse)
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Get a single note with its revision log."""
    note = await note_service.get_note(note_id)
    return NoteDetailResponse(note=NoteResponse.from_model(note, with_history=True))


@router.patch("/note/{note_id}", response_model=NoteUpdatedResponse)
async def update_note(
    note_id: UUID,
    title: str = Form(...),
    content: str = Form(...),
    image: Optional[UploadFile] = File(None),
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
    images: ImageStorage = Depends(get_image_storage),
):
    """Update a note the current user created."""
    request = _parse_form(NoteUpdate, title, content)
    image_url = await images.save(image) if _has_file(image) else None

    try:
        note, history = await note_service.update_note(
            note_id, current_user_id, request.title, request.content, image_url=image_url
        )
    except NoteFeedError:
        if image_url:
            await images.release(image_url)
        raise

    return NoteUpdatedResponse(
        note=NoteResponse.from_model(note),
        history=NoteHistoryResponse.from_model(history),
    )


@router.delete("/note/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note the current user created."""
    await note_service.delete_note(note_id, current_user_id)
    return MessageResponse(message="Deleted note.")
