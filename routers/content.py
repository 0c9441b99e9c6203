from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.identity import get_current_user_id
from app.db.session import get_session
from schemas.content_library import (
    ContentCreateRequest,
    ContentListResponse,
    ContentResponse,
    FavoriteUpdateRequest,
)
from services.content_store import (
    ContentDraft,
    ContentNotFoundError,
    ContentStoreError,
    ContentStoreService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])

OPERATION_FAILED = "Operation failed"


def get_content_store(session: AsyncSession = Depends(get_session)) -> ContentStoreService:
    return ContentStoreService(session)


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@router.post("", response_model=ContentResponse, status_code=201)
async def save_content(
    payload: ContentCreateRequest,
    user_id: str = Depends(get_current_user_id),
    store: ContentStoreService = Depends(get_content_store),
) -> ContentResponse:
    draft = ContentDraft(
        content_type=payload.content_type,
        product_service=payload.product_service.strip(),
        key_message=_blank_to_none(payload.key_message),
        target_audience=_blank_to_none(payload.target_audience),
        tone=payload.tone,
        language=payload.language,
        generated_text=payload.generated_text,
        festival_context=_blank_to_none(payload.festival_context),
    )
    try:
        record = await store.create(user_id, draft)
    except ContentStoreError as exc:
        logger.exception("Save content failed for user %s", user_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    return ContentResponse.model_validate(record)


@router.get("", response_model=ContentListResponse)
async def list_content(
    limit: int | None = Query(default=None, ge=1, le=100),
    language: str | None = Query(default=None),
    content_type: str | None = Query(default=None),
    favorites_only: bool = Query(default=False),
    user_id: str = Depends(get_current_user_id),
    store: ContentStoreService = Depends(get_content_store),
) -> ContentListResponse:
    try:
        records = await store.list_content(
            user_id,
            limit=limit,
            language=language,
            content_type=content_type,
            favorites_only=favorites_only,
        )
    except ContentStoreError as exc:
        logger.exception("Fetch content failed for user %s", user_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    items = [ContentResponse.model_validate(record) for record in records]
    return ContentListResponse(items=items, count=len(items))


@router.get("/{content_id}", response_model=ContentResponse)
async def get_content(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ContentStoreService = Depends(get_content_store),
) -> ContentResponse:
    try:
        record = await store.get(user_id, content_id)
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ContentStoreError as exc:
        logger.exception("Fetch content %s failed", content_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    return ContentResponse.model_validate(record)


@router.patch("/{content_id}", response_model=ContentResponse)
async def update_favorite(
    content_id: str,
    payload: FavoriteUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    store: ContentStoreService = Depends(get_content_store),
) -> ContentResponse:
    try:
        record = await store.set_favorite(user_id, content_id, payload.is_favorite)
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ContentStoreError as exc:
        logger.exception("Toggle favorite failed for %s", content_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    return ContentResponse.model_validate(record)


@router.delete("/{content_id}", status_code=204)
async def delete_content(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ContentStoreService = Depends(get_content_store),
) -> Response:
    try:
        await store.delete(user_id, content_id)
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ContentStoreError as exc:
        logger.exception("Delete content failed for %s", content_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    return Response(status_code=204)
