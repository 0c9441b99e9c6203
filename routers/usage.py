from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.config import Settings, get_settings
from app.core.identity import get_current_user_id
from routers.content import OPERATION_FAILED, get_content_store
from schemas.content_library import ContentResponse
from schemas.usage import DashboardResponse, UsageResponse
from services.content_store import ContentStoreError, ContentStoreService
from services.usage_reporting import UsageReportingService, UsageSummary

logger = logging.getLogger(__name__)

router = APIRouter(tags=["usage"])


def get_usage_reporting(
    store: ContentStoreService = Depends(get_content_store),
    settings: Settings = Depends(get_settings),
) -> UsageReportingService:
    return UsageReportingService(
        store,
        free_tier_limit=settings.free_tier_monthly_limit,
        recent_limit=settings.dashboard_recent_limit,
    )


def _usage_response(usage: UsageSummary) -> UsageResponse:
    return UsageResponse(
        user_id=usage.user_id,
        month_year=usage.month_year,
        generation_count=usage.generation_count,
        subscription_tier=usage.subscription_tier,
        generation_limit=usage.generation_limit,
    )


@router.get("/usage", response_model=UsageResponse)
async def get_usage(
    month: str | None = Query(default=None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$"),
    user_id: str = Depends(get_current_user_id),
    reporting: UsageReportingService = Depends(get_usage_reporting),
) -> UsageResponse:
    try:
        usage = await reporting.get_usage(user_id, month)
    except ContentStoreError as exc:
        logger.exception("Usage lookup failed for user %s", user_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    return _usage_response(usage)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Depends(get_current_user_id),
    reporting: UsageReportingService = Depends(get_usage_reporting),
) -> DashboardResponse:
    try:
        summary = await reporting.get_dashboard(user_id)
    except ContentStoreError as exc:
        logger.exception("Dashboard fetch failed for user %s", user_id)
        raise HTTPException(status_code=500, detail=OPERATION_FAILED) from exc

    return DashboardResponse(
        usage=_usage_response(summary.usage),
        recent_content=[ContentResponse.model_validate(item) for item in summary.recent_content],
        total_content=summary.total_content,
        favorite_count=summary.favorite_count,
    )
