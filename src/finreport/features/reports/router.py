import logging
import re
from fastapi import APIRouter, Depends, Query
from typing import Annotated, Optional

from ...core.config import Settings, get_settings
from ..auth.models import User as AuthUser
from ..auth.security import get_current_active_user
from ...common.schemas import MessageResponse
from .date_range import resolve_report_range
from .schemas import (
    MAX_PAGE_NUMBER, MAX_PAGE_SIZE, GenerateReportResponse, Pagination, ReportListResponse,
    ReportSettingPublic, ReportSettingResponse, ReportSettingUpdate
)
from . import service as report_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/report",
    tags=["Reports"],
    dependencies=[Depends(get_current_active_user)],
    responses={404: {"description": "Not found"}},
)

_LEADING_INT = re.compile(r"\s*([+-]?)0*(\d+)")


def _positive_int_or(raw: Optional[str], default: int, maximum: int) -> int:
    # Leading digits count ("20abc" -> 20); zero, negatives and non-numbers fall back
    # to the default, anything above ``maximum`` is clamped to it.
    match = _LEADING_INT.match(raw) if raw is not None else None
    if match is None or match.group(1) == "-":
        return default
    digits = match.group(2)
    if len(digits) > len(str(maximum)):
        return maximum
    value = int(digits)
    if value < 1:
        return default
    return min(value, maximum)


def get_pagination(
    settings: Annotated[Settings, Depends(get_settings)],
    page_number: Optional[str] = Query(None, alias="pageNumber"),
    page_size: Optional[str] = Query(None, alias="pageSize"),
) -> Pagination:
    """Lenient paging params: missing or invalid values never produce a 4xx."""
    return Pagination(
        page_size=_positive_int_or(page_size, min(settings.default_page_size, MAX_PAGE_SIZE), MAX_PAGE_SIZE),
        page_number=_positive_int_or(page_number, 1, MAX_PAGE_NUMBER),
    )


@router.get("/all", response_model=ReportListResponse)
async def get_all_reports(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    pagination: Annotated[Pagination, Depends(get_pagination)],
):
    history = await report_service.get_all_reports(current_user, pagination)
    return ReportListResponse(
        message="Reports history fetched successfully",
        **dict(history),
    )


@router.get("/setting", response_model=ReportSettingResponse)
async def get_report_setting(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    setting = await report_service.get_report_setting(current_user)
    return ReportSettingResponse(
        message="Report setting fetched successfully",
        report_setting=ReportSettingPublic.model_validate(setting),
    )


@router.put("/update-setting", response_model=MessageResponse)
async def update_report_setting(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    settings_in: ReportSettingUpdate,
):
    await report_service.update_report_setting(current_user, settings_in)
    return MessageResponse(message="Reports setting updated successfully")


@router.get("/generate", response_model=GenerateReportResponse)
async def generate_report(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    settings: Annotated[Settings, Depends(get_settings)],
    from_: Optional[str] = Query(None, alias="from", description="Range start (ISO-8601), default: `to` minus 30 days"),
    to: Optional[str] = Query(None, description="Range end (ISO-8601), default: now"),
):
    # Raw strings on purpose: unparsable dates fall back to defaults instead of a 422.
    report_range = resolve_report_range(from_, to, lookback_days=settings.report_lookback_days)
    logger.debug(f"Resolved report range {report_range} from from={from_!r} to={to!r}")
    result = await report_service.generate_report(
        current_user, report_range.from_date, report_range.to_date
    )
    return GenerateReportResponse(
        message="Report generated successfully",
        report=result.report,
        report_setting=result.report_setting,
    )
