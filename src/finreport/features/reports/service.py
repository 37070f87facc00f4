"""
Reports Service Module

Business logic behind the report endpoints and the scheduled monthly run:
paging through a user's report history, updating their report setting,
aggregating transactions into a report summary, and persisting the
generated reports.
"""

import datetime
import logging
import math
from collections import defaultdict
from typing import List, Optional

from fastapi import HTTPException, status
from tortoise.transactions import in_transaction

from ...common.clock import as_utc, utc_now
from ..auth.models import User as AuthUser
from ..transactions.models import Transaction, TransactionType
from .date_range import format_period_label, previous_month_range
from .models import Report, ReportSetting, ReportStatus
from .schemas import (
    CategorySpend, GeneratedReport, Pagination, ReportHistory,
    ReportPublic, ReportSettingPublic, ReportSettingUpdate, ReportSummary
)

logger = logging.getLogger(__name__)

TOP_CATEGORY_LIMIT = 5
HEALTHY_SAVINGS_RATE = 20.0


def calculate_next_report_date(
    last_sent_date: Optional[datetime.datetime] = None,
    now: Optional[datetime.datetime] = None,
) -> datetime.datetime:
    """Returns midnight UTC on the first day of the month after ``last_sent_date``.

    Without a previous report the month after ``now`` is used.
    """
    base = as_utc(last_sent_date) or as_utc(now) or utc_now()
    year, month = (base.year + 1, 1) if base.month == 12 else (base.year, base.month + 1)
    return datetime.datetime(year, month, 1, tzinfo=datetime.timezone.utc)


async def get_all_reports(current_user: AuthUser, pagination: Pagination) -> ReportHistory:
    """
    Returns one page of the user's report history, newest first.

    Args:
        current_user: The authenticated user whose reports are listed
        pagination: Page size and 1-based page number

    Returns:
        ReportHistory: The reports on the requested page plus the paging
        metadata (total_count, total_pages and the number of skipped rows).
        Asking for a page past the end yields an empty list, not an error.
    """
    skip = (pagination.page_number - 1) * pagination.page_size
    query = Report.filter(user_id=current_user.id)

    total_count = await query.count()
    reports = await query.order_by("-created_at", "-id").offset(skip).limit(pagination.page_size)

    return ReportHistory(
        reports=[ReportPublic.model_validate(report) for report in reports],
        page_size=pagination.page_size,
        page_number=pagination.page_number,
        total_count=total_count,
        total_pages=math.ceil(total_count / pagination.page_size),
        skip=skip,
    )


async def get_report_setting(current_user: AuthUser) -> ReportSetting:
    setting = await ReportSetting.get_or_none(user_id=current_user.id)
    if setting is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report setting not found")
    return setting


async def update_report_setting(
    current_user: AuthUser,
    settings_in: ReportSettingUpdate,
    now: Optional[datetime.datetime] = None,
) -> ReportSetting:
    """
    Applies a partial update to the user's report setting.

    Enabling keeps a still-pending ``next_report_date``; if none is pending one
    is computed from ``last_sent_date``. Disabling clears ``next_report_date``
    so the scheduled run skips the user.

    Raises:
        HTTPException: 404 if the user has no report setting.
    """
    setting = await get_report_setting(current_user)
    now = as_utc(now) or utc_now()

    updates = settings_in.model_dump(exclude_unset=True)
    is_enabled = updates.get("is_enabled")
    if is_enabled is None:
        is_enabled = setting.is_enabled

    if is_enabled:
        pending = as_utc(setting.next_report_date)
        if pending is None or pending <= now:
            pending = calculate_next_report_date(setting.last_sent_date, now=now)
        next_report_date = pending
    else:
        next_report_date = None

    setting.is_enabled = is_enabled
    setting.next_report_date = next_report_date
    await setting.save()
    logger.info(
        f"Report setting for {current_user.username} updated: enabled={is_enabled}, next={next_report_date}"
    )
    return setting


async def summarize_transactions(
    current_user: AuthUser,
    from_date: datetime.datetime,
    to_date: datetime.datetime,
) -> Optional[ReportSummary]:
    """
    Aggregates the user's transactions dated within ``[from_date, to_date]``.

    Returns:
        ReportSummary with total income, total expenses, balance, savings rate
        and the largest expense categories, or None if the range holds no
        transactions at all.

    Note:
        The savings rate is ``(income - expenses) / income * 100`` rounded to
        one decimal, and 0 when there is no income. Category percentages are
        shares of total expenses rounded to whole numbers.
    """
    rows = await Transaction.filter(
        user_id=current_user.id, date__gte=from_date, date__lte=to_date
    ).values("type", "amount", "category")
    if not rows:
        return None

    income = 0.0
    expenses = 0.0
    by_category = defaultdict(float)
    for row in rows:
        if row["type"] == TransactionType.INCOME:
            income += row["amount"]
        else:
            expenses += row["amount"]
            by_category[row["category"]] += row["amount"]

    savings_rate = round((income - expenses) / income * 100, 1) if income > 0 else 0.0
    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    top_categories = [
        CategorySpend(
            name=name,
            amount=round(amount, 2),
            percentage=round(amount / expenses * 100) if expenses > 0 else 0,
        )
        for name, amount in ranked[:TOP_CATEGORY_LIMIT]
    ]

    return ReportSummary(
        income=round(income, 2),
        expenses=round(expenses, 2),
        balance=round(income - expenses, 2),
        savings_rate=savings_rate,
        top_categories=top_categories,
    )


def build_insights(summary: ReportSummary) -> List[str]:
    insights = []
    if summary.income <= 0:
        if summary.expenses > 0:
            insights.append(
                f"You spent {summary.expenses:,.2f} with no recorded income in this period."
            )
    elif summary.balance < 0:
        insights.append(
            f"Your expenses exceeded your income by {abs(summary.balance):,.2f}."
        )
    elif summary.savings_rate >= HEALTHY_SAVINGS_RATE:
        insights.append(f"Great job! You saved {summary.savings_rate}% of your income.")
    else:
        insights.append(
            f"You saved {summary.savings_rate}% of your income. "
            f"Aim for {HEALTHY_SAVINGS_RATE:.0f}% or more."
        )

    if summary.top_categories:
        top = summary.top_categories[0]
        insights.append(
            f"{top.name} was your largest expense at {top.percentage}% of spending."
        )
    return insights


async def generate_report(
    current_user: AuthUser,
    from_date: datetime.datetime,
    to_date: datetime.datetime,
) -> GeneratedReport:
    """
    Generates and stores a report for the user over ``[from_date, to_date]``.

    The range is expected to be resolved already (ordered, UTC); see
    ``date_range.resolve_report_range``. A range without transactions is still
    recorded, with status NO_ACTIVITY and no summary.

    Returns:
        GeneratedReport: the stored report and the user's current report
        setting (None if the user has none).
    """
    period = format_period_label(from_date, to_date)
    summary = await summarize_transactions(current_user, from_date, to_date)

    if summary is None:
        report = await Report.create(
            user=current_user, period=period, from_date=from_date, to_date=to_date,
            sent_date=utc_now(), status=ReportStatus.NO_ACTIVITY, summary=None, insights=[],
        )
    else:
        report = await Report.create(
            user=current_user, period=period, from_date=from_date, to_date=to_date,
            sent_date=utc_now(), status=ReportStatus.GENERATED,
            summary=summary.model_dump(), insights=build_insights(summary),
        )
    logger.info(f"Generated report {report.public_id} ({period}) for {current_user.username}: {report.status.value}")

    setting = await ReportSetting.get_or_none(user_id=current_user.id)
    return GeneratedReport(
        report=ReportPublic.model_validate(report),
        report_setting=ReportSettingPublic.model_validate(setting) if setting else None,
    )


async def _record_failed_report(
    user: AuthUser, period: str, from_date: datetime.datetime, to_date: datetime.datetime
):
    try:
        await Report.create(
            user=user, period=period, from_date=from_date, to_date=to_date,
            status=ReportStatus.FAILED,
        )
    except Exception as e:
        logger.error(f"Could not record failed report for {user.username}: {e}", exc_info=True)


async def run_scheduled_reports(now: Optional[datetime.datetime] = None) -> int:
    """
    Generates the monthly report for every user whose report is due.

    A setting is due when it is enabled, belongs to an active user and its
    ``next_report_date`` is at or before ``now``. Each due user gets a report
    for the previous calendar month; afterwards ``last_sent_date`` is set to
    ``now`` and ``next_report_date`` moves to the start of the next month.

    Each user's report is written in its own transaction. A failure for one
    user rolls that work back, is logged and stored as a FAILED report; the
    rest of the batch still runs.

    Returns:
        int: The number of settings processed.
    """
    now = as_utc(now) or utc_now()
    from_date, to_date = previous_month_range(now)
    period = format_period_label(from_date, to_date)

    due_settings = await ReportSetting.filter(
        is_enabled=True, next_report_date__lte=now, user__is_active=True
    ).prefetch_related("user")
    logger.info(f"Scheduled run at {now.isoformat()}: {len(due_settings)} report(s) due")

    for setting in due_settings:
        try:
            async with in_transaction():
                await generate_report(setting.user, from_date, to_date)
        except Exception as e:
            logger.error(f"Scheduled report for {setting.user.username} failed: {e}", exc_info=True)
            await _record_failed_report(setting.user, period, from_date, to_date)
        setting.last_sent_date = now
        setting.next_report_date = calculate_next_report_date(now)
        await setting.save()

    return len(due_settings)
