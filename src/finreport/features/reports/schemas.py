"""Report API Schemas

Pydantic models for the report endpoints:

1. Pagination of the report history
2. Report summaries (totals, savings rate, top expense categories)
3. Report settings (read and partial update)
4. The response envelopes, each carrying a human readable ``message``

Field names are snake_case in Python and camelCase on the wire."""
from pydantic import ConfigDict, Field, StrictBool
from typing import List, Optional
import datetime

from ...common.schemas import CamelModel
from .models import ReportFrequency, ReportStatus


MAX_PAGE_SIZE = 100
# Keeps the row offset well inside a 64-bit integer
MAX_PAGE_NUMBER = 1_000_000


class Pagination(CamelModel):
    page_size: int = Field(20, ge=1, le=MAX_PAGE_SIZE)
    page_number: int = Field(1, ge=1, le=MAX_PAGE_NUMBER)


class CategorySpend(CamelModel):
    name: str
    amount: float
    percentage: int = Field(..., description="Share of total expenses, rounded")


class ReportSummary(CamelModel):
    income: float
    expenses: float
    balance: float
    savings_rate: float = Field(..., description="Percentage of income kept, 1 decimal")
    top_categories: List[CategorySpend]


class ReportPublic(CamelModel):
    public_id: str
    period: str
    from_date: datetime.datetime
    to_date: datetime.datetime
    sent_date: Optional[datetime.datetime] = None
    status: ReportStatus
    summary: Optional[ReportSummary] = None
    insights: Optional[List[str]] = None
    created_at: datetime.datetime


class ReportSettingPublic(CamelModel):
    frequency: ReportFrequency
    is_enabled: bool
    next_report_date: Optional[datetime.datetime] = None
    last_sent_date: Optional[datetime.datetime] = None


class ReportSettingUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    is_enabled: Optional[StrictBool] = Field(None, description="Turn scheduled monthly reports on or off")


class ReportHistory(Pagination):
    reports: List[ReportPublic]
    total_count: int
    total_pages: int
    skip: int


class GeneratedReport(CamelModel):
    report: ReportPublic
    report_setting: Optional[ReportSettingPublic] = None


# Response envelopes
class ReportListResponse(ReportHistory):
    message: str


class GenerateReportResponse(GeneratedReport):
    message: str


class ReportSettingResponse(CamelModel):
    message: str
    report_setting: ReportSettingPublic
