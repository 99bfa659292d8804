from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class VisitorsTodayResponse(BaseModel):
    total_visitors_today: int
    total_rows: int


class VisitorsWeekResponse(BaseModel):
    total_visitors_week: int
    total_rows: int


class VisitorsMonthResponse(BaseModel):
    total_visitors_month: int
    total_rows: int


class SalespersonResponse(BaseModel):
    salesperson: str
    period: str
    customers: int


class ComparisonEntryModel(BaseModel):
    group: str
    count: int = Field(ge=1)


class CompareResponse(BaseModel):
    period: str
    results: List[ComparisonEntryModel] = Field(default_factory=list)


class FrequencyEntryModel(BaseModel):
    label: str
    count: int = Field(ge=1)


class RemarkModel(BaseModel):
    name: Optional[str] = None
    attended_by: Optional[str] = None
    remark: Optional[str] = None


class NameListModel(BaseModel):
    items: List[str] = Field(default_factory=list)
    total: int = 0
    truncated: bool = False


class RemarkListModel(BaseModel):
    items: List[RemarkModel] = Field(default_factory=list)
    total: int = 0
    truncated: bool = False


class AnalyticsReportModel(BaseModel):
    total_records: int
    limit: int
    top_sources: List[FrequencyEntryModel] = Field(default_factory=list)
    top_requirements: List[FrequencyEntryModel] = Field(default_factory=list)
    top_configurations: List[FrequencyEntryModel] = Field(default_factory=list)
    top_industries: List[FrequencyEntryModel] = Field(default_factory=list)
    income_distribution: List[FrequencyEntryModel] = Field(default_factory=list)
    all_names: NameListModel = Field(default_factory=NameListModel)
    remarks: RemarkListModel = Field(default_factory=RemarkListModel)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
