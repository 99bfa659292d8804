from __future__ import annotations

from dataclasses import asdict
import logging
import math
from functools import partial
from typing import Any, Callable, Dict, Optional

import numpy as np
import pandas as pd
from fastapi import Depends, FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from api.schemas import (
    AnalyticsReportModel,
    CompareResponse,
    SalespersonResponse,
    VisitorsMonthResponse,
    VisitorsTodayResponse,
    VisitorsWeekResponse,
)
from core.aggregate import compare_by, count_in_period, filter_by, in_period, matches_name
from core.config import SheetSettings, get_api_settings, get_sheet_settings
from core.data import RowSource, SheetsRowSource, load_records
from core.dates import ParsedDate, today_in
from core.filters import QueryError, normalize_period, normalize_salesperson_query
from core.report import build_report


EMPTY_TABLE_MESSAGE = "No data found in sheet."
ENDPOINTS = "/health, /visitors, /weekly, /monthly, /salesperson, /compare, /analysis"

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


api_settings = get_api_settings()
_configure_logging(api_settings.log_level)

app = FastAPI(title="Forestscape Entry Form API", version="0.1.0")

if api_settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(api_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


def get_row_source(settings: SheetSettings = Depends(get_sheet_settings)) -> RowSource:
    return SheetsRowSource(settings)


def get_clock(settings: SheetSettings = Depends(get_sheet_settings)) -> Callable[[], ParsedDate]:
    """Callable returning today in the reference timezone."""
    return partial(today_in, settings.timezone)


def _parse_opts(settings: SheetSettings) -> Dict[str, Any]:
    return {"legacy": settings.legacy_timestamps, "timezone": settings.timezone}


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
            },
        )
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _empty() -> JSONResponse:
    return _json({"message": EMPTY_TABLE_MESSAGE})


@app.get("/visitors")
def visitors(
    source: RowSource = Depends(get_row_source),
    clock: Callable[[], ParsedDate] = Depends(get_clock),
    settings: SheetSettings = Depends(get_sheet_settings),
):
    try:
        frame = load_records(source)
        if frame.empty:
            return _empty()
        reference = clock()
        total = count_in_period(frame, "today", reference, settings.timestamp_column, **_parse_opts(settings))
        return _json(VisitorsTodayResponse(total_visitors_today=total, total_rows=len(frame)))
    except Exception:
        logger.exception("visitors failed")
        return _error(500, "Failed to fetch visitor data")


@app.get("/weekly")
def weekly(
    source: RowSource = Depends(get_row_source),
    clock: Callable[[], ParsedDate] = Depends(get_clock),
    settings: SheetSettings = Depends(get_sheet_settings),
):
    try:
        frame = load_records(source)
        if frame.empty:
            return _empty()
        reference = clock()
        total = count_in_period(frame, "this_week", reference, settings.timestamp_column, **_parse_opts(settings))
        return _json(VisitorsWeekResponse(total_visitors_week=total, total_rows=len(frame)))
    except Exception:
        logger.exception("weekly failed")
        return _error(500, "Failed to fetch weekly visitor data")


@app.get("/monthly")
def monthly(
    source: RowSource = Depends(get_row_source),
    clock: Callable[[], ParsedDate] = Depends(get_clock),
    settings: SheetSettings = Depends(get_sheet_settings),
):
    try:
        frame = load_records(source)
        if frame.empty:
            return _empty()
        reference = clock()
        total = count_in_period(frame, "this_month", reference, settings.timestamp_column, **_parse_opts(settings))
        return _json(VisitorsMonthResponse(total_visitors_month=total, total_rows=len(frame)))
    except Exception:
        logger.exception("monthly failed")
        return _error(500, "Failed to fetch monthly visitor data")


@app.get("/salesperson")
def salesperson(
    name: Optional[str] = Query(default=None),
    period: Optional[str] = Query(default=None),
    source: RowSource = Depends(get_row_source),
    clock: Callable[[], ParsedDate] = Depends(get_clock),
    settings: SheetSettings = Depends(get_sheet_settings),
):
    try:
        query = normalize_salesperson_query(name, period)
    except QueryError as exc:
        return _error(400, str(exc))
    try:
        frame = load_records(source)
        if frame.empty:
            return _empty()
        reference = clock()
        matching = filter_by(
            frame,
            in_period(query.period, reference, settings.timestamp_column, **_parse_opts(settings)),
            matches_name(query.name, settings.salesperson_column),
        )
        return _json(SalespersonResponse(salesperson=query.name, period=query.period, customers=len(matching)))
    except Exception:
        logger.exception("salesperson failed")
        return _error(500, "Failed to fetch salesperson data")


@app.get("/compare")
def compare(
    period: Optional[str] = Query(default=None),
    source: RowSource = Depends(get_row_source),
    clock: Callable[[], ParsedDate] = Depends(get_clock),
    settings: SheetSettings = Depends(get_sheet_settings),
):
    try:
        bucket = normalize_period(period)
    except QueryError as exc:
        return _error(400, str(exc))
    try:
        frame = load_records(source)
        if frame.empty:
            return _empty()
        reference = clock()
        results = compare_by(
            frame,
            bucket,
            reference,
            settings.salesperson_column,
            timestamp_column=settings.timestamp_column,
            **_parse_opts(settings),
        )
        return _json(CompareResponse(period=bucket, results=[asdict(r) for r in results]))
    except Exception:
        logger.exception("compare failed")
        return _error(500, "Failed to compare salesperson data")


@app.get("/analysis")
def analysis(
    limit: Optional[str] = Query(default=None),
    source: RowSource = Depends(get_row_source),
    settings: SheetSettings = Depends(get_sheet_settings),
):
    try:
        frame = load_records(source)
        if frame.empty:
            return _empty()
        report = build_report(frame, limit, attended_by_column=settings.salesperson_column)
        return _json(AnalyticsReportModel(**asdict(report)))
    except Exception:
        logger.exception("analysis failed")
        return _error(500, "Failed to analyze data")


@app.get("/health", response_class=PlainTextResponse)
def health() -> str:
    return f"Forestscape API is healthy. Endpoints: {ENDPOINTS}"


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return f"Forestscape API is live! Endpoints: {ENDPOINTS}"
