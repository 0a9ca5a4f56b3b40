"""Cleaning endpoints.

Routes
------
POST /clean          Body: {"text": "..."}    → {"output": "..."}
POST /clean/report   Body: {"text": "..."}    → output plus counters
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from linkclean.cleaner import clean_text, clean_text_with_report

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class CleanRequest(BaseModel):
    text: str


class CleanResponse(BaseModel):
    output: str


class CleanReportResponse(BaseModel):
    output: str
    urls_found: int
    urls_modified: int
    params_removed: int


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=CleanResponse)
def clean_endpoint(body: CleanRequest) -> dict[str, Any]:
    """Return *text* with tracking parameters removed from every link."""
    return {"output": clean_text(body.text)}


@router.post("/report", response_model=CleanReportResponse)
def clean_report_endpoint(body: CleanRequest) -> dict[str, Any]:
    """Clean *text* and include how many links were found and changed."""
    return clean_text_with_report(body.text).to_dict()
