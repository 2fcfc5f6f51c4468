"""
Request, response and pipeline models for the photostock service.

The pipeline stages produce and consume these Pydantic v2 models.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from photostock.models.result import Status


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class Entry(BaseModel):
    """An unsaved invoice parsed out of pasted text."""
    inv_number: str = Field(..., description="Invoice number with hyphens removed")
    total: str = Field(..., description="e.g. 'RM7660'")
    original_content: str = Field(..., description="Matched invoice block, trimmed")
    nas_location: str = ""
    image: Optional[str] = Field(default=None, description="Matched upload filename")
    error_message: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return not self.error_message


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class ResultResponse(BaseModel):
    inv_number: str
    total: str
    original_content: str
    nas_location: str
    image_path: str
    status: Status = Status.READY
    created_at: datetime


class ResultsPage(BaseModel):
    results: list[ResultResponse] = Field(default_factory=list)
    total_count: int = Field(..., description="Size of the filtered result set")


class StatusUpdateRequest(BaseModel):
    status: Status


# ---------------------------------------------------------------------------
# Entry API envelopes
# ---------------------------------------------------------------------------

class DuplicateCheckRequest(BaseModel):
    inv_numbers: list[str] = Field(default_factory=list)


class DuplicateCheckResponse(BaseModel):
    duplicates: list[str] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    entries: list[Entry] = Field(default_factory=list)
    valid_count: int = 0
    invalid_count: int = 0


class EntryError(BaseModel):
    inv_number: str
    message: str


class SaveResponse(BaseModel):
    message: str
    saved: int


class ImageSearchRequest(BaseModel):
    search: str = ""


class ImageSearchResponse(BaseModel):
    images: list[str] = Field(default_factory=list)
    count: int = 0
