"""
Entry intake API endpoints.

POST /api/entries/check-duplicates  which invoice numbers are already saved
POST /api/entries/analyze           pasted text + photos → validated entries
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from photostock.database import get_db
from photostock.models.result import find_existing_inv_numbers
from photostock.pipeline import analyze_entries
from photostock.pipeline.parser import parse_entries
from photostock.schemas import (
    AnalyzeResponse,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# ── POST /api/entries/check-duplicates ──────────────────────────────────
@router.post("/entries/check-duplicates", response_model=DuplicateCheckResponse)
def check_duplicates(req: DuplicateCheckRequest, db: Session = Depends(get_db)):
    if not req.inv_numbers:
        raise HTTPException(status_code=400, detail="No inv_numbers provided.")

    existing = find_existing_inv_numbers(db, req.inv_numbers)
    logger.info("Duplicate check: %d of %d already saved", len(existing), len(req.inv_numbers))
    return DuplicateCheckResponse(duplicates=sorted(existing))


# ── POST /api/entries/analyze ───────────────────────────────────────────
@router.post("/entries/analyze", response_model=AnalyzeResponse)
def analyze(
    text: str = Form(...),
    nas_location: str = Form(""),
    images: Optional[List[UploadFile]] = File(default=None),
    db: Session = Depends(get_db),
):
    if not text.strip():
        raise HTTPException(status_code=400, detail="text must not be empty")

    uploads = [u for u in (images or []) if u and u.filename]
    logger.info("Analyze: len=%d  images=%d", len(text), len(uploads))

    inv_numbers = [e.inv_number for e in parse_entries(text, nas_location)]
    existing = find_existing_inv_numbers(db, inv_numbers)
    entries = analyze_entries(text, nas_location, uploads, existing)

    valid = sum(1 for e in entries if e.is_valid)
    return AnalyzeResponse(
        entries=entries,
        valid_count=valid,
        invalid_count=len(entries) - valid,
    )
