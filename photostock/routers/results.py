"""
Saved invoice API endpoints.

GET    /api/results                      list, search and paginate
POST   /api/results                      save a validated batch with photos
POST   /api/results/{inv_number}/status  change workflow status
PUT    /api/results/{inv_number}/image   replace the stored photo
DELETE /api/results/{inv_number}         delete a result and its photo
POST   /api/images                       photo paths for a search
"""
from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from photostock.config import settings
from photostock.database import get_db
from photostock.models.result import ResultModel, find_existing_inv_numbers
from photostock.pipeline import search_results
from photostock.pipeline.matcher import match_image
from photostock.pipeline.validator import validate_entry
from photostock.schemas import (
    Entry,
    EntryError,
    ImageSearchRequest,
    ImageSearchResponse,
    ResultResponse,
    ResultsPage,
    SaveResponse,
    StatusUpdateRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter()

IMAGE_SEARCH_PAGE_SIZE = 10


def transform_result(model: ResultModel) -> ResultResponse:
    """Convert a ResultModel row to a ResultResponse."""
    return ResultResponse(
        inv_number=model.inv_number,
        total=model.total,
        original_content=model.original_content,
        nas_location=model.nas_location or "",
        image_path=model.image_path,
        status=model.status,
        created_at=model.created_at,
    )


def _stored_file(image_path: str) -> Path:
    return Path(settings.UPLOAD_DIR) / Path(image_path).name


def _image_url(filename: str) -> str:
    return f"{settings.UPLOAD_URL_PREFIX}/{filename}"


def _save_upload(upload: UploadFile, destination: Path) -> None:
    """Write an UploadFile to disk."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    upload.file.seek(0)
    with destination.open("wb") as out_file:
        shutil.copyfileobj(upload.file, out_file)


def _remove_files(paths: List[Path]) -> None:
    for path in paths:
        path.unlink(missing_ok=True)


def _get_or_404(db: Session, inv_number: str) -> ResultModel:
    row = db.query(ResultModel).filter(ResultModel.inv_number == inv_number).first()
    if not row:
        logger.warning("Result not found: %s", inv_number)
        raise HTTPException(status_code=404, detail="Result not found")
    return row


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error while %s", action)
        raise HTTPException(status_code=500, detail=f"Error {action}") from exc


# ── GET /api/results ────────────────────────────────────────────────────
@router.get("/results", response_model=ResultsPage)
def list_results(
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    search: str = "",
    db: Session = Depends(get_db),
):
    rows = db.query(ResultModel).all()
    page_rows, filtered_count = search_results(
        rows, search, page, per_page or settings.DEFAULT_PAGE_SIZE
    )
    return ResultsPage(
        results=[transform_result(r) for r in page_rows],
        total_count=filtered_count,
    )


# ── POST /api/results ───────────────────────────────────────────────────
@router.post("/results", response_model=SaveResponse)
def save_results(
    inv_number: List[str] = Form(default=[]),
    total: List[str] = Form(default=[]),
    original_content: List[str] = Form(default=[]),
    nas_location: List[str] = Form(default=[]),
    image: Optional[List[UploadFile]] = File(default=None),
    db: Session = Depends(get_db),
):
    count = len(inv_number)
    if count == 0:
        raise HTTPException(status_code=400, detail="No entries provided.")
    if not (len(total) == len(original_content) == len(nas_location) == count):
        raise HTTPException(
            status_code=400,
            detail="Invalid data format, expecting arrays of the same length",
        )

    uploads = [u for u in (image or []) if u and u.filename]
    entries: list[tuple[Entry, Optional[UploadFile]]] = []
    for i in range(count):
        upload = match_image(inv_number[i], uploads)
        entries.append((
            Entry(
                inv_number=inv_number[i],
                total=total[i],
                original_content=original_content[i],
                nas_location=nas_location[i],
                image=upload.filename if upload else None,
            ),
            upload,
        ))

    existing = find_existing_inv_numbers(db, inv_number)
    errors: list[EntryError] = []
    for entry, _ in entries:
        message = validate_entry(entry, existing)
        if message:
            errors.append(EntryError(inv_number=entry.inv_number, message=message))
    if errors:
        logger.info("Save rejected: %d of %d entries invalid", len(errors), count)
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Entries were unable to save due to errors.",
                "errors": [e.model_dump() for e in errors],
            },
        )

    written: list[Path] = []
    try:
        for entry, upload in entries:
            filename = f"{int(time.time() * 1000)}_{Path(upload.filename).name}"
            destination = Path(settings.UPLOAD_DIR) / filename
            _save_upload(upload, destination)
            written.append(destination)
            db.add(
                ResultModel(
                    inv_number=entry.inv_number,
                    total=entry.total,
                    original_content=entry.original_content,
                    nas_location=entry.nas_location,
                    image_path=_image_url(filename),
                )
            )
        db.commit()
    except OSError as exc:
        db.rollback()
        _remove_files(written)
        logger.exception("Error saving image")
        raise HTTPException(status_code=500, detail="Error saving image") from exc
    except IntegrityError as exc:
        db.rollback()
        _remove_files(written)
        logger.warning("Save conflict: %s", exc.orig)
        raise HTTPException(status_code=409, detail="One or more INV# already saved") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        _remove_files(written)
        logger.exception("Error saving results")
        raise HTTPException(status_code=500, detail="Error saving results") from exc

    logger.info("Saved %d results", count)
    return SaveResponse(message="Results saved successfully!", saved=count)


# ── POST /api/results/{inv_number}/status ───────────────────────────────
@router.post("/results/{inv_number}/status", response_model=ResultResponse)
def update_status(
    inv_number: str,
    req: StatusUpdateRequest,
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, inv_number)
    row.status = req.status
    _commit(db, "updating status")
    logger.info("Status of %s set to %s", inv_number, req.status.value)
    return transform_result(row)


# ── PUT /api/results/{inv_number}/image ─────────────────────────────────
@router.put("/results/{inv_number}/image", response_model=ResultResponse)
def replace_image(
    inv_number: str,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    row = _get_or_404(db, inv_number)
    filename = Path(image.filename or "").name
    if not filename:
        raise HTTPException(status_code=400, detail="Image filename is required")

    old_file = _stored_file(row.image_path) if row.image_path else None
    destination = Path(settings.UPLOAD_DIR) / filename
    try:
        _save_upload(image, destination)
    except OSError as exc:
        logger.exception("Error overwriting image for %s", inv_number)
        raise HTTPException(status_code=500, detail="Error overwriting image") from exc

    row.image_path = _image_url(filename)
    _commit(db, "updating image path")
    if old_file is not None and old_file != destination:
        old_file.unlink(missing_ok=True)

    logger.info("Replaced image for %s with %s", inv_number, filename)
    return transform_result(row)


# ── DELETE /api/results/{inv_number} ────────────────────────────────────
@router.delete("/results/{inv_number}")
def delete_result(inv_number: str, db: Session = Depends(get_db)):
    row = _get_or_404(db, inv_number)
    stored = _stored_file(row.image_path) if row.image_path else None

    db.delete(row)
    _commit(db, "deleting result")

    if stored is not None:
        if stored.exists():
            stored.unlink()
            logger.info("Image file deleted: %s", stored)
        else:
            logger.info("Image file not found: %s", stored)
    logger.info("Deleted result %s", inv_number)
    return {"message": "Result and image deleted successfully!", "inv_number": inv_number}


# ── POST /api/images ────────────────────────────────────────────────────
@router.post("/images", response_model=ImageSearchResponse)
def search_images(req: ImageSearchRequest, db: Session = Depends(get_db)):
    rows = db.query(ResultModel).all()
    page_rows, _ = search_results(rows, req.search, 1, IMAGE_SEARCH_PAGE_SIZE)
    images = [r.image_path for r in page_rows if r.image_path]
    return ImageSearchResponse(images=images, count=len(images))
