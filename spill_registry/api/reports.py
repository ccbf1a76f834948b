"""Report endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from sqlalchemy.orm import Session

from spill_registry.api.auth import get_current_user
from spill_registry.core.attachments import LocalObjectStore, ObjectStore, upload_document, upload_photo
from spill_registry.core.report_store import ReportStore
from spill_registry.core.reporting import pdf_filename, render_report_pdf
from spill_registry.core.stats import search_reports
from spill_registry.database import get_db
from spill_registry.schemas.report import AttachmentDocument, ReportDraft, ReportResponse, ReportUpdate

router = APIRouter()


def get_report_store(db: Session = Depends(get_db)) -> ReportStore:
    return ReportStore(db)


def get_object_store() -> ObjectStore:
    return LocalObjectStore()


def _get_or_404(store: ReportStore, report_id: int):
    report = store.get(report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.post("/", response_model=ReportResponse, status_code=201)
def create_report(
    draft: ReportDraft,
    store: ReportStore = Depends(get_report_store),
    current_user = Depends(get_current_user),
):
    """Create a report. Number and status are assigned by the server."""
    return store.create(draft)


@router.get("/", response_model=List[ReportResponse])
def list_reports(
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    q: Optional[str] = Query(None, description="Search location, contaminant or date"),
    store: ReportStore = Depends(get_report_store),
    current_user = Depends(get_current_user),
):
    """List reports, most recent first. The search runs before pagination."""
    if not q:
        return store.list(limit=limit, offset=offset)
    matches = search_reports(store.list(), q)
    end = offset + limit if limit is not None else None
    return matches[offset:end]


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(
    report_id: int,
    store: ReportStore = Depends(get_report_store),
    current_user = Depends(get_current_user),
):
    """Get report by ID."""
    return _get_or_404(store, report_id)


@router.patch("/{report_id}", response_model=ReportResponse)
def update_report(
    report_id: int,
    changes: ReportUpdate,
    store: ReportStore = Depends(get_report_store),
    current_user = Depends(get_current_user),
):
    """Update the given fields of a report."""
    return store.update(report_id, changes)


@router.post("/{report_id}/photos")
def upload_report_photo(
    report_id: int,
    file: UploadFile = File(...),
    object_store: ObjectStore = Depends(get_object_store),
    current_user = Depends(get_current_user),
):
    """Upload a photo and return its URL. The caller adds it to photo_urls."""
    data = file.file.read()
    url = upload_photo(object_store, file.filename, data, report_id, file.content_type)
    return {"url": url}


@router.post("/{report_id}/documents", response_model=AttachmentDocument)
def upload_report_document(
    report_id: int,
    file: UploadFile = File(...),
    object_store: ObjectStore = Depends(get_object_store),
    current_user = Depends(get_current_user),
):
    """Upload a document and return its record. The caller adds it to documents."""
    data = file.file.read()
    return upload_document(object_store, file.filename, data, file.content_type, report_id)


@router.get("/{report_id}/pdf")
def get_report_pdf(
    report_id: int,
    store: ReportStore = Depends(get_report_store),
    current_user = Depends(get_current_user),
):
    """Export report as PDF."""
    report = _get_or_404(store, report_id)
    return Response(
        content=render_report_pdf(report),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(report)}"'},
    )
