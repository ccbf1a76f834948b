"""Statistics endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from spill_registry.api.auth import get_current_user
from spill_registry.core.report_store import ReportStore
from spill_registry.core.stats import compute_stats
from spill_registry.database import get_db

router = APIRouter()


@router.get("/")
def get_stats(
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    """Totals, status buckets, causes and monthly trend."""
    return compute_stats(ReportStore(db).list(), year)
