"""Report store: create, read, list and update spill reports."""

import logging
from datetime import timedelta
from typing import Callable, List, Optional, Union

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session

from spill_registry.config import settings
from spill_registry.core.errors import (
    ConcurrentAllocationConflict,
    ReportNotFound,
    ReportStoreError,
    StoreTimeout,
    StoreUnavailable,
)
from spill_registry.core.sequence import SequenceAllocator
from spill_registry.database import utcnow
from spill_registry.models.report import INITIAL_STATUS, Report
from spill_registry.schemas.report import ReportDraft, ReportUpdate

logger = logging.getLogger(__name__)

_TIMEOUT_MARKERS = ("timeout", "timed out", "canceling statement", "database is locked")


def translate_store_error(error: Exception) -> StoreUnavailable:
    """Map a database driver failure onto the store error taxonomy."""
    message = str(error)
    if isinstance(error, sa_exc.TimeoutError) or any(m in message.lower() for m in _TIMEOUT_MARKERS):
        return StoreTimeout(message)
    return StoreUnavailable(message)


class ReportStore:
    """Read/write access to reports for one database session."""

    def __init__(
        self,
        db: Session,
        allocator: Optional[SequenceAllocator] = None,
        max_attempts: Optional[int] = None,
        clock: Callable = utcnow,
    ):
        self.db = db
        self.allocator = allocator or SequenceAllocator()
        self.max_attempts = max_attempts or settings.sequence_max_attempts
        self.clock = clock

    def create(self, draft: ReportDraft) -> Report:
        """Persist a new report with the next sequential number and the initial status."""
        fields = draft.model_dump(mode="json")
        last_conflict = None

        for attempt in range(1, self.max_attempts + 1):
            now = self.clock()
            try:
                number = self.allocator.allocate(self.db, now.year)
                report = Report(
                    **fields,
                    env_sequential_number=number,
                    status=INITIAL_STATUS.value,
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(report)
                self.db.commit()
                self.db.refresh(report)
            except ConcurrentAllocationConflict as e:
                self.db.rollback()
                logger.warning(f"Sequence conflict on attempt {attempt}/{self.max_attempts}: {e}")
                last_conflict = e
                continue
            except sa_exc.IntegrityError as e:
                # Unique index on env_sequential_number caught a duplicate claim
                self.db.rollback()
                logger.warning(f"Duplicate sequential number on attempt {attempt}/{self.max_attempts}")
                last_conflict = ConcurrentAllocationConflict(str(e.orig))
                continue
            except sa_exc.SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Error creating report: {e}")
                raise translate_store_error(e) from e

            logger.info(f"Created report {report.id} as {report.env_sequential_number}")
            return report

        raise ConcurrentAllocationConflict(
            f"Could not allocate a sequential number after {self.max_attempts} attempts: {last_conflict}"
        )

    def get(self, report_id: int) -> Optional[Report]:
        """Get report by ID, or None if it does not exist."""
        try:
            return self.db.get(Report, report_id)
        except sa_exc.SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error fetching report {report_id}: {e}")
            raise translate_store_error(e) from e

    def list(self, limit: Optional[int] = None, offset: int = 0) -> List[Report]:
        """List reports, most recently created first. No limit returns every report."""
        try:
            query = (
                self.db.query(Report)
                .order_by(Report.created_at.desc(), Report.id.desc())
                .offset(offset)
            )
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except sa_exc.SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error fetching reports: {e}")
            raise translate_store_error(e) from e

    def update(self, report_id: int, changes: Union[ReportUpdate, dict]) -> Report:
        """Apply the fields present in changes and refresh updated_at.

        Raises ReportNotFound when no report has this ID.
        """
        if isinstance(changes, dict):
            changes = ReportUpdate.model_validate(changes)
        data = changes.changes()

        try:
            report = self.db.get(Report, report_id)
            if report is None:
                raise ReportNotFound(report_id)
            for key, value in data.items():
                setattr(report, key, value)

            now = self.clock()
            if report.updated_at is not None and now <= report.updated_at:
                now = report.updated_at + timedelta(microseconds=1)
            report.updated_at = now
            self.db.commit()
            self.db.refresh(report)
        except ReportStoreError:
            self.db.rollback()
            raise
        except sa_exc.SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating report {report_id}: {e}")
            raise translate_store_error(e) from e

        logger.info(f"Updated report {report_id}: {', '.join(sorted(data)) or 'no fields'}")
        return report
