"""Database models."""

from spill_registry.models.report import Report, ReportStatus
from spill_registry.models.sequence import ReportSequence
from spill_registry.models.intervenant import Intervenant
from spill_registry.models.user import User, UserRole

__all__ = [
    "Report",
    "ReportStatus",
    "ReportSequence",
    "Intervenant",
    "User",
    "UserRole",
]
