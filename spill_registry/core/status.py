"""Status buckets used by the dashboard."""

from typing import Optional

from spill_registry.models.report import ReportStatus

ACTIVE = "active"
CLOSED = "closed"

ACTIVE_STATUSES = frozenset({
    ReportStatus.NOUVELLE_DEMANDE,
    ReportStatus.PRIS_EN_CHARGE,
    ReportStatus.EN_COURS,
    ReportStatus.EN_ATTENTE_MINISTERE,
    ReportStatus.INTERVENTION_REQUISE,
})

CLOSED_STATUSES = frozenset({
    ReportStatus.TRAITE,
    ReportStatus.COMPLETE,
    ReportStatus.ANNULE,
})


def status_bucket(status: str) -> Optional[str]:
    """Return "active" or "closed", or None for a value outside the enumeration."""
    try:
        status = ReportStatus(status)
    except ValueError:
        return None
    return ACTIVE if status in ACTIVE_STATUSES else CLOSED
