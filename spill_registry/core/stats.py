"""Dashboard search and statistics over the report list."""

from collections import Counter
from datetime import date
from typing import Dict, Iterable, List, Optional

from spill_registry.core.status import ACTIVE, CLOSED, status_bucket
from spill_registry.models.report import Report, ReportStatus

UNSPECIFIED_CAUSE = "Non spécifié"


def search_reports(reports: Iterable[Report], term: Optional[str]) -> List[Report]:
    """Filter reports by location, contaminant or date."""
    reports = list(reports)
    if not term:
        return reports
    needle = term.lower()
    return [
        r
        for r in reports
        if needle in (r.location or "").lower()
        or needle in (r.contaminant or "").lower()
        or term in (r.date or "")
    ]


def _report_date(report: Report) -> Optional[date]:
    try:
        return date.fromisoformat((report.date or "")[:10])
    except ValueError:
        return None


def compute_stats(reports: Iterable[Report], year: Optional[int] = None) -> Dict:
    """Aggregate counts for the statistics page.

    by_month holds twelve counts for reports whose incident date falls in year
    (current year by default). Statuses outside the enumeration only count
    toward total.
    """
    reports = list(reports)
    year = year or date.today().year

    by_status = {s.value: 0 for s in ReportStatus}
    buckets = Counter()
    causes = Counter()
    by_month = [0] * 12

    for report in reports:
        bucket = status_bucket(report.status)
        if bucket is not None:
            buckets[bucket] += 1
            by_status[ReportStatus(report.status).value] += 1
        causes[report.cause or UNSPECIFIED_CAUSE] += 1
        incident_date = _report_date(report)
        if incident_date and incident_date.year == year:
            by_month[incident_date.month - 1] += 1

    return {
        "total": len(reports),
        "active": buckets[ACTIVE],
        "closed": buckets[CLOSED],
        "by_status": by_status,
        "by_cause": [{"cause": c, "count": n} for c, n in causes.most_common()],
        "year": year,
        "by_month": by_month,
    }
