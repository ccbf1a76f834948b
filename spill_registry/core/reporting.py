"""PDF export of a single spill report."""

import logging
from datetime import datetime

from jinja2 import Template

from spill_registry.config import settings
from spill_registry.models.report import Report

logger = logging.getLogger(__name__)


REPORT_TEMPLATE = """
<!DOCTYPE html>
<html lang="fr">
<head>
    <meta charset="UTF-8">
    <title>Rapport de déversement {{ report.env_sequential_number }}</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; font-size: 11pt; }
        h1 { color: #333; }
        h2 { color: #666; border-bottom: 2px solid #ddd; padding-bottom: 5px; }
        table { width: 100%; border-collapse: collapse; }
        td { padding: 4px 6px; vertical-align: top; border-bottom: 1px solid #eee; }
        td.label { width: 35%; color: #555; font-weight: bold; }
        .status { display: inline-block; padding: 3px 8px; border-radius: 3px; background: #e3f2fd; }
    </style>
</head>
<body>
    <h1>Rapport de déversement</h1>
    <p><strong>{{ organization_name }}</strong></p>
    <p><strong>Numéro :</strong> {{ report.env_sequential_number }} |
       <span class="status">{{ report.status }}</span></p>
    <p><strong>Généré le :</strong> {{ generated_at }}</p>

    {% for section in sections %}
    <h2>{{ section.title }}</h2>
    <table>
        {% for label, value in section.rows %}
        <tr><td class="label">{{ label }}</td><td>{{ value if value is not none else '' }}</td></tr>
        {% endfor %}
    </table>
    {% endfor %}

    {% if report.documents %}
    <h2>Documents</h2>
    <ul>
        {% for doc in report.documents %}
        <li><a href="{{ doc.url }}">{{ doc.name }}</a> ({{ doc.type }}, {{ doc.date }})</li>
        {% endfor %}
    </ul>
    {% endif %}

    {% if report.photo_urls %}
    <h2>Photos</h2>
    <ul>
        {% for url in report.photo_urls %}
        <li><a href="{{ url }}">{{ url }}</a></li>
        {% endfor %}
    </ul>
    {% endif %}
</body>
</html>
"""


def _yes_no(value) -> str:
    if value is None:
        return ""
    return "Oui" if value else "Non"


def _agency_rows(report: Report, key: str, follow_up: str, email: str):
    return [
        ("Contacté", _yes_no(getattr(report, f"env_{key}_contacted"))),
        ("Date", getattr(report, f"env_{key}_date")),
        ("Personne contactée", getattr(report, f"env_{key}_contacted_name")),
        ("Par", getattr(report, f"env_{key}_by")),
        ("Suivi", getattr(report, follow_up)),
        ("Courriel", getattr(report, email)),
    ]


def build_sections(report: Report):
    """Group report fields into titled sections of (label, value) rows."""
    return [
        {
            "title": "Informations générales",
            "rows": [
                ("Date", report.date),
                ("Heure", report.time),
                ("Lieu", report.location),
                ("Témoin", report.witnessed_by),
                ("Superviseur", report.supervisor),
                ("Environnement contacté", report.env_contacted_name),
                ("Date / heure du contact", f"{report.env_contacted_date or ''} {report.env_contacted_time or ''}".strip()),
            ],
        },
        {
            "title": "Description du déversement",
            "rows": [
                ("Contaminant", report.contaminant),
                ("Étendue", report.extent),
                ("Type de surface", report.surface_type_other or report.surface_type),
                ("Équipement", report.equipment_type),
                ("Quantité", report.container_quantity),
                ("Durée", report.duration),
                ("Milieux sensibles", ", ".join(report.sensitive_env or []) + (f" ({report.sensitive_env_other})" if report.sensitive_env_other else "")),
                ("Lieu de disposition", report.disposal_location),
            ],
        },
        {
            "title": "Détails de l'incident",
            "rows": [
                ("Description", report.description),
                ("Mesures prises", report.actions_taken),
                ("Trousse d'urgence utilisée", _yes_no(report.emergency_kit_used)),
                ("Trousse d'urgence remplie", _yes_no(report.emergency_kit_refilled)),
                ("Cause", report.cause_other or report.cause),
                ("Contaminant récupéré par", report.contaminant_collected_by),
                ("Suivi par", report.follow_up_by),
                ("Complété par", report.completed_by),
                ("Date de complétion", report.completion_date),
            ],
        },
        {"title": "MELCC - Urgence-Environnement", "rows": _agency_rows(report, "urgence_env", "env_ministry_follow_up", "env_ministry_email")},
        {"title": "ECCC", "rows": _agency_rows(report, "eccc", "env_eccc_follow_up", "env_eccc_email")},
        {"title": "RBQ", "rows": _agency_rows(report, "rbq", "env_rbq_follow_up", "env_rbq_email")},
    ]


def render_report_html(report: Report) -> str:
    """Render a report as an HTML page."""
    template = Template(REPORT_TEMPLATE, autoescape=True)
    return template.render(
        organization_name=settings.organization_name,
        report=report,
        sections=build_sections(report),
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )


def render_report_pdf(report: Report) -> bytes:
    """Render a report as a PDF document."""
    # WeasyPrint needs Pango at import time, so only load it when exporting
    from weasyprint import HTML

    html_content = render_report_html(report)
    pdf = HTML(string=html_content).write_pdf()
    logger.info(f"Rendered PDF for report {report.id} ({len(pdf)} bytes)")
    return pdf


def pdf_filename(report: Report) -> str:
    return f"rapport_{report.env_sequential_number}.pdf"
