"""Intervenants directory."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from spill_registry.models.intervenant import Intervenant

logger = logging.getLogger(__name__)


DEFAULT_INTERVENANTS: List[Dict[str, str]] = [
    {
        "name": "Urgence Environnement (MELCC)",
        "role": "Organisme Gouvernemental",
        "contact": "1-866-694-5454",
        "organization": "MELCC",
    },
    {
        "name": "Urgence Environnement (ECCC)",
        "role": "Organisme Gouvernemental",
        "contact": "1-866-283-2333",
        "organization": "ECCC",
    },
    {
        "name": "Régie du Bâtiment du Québec (RBQ)",
        "role": "Organisme Gouvernemental",
        "contact": "1-800-267-1420",
        "organization": "RBQ",
    },
    {
        "name": "Coordonnateur Environnement",
        "role": "Interne",
        "contact": "555-0101",
        "organization": "Ville de Val-d'Or",
    },
    {
        "name": "Superviseur des Travaux Publics",
        "role": "Interne",
        "contact": "555-0102",
        "organization": "Ville de Val-d'Or",
    },
]


def search_intervenants(db: Session, term: Optional[str] = None) -> List[Intervenant]:
    """List intervenants, optionally filtered by name, role or organization."""
    query = db.query(Intervenant)
    if term:
        pattern = f"%{term.lower()}%"
        query = query.filter(
            or_(
                func.lower(Intervenant.name).like(pattern),
                func.lower(Intervenant.role).like(pattern),
                func.lower(Intervenant.organization).like(pattern),
            )
        )
    return query.order_by(Intervenant.name).all()


def add_intervenants(db: Session, entries: List[Dict]) -> int:
    """Insert entries whose name is not already in the directory. Returns how many were added."""
    added = 0
    for entry in entries:
        existing = db.query(Intervenant).filter(Intervenant.name == entry["name"]).first()
        if existing:
            logger.info(f"Intervenant {entry['name']} already exists, skipping")
            continue
        db.add(
            Intervenant(
                name=entry["name"],
                role=entry.get("role", ""),
                contact=entry.get("contact", ""),
                organization=entry.get("organization", ""),
                email=entry.get("email"),
            )
        )
        added += 1
    db.commit()
    return added
