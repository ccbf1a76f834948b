"""Report model - spill incident reports."""

import enum

from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime, JSON, Index

from spill_registry.database import Base, utcnow


class ReportStatus(str, enum.Enum):
    """Processing status of a report."""

    NOUVELLE_DEMANDE = "Nouvelle demande"
    PRIS_EN_CHARGE = "Pris en charge"
    EN_COURS = "En cours"
    TRAITE = "Traité"
    EN_ATTENTE_MINISTERE = "En attente de retour du ministère"
    INTERVENTION_REQUISE = "Intervention requise"
    COMPLETE = "Complété"
    ANNULE = "Annulé"


INITIAL_STATUS = ReportStatus.NOUVELLE_DEMANDE


class Report(Base):
    """Report model - one spill incident and its remediation."""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    env_sequential_number = Column(String(32), nullable=False, unique=True, index=True)
    status = Column(String(64), nullable=False, default=INITIAL_STATUS.value, index=True)

    # General information
    date = Column(String(32))
    time = Column(String(32))
    location = Column(String(512))
    witnessed_by = Column(String(255))
    supervisor = Column(String(255))
    env_contacted_name = Column(String(255))
    env_contacted_date = Column(String(32))
    env_contacted_time = Column(String(32))

    # Spill description
    contaminant = Column(String(255))
    extent = Column(Text)
    surface_type = Column(String(255))
    surface_type_other = Column(String(255))
    equipment_type = Column(String(255))
    container_quantity = Column(String(255))
    duration = Column(String(255))
    sensitive_env = Column(JSON, default=list)  # List of strings
    sensitive_env_other = Column(String(255))
    disposal_location = Column(String(512))

    # Incident details
    description = Column(Text)
    actions_taken = Column(Text)
    emergency_kit_used = Column(Boolean, default=False)
    emergency_kit_refilled = Column(Boolean, default=False)
    cause = Column(String(255))
    cause_other = Column(String(255))
    contaminant_collected_by = Column(String(255))
    follow_up_by = Column(String(255))

    # Photos
    photos_taken_before = Column(Boolean, default=False)
    photos_taken_during = Column(Boolean, default=False)
    photos_taken_after = Column(Boolean, default=False)
    photo_urls = Column(JSON, default=list)  # List of URLs

    completed_by = Column(String(255))
    completion_date = Column(String(32))

    # MELCC (Urgence-Environnement)
    env_urgence_env_contacted = Column(Boolean)
    env_urgence_env_date = Column(String(32))
    env_urgence_env_contacted_name = Column(String(255))
    env_urgence_env_by = Column(String(255))
    env_ministry_follow_up = Column(Text)
    env_ministry_email = Column(String(255))

    # ECCC
    env_eccc_contacted = Column(Boolean)
    env_eccc_date = Column(String(32))
    env_eccc_contacted_name = Column(String(255))
    env_eccc_by = Column(String(255))
    env_eccc_follow_up = Column(Text)
    env_eccc_email = Column(String(255))

    # RBQ
    env_rbq_contacted = Column(Boolean)
    env_rbq_date = Column(String(32))
    env_rbq_contacted_name = Column(String(255))
    env_rbq_by = Column(String(255))
    env_rbq_follow_up = Column(Text)
    env_rbq_email = Column(String(255))

    documents = Column(JSON, default=list)  # List of {name, url, type, date}

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_report_created_at_id", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, env_sequential_number='{self.env_sequential_number}', status='{self.status}')>"
