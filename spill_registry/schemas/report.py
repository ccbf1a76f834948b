"""Report request/response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from spill_registry.models.report import ReportStatus


class AttachmentDocument(BaseModel):
    """A document attached to a report."""

    name: str
    url: str
    type: str
    date: str


class ReportFields(BaseModel):
    """Descriptive report fields, stored as given."""

    # General information
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    witnessed_by: Optional[str] = None
    supervisor: Optional[str] = None
    env_contacted_name: Optional[str] = None
    env_contacted_date: Optional[str] = None
    env_contacted_time: Optional[str] = None

    # Spill description
    contaminant: Optional[str] = None
    extent: Optional[str] = None
    surface_type: Optional[str] = None
    surface_type_other: Optional[str] = None
    equipment_type: Optional[str] = None
    container_quantity: Optional[str] = None
    duration: Optional[str] = None
    sensitive_env: List[str] = []
    sensitive_env_other: Optional[str] = None
    disposal_location: Optional[str] = None

    # Incident details
    description: Optional[str] = None
    actions_taken: Optional[str] = None
    emergency_kit_used: bool = False
    emergency_kit_refilled: bool = False
    cause: Optional[str] = None
    cause_other: Optional[str] = None
    contaminant_collected_by: Optional[str] = None
    follow_up_by: Optional[str] = None

    # Photos
    photos_taken_before: bool = False
    photos_taken_during: bool = False
    photos_taken_after: bool = False
    photo_urls: List[str] = []

    completed_by: Optional[str] = None
    completion_date: Optional[str] = None

    # MELCC
    env_urgence_env_contacted: Optional[bool] = None
    env_urgence_env_date: Optional[str] = None
    env_urgence_env_contacted_name: Optional[str] = None
    env_urgence_env_by: Optional[str] = None
    env_ministry_follow_up: Optional[str] = None
    env_ministry_email: Optional[str] = None

    # ECCC
    env_eccc_contacted: Optional[bool] = None
    env_eccc_date: Optional[str] = None
    env_eccc_contacted_name: Optional[str] = None
    env_eccc_by: Optional[str] = None
    env_eccc_follow_up: Optional[str] = None
    env_eccc_email: Optional[str] = None

    # RBQ
    env_rbq_contacted: Optional[bool] = None
    env_rbq_date: Optional[str] = None
    env_rbq_contacted_name: Optional[str] = None
    env_rbq_by: Optional[str] = None
    env_rbq_follow_up: Optional[str] = None
    env_rbq_email: Optional[str] = None

    documents: List[AttachmentDocument] = []


class ReportDraft(ReportFields):
    """Report create schema.

    Status, sequential number and timestamps are assigned by the store;
    values sent for them are dropped.
    """

    model_config = ConfigDict(extra="ignore")


class ReportUpdate(ReportFields):
    """Report partial update schema.

    Only fields explicitly set are applied. The sequential number and
    timestamps are not accepted at all.
    """

    model_config = ConfigDict(extra="forbid")

    status: Optional[ReportStatus] = None

    def changes(self) -> dict:
        """Fields explicitly provided by the caller."""
        data = self.model_dump(exclude_unset=True, mode="json")
        if data.get("status") is None:
            data.pop("status", None)
        return data


class ReportResponse(ReportFields):
    """Report response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    env_sequential_number: str
    status: str
    created_at: datetime
    updated_at: datetime
