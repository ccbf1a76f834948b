"""Intervenants directory endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from spill_registry.api.auth import get_current_user, require_admin
from spill_registry.core.directory import add_intervenants, search_intervenants
from spill_registry.database import get_db
from spill_registry.models.intervenant import Intervenant

router = APIRouter()


class IntervenantCreate(BaseModel):
    """Intervenant create schema."""

    name: str
    role: str
    contact: str
    organization: str
    email: Optional[str] = None


class IntervenantResponse(IntervenantCreate):
    """Intervenant response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int


@router.get("/", response_model=List[IntervenantResponse])
def list_intervenants(
    q: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    """List intervenants, filtered by name, role or organization."""
    return search_intervenants(db, q)


@router.post("/", response_model=IntervenantResponse, status_code=201)
def create_intervenant(
    intervenant_data: IntervenantCreate,
    db: Session = Depends(get_db),
    current_user = Depends(require_admin),
):
    """Add an intervenant."""
    if not add_intervenants(db, [intervenant_data.model_dump()]):
        raise HTTPException(status_code=400, detail="Intervenant already exists")
    return db.query(Intervenant).filter(Intervenant.name == intervenant_data.name).first()
