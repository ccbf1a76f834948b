"""Intervenant model - contacts directory."""

from sqlalchemy import Column, Integer, String, DateTime

from spill_registry.database import Base, utcnow


class Intervenant(Base):
    """Intervenant model - a contact to reach during a spill response."""

    __tablename__ = "intervenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(255), nullable=False)
    contact = Column(String(100), nullable=False)
    organization = Column(String(255), nullable=False)
    email = Column(String(255))
    created_at = Column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<Intervenant(id={self.id}, name='{self.name}')>"
