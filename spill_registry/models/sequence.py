"""Report sequence counter model."""

from sqlalchemy import Column, Integer, String, DateTime

from spill_registry.database import Base, utcnow


class ReportSequence(Base):
    """Last sequence value handed out for a numbering scope ("global" or a year)."""

    __tablename__ = "report_sequences"

    scope = Column(String(16), primary_key=True)
    last_value = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<ReportSequence(scope='{self.scope}', last_value={self.last_value})>"
