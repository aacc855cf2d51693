"""ORM model for education entries on a profile."""

from sqlalchemy import Column, DateTime, ForeignKey, String

from app.models.base import Base, new_id


class Education(Base):
    """School or degree; end_date is null while ongoing."""

    __tablename__ = "education"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    logo_url = Column(String(2048), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
