"""ORM model for work experience entries on a profile."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from app.models.base import Base, new_id


class WorkExperience(Base):
    """Position held at a company; end_date is null for the current job."""

    __tablename__ = "work_experience"

    id = Column(String(36), primary_key=True, default=new_id)
    profile_id = Column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company = Column(String(255), nullable=False)
    position = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    website = Column(String(2048), nullable=True)
    description = Column(Text, nullable=True)
    logo_url = Column(String(2048), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)
