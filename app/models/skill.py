"""ORM model for skills/technologies shared by profiles and projects."""

from sqlalchemy import Column, String

from app.models.base import Base, new_id


class Skill(Base):
    """Named skill; names are unique so projects can link technologies by name."""

    __tablename__ = "skills"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, unique=True, index=True)
    category = Column(String(64), nullable=True)
