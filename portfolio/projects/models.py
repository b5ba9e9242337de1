"""
Projects database models.

Stores portfolio projects: text content, image and links, tags and the
featured flag used for homepage display.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB

from portfolio.shared.database import Base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_project_id() -> str:
    return str(uuid4())


class Project(Base):
    """
    Project model for portfolio projects.

    id is an opaque UUID string generated on insert. created_at is written
    once; updated_at is moved forward by every update.
    """
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_project_id)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    long_description = Column(Text)
    image = Column(Text, nullable=False)
    tags = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)  # ["React", "Python"]
    demo_link = Column(Text)
    code_link = Column(Text)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    challenges = Column(Text)
    solutions = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Project id={self.id!r} title={self.title!r}>"
