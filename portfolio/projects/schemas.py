"""
Pydantic schemas for Projects API.

Defines request/response models with validation. JSON uses camelCase
(longDescription, demoLink, ...); snake_case names are accepted as well.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


REQUIRED_FIELDS = ("title", "description", "image")


def _require_text(value, field_name: str):
    # Type errors are left to the str field validation that follows
    if value is None:
        raise ValueError(f"{field_name} may not be null")
    if isinstance(value, str) and not value.strip():
        raise ValueError(f"{field_name} must not be empty")
    return value


class ProjectSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectCreate(ProjectSchema):
    """Schema for creating a new project."""
    title: str
    description: str
    long_description: Optional[str] = None
    image: str
    tags: list[str] = Field(default_factory=list)
    demo_link: Optional[str] = None
    code_link: Optional[str] = None
    featured: bool = False
    challenges: Optional[str] = None
    solutions: Optional[str] = None

    @field_validator(*REQUIRED_FIELDS, mode="before")
    @classmethod
    def required_not_empty(cls, value, info):
        return _require_text(value, info.field_name)

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_are_empty(cls, value):
        return [] if value is None else value


class ProjectUpdate(ProjectSchema):
    """
    Schema for updating a project. All fields optional.

    Only fields present in the request are applied (see model_fields_set).
    Required fields may be changed but not cleared.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    long_description: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[list[str]] = None
    demo_link: Optional[str] = None
    code_link: Optional[str] = None
    featured: Optional[bool] = None
    challenges: Optional[str] = None
    solutions: Optional[str] = None

    # Defaults are not validated, so these only run for fields the client sent
    @field_validator(*REQUIRED_FIELDS, mode="before")
    @classmethod
    def required_not_empty(cls, value, info):
        return _require_text(value, info.field_name)

    @field_validator("featured", mode="before")
    @classmethod
    def featured_not_null(cls, value):
        if value is None:
            raise ValueError("featured may not be null")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_are_empty(cls, value):
        return [] if value is None else value

    def changes(self) -> dict:
        """Fields explicitly supplied by the client, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class ProjectResponse(ProjectSchema):
    """Schema for project responses."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    title: str
    description: str
    long_description: Optional[str] = None
    image: str
    tags: list[str] = Field(default_factory=list)
    demo_link: Optional[str] = None
    code_link: Optional[str] = None
    featured: bool = False
    challenges: Optional[str] = None
    solutions: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_utc(self, value: datetime) -> str:
        # Stored naive in UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class MessageResponse(BaseModel):
    message: str
