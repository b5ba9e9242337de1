"""
Project resource service.

Maps the list/read/create/update/delete operations onto the projects table,
applying id validation, defaults and required-field checks. Raises the error
kinds from portfolio.shared.errors; the HTTP layer turns them into responses.
"""
import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from portfolio.shared.errors import InvalidIdentifier, NotFound, ValidationError
from portfolio.projects.models import Project, utcnow
from portfolio.projects.schemas import ProjectCreate, ProjectUpdate, REQUIRED_FIELDS

logger = logging.getLogger(__name__)


def parse_project_id(project_id: str) -> str:
    """
    Validate an id from a path segment and return its canonical form.

    Raises:
        InvalidIdentifier: If the value is not a UUID
    """
    try:
        return str(UUID(project_id))
    except (ValueError, TypeError, AttributeError):
        logger.warning(f"Invalid project ID format: {project_id!r}")
        raise InvalidIdentifier()


def validate_required_fields(project: Project) -> None:
    """
    Check title, description and image on a model about to be written.

    The request schemas already reject empty values; this covers callers that
    hand the service unvalidated input (model_construct, scripts).
    """
    for field in REQUIRED_FIELDS:
        value = getattr(project, field)
        if value is None or not str(value).strip():
            raise ValidationError(f"{field}: must not be empty")


class ProjectService:
    def __init__(self, db: Session):
        self.db = db

    def _ordered(self, query):
        # id breaks createdAt ties so listings keep a stable relative order
        return query.order_by(Project.created_at.desc(), Project.id.desc())

    def list_projects(self) -> list[Project]:
        """All projects, newest first."""
        return self._ordered(self.db.query(Project)).all()

    def list_featured(self) -> list[Project]:
        """Featured projects, newest first."""
        return self._ordered(self.db.query(Project).filter(Project.featured == True)).all()

    def get(self, project_id: str) -> Project:
        logger.info(f"Fetching project with ID: {project_id}")
        canonical_id = parse_project_id(project_id)

        project = self.db.get(Project, canonical_id)
        if project is None:
            logger.warning(f"Project not found: {canonical_id}")
            raise NotFound()
        return project

    def create(self, data: ProjectCreate) -> Project:
        now = utcnow()
        project = Project(**data.model_dump(), created_at=now, updated_at=now)
        validate_required_fields(project)

        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        logger.info(f"Created project {project.id} ({project.title!r})")
        return project

    def update(self, project_id: str, data: ProjectUpdate) -> Project:
        """
        Merge the supplied fields onto an existing project.

        Fields the client did not send keep their stored values. updated_at
        always moves strictly forward, even when the clock has not.
        """
        logger.info(f"Updating project with ID: {project_id}")
        project = self.get(project_id)

        for key, value in data.changes().items():
            setattr(project, key, value)

        try:
            validate_required_fields(project)
        except ValidationError:
            self.db.rollback()
            raise

        now = utcnow()
        previous = project.updated_at
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        project.updated_at = now

        self.db.commit()
        self.db.refresh(project)
        return project

    def delete(self, project_id: str) -> None:
        logger.info(f"Deleting project with ID: {project_id}")
        project = self.get(project_id)

        self.db.delete(project)
        self.db.commit()
        logger.info(f"Deleted project {project_id}")
