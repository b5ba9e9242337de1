"""
Projects API

CRUD endpoints for portfolio projects.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portfolio.shared.database import get_db
from portfolio.projects.service import ProjectService
from portfolio.projects.schemas import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    MessageResponse,
)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.get("", response_model=list[ProjectResponse])
def list_projects(service: ProjectService = Depends(get_project_service)):
    """List all projects, newest first."""
    return service.list_projects()


# Registered before /{project_id} so "featured" is not taken for an id
@router.get("/featured", response_model=list[ProjectResponse])
def list_featured_projects(service: ProjectService = Depends(get_project_service)):
    """List featured projects (for homepage display)."""
    return service.list_featured()


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    """Get a single project by id."""
    return service.get(project_id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Create a new project."""
    return service.create(project_data)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    project_data: Optional[ProjectUpdate] = None,
    service: ProjectService = Depends(get_project_service),
):
    """
    Update an existing project. Only provided fields are changed.

    A request without a body only refreshes updatedAt.
    """
    if project_data is None:
        project_data = ProjectUpdate()
    return service.update(project_id, project_data)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(project_id: str, service: ProjectService = Depends(get_project_service)):
    """Delete a project permanently."""
    service.delete(project_id)
    return MessageResponse(message="Project deleted successfully")
