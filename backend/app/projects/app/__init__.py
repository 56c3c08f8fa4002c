from app.projects.app.services import (
    ProjectQueryService,
    ProjectServiceError,
    ProjectSubmissionService,
    get_project_query_service,
    get_project_submission_service,
)

__all__ = [
    "ProjectQueryService",
    "ProjectServiceError",
    "ProjectSubmissionService",
    "get_project_query_service",
    "get_project_submission_service",
]
