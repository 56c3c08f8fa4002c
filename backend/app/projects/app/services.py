from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping

from fastapi import Depends, Header
from sqlalchemy.engine import Engine

from app.deps import get_engine, get_redis
from app.projects.adapters.auth_sessions import AuthSessionStore, parse_bearer_token
from app.projects.adapters.gateways import ExternalLinkStore, ProjectStore
from app.projects.adapters.repos_sql import ExternalLinkRepoSQL, ProjectRepoSQL
from app.projects.domain.models import SubmissionReceipt, Variant
from app.projects.domain.schemas import ProjectInput, ProjectInputError, validate_project_input
from app.projects.services.submission import submit
from app.projects.services.trace_logger import get_submission_trace


@dataclass(eq=False)
class ProjectServiceError(Exception):
    status_code: int
    detail: Any


class ProjectSubmissionService:
    def __init__(self, projects: ProjectStore, links: ExternalLinkStore):
        self.projects = projects
        self.links = links

    def submit_personal(self, raw: Mapping[str, Any]) -> SubmissionReceipt:
        return self._submit(self._validate(Variant.PERSONAL, raw))

    def submit_external(self, raw: Mapping[str, Any]) -> SubmissionReceipt:
        return self._submit(self._validate(Variant.EXTERNAL, raw))

    @staticmethod
    def _validate(variant: Variant, raw: Mapping[str, Any]) -> ProjectInput:
        try:
            return validate_project_input(variant, raw)
        except ProjectInputError as exc:
            raise ProjectServiceError(
                status_code=422, detail={"field_errors": exc.field_errors}
            ) from exc

    def _submit(self, payload: ProjectInput) -> SubmissionReceipt:
        submission_id = uuid.uuid4().hex
        outcome = submit(
            payload,
            project_store=self.projects,
            link_store=self.links,
            submission_id=submission_id,
            trace=get_submission_trace(submission_id),
        )
        return SubmissionReceipt(submission_id=submission_id, outcome=outcome)


class ProjectQueryService:
    def __init__(self, projects: ProjectRepoSQL, links: ExternalLinkRepoSQL):
        self.projects = projects
        self.links = links

    def recent_projects(self, limit: int = 50) -> list[dict[str, Any]]:
        return self.projects.list_recent(limit=limit)

    def external_references(self, project_name: str) -> list[dict[str, Any]]:
        return [
            {"url": r.url, "project_name": r.project_name, "user_id": r.owner.user_id}
            for r in self.links.list_for_project(project_name)
        ]


def get_project_submission_service(
    engine: Engine = Depends(get_engine),
    authorization: str | None = Header(default=None),
) -> ProjectSubmissionService:
    sessions = AuthSessionStore(get_redis())
    links = ExternalLinkRepoSQL(engine, sessions, access_token=parse_bearer_token(authorization))
    return ProjectSubmissionService(ProjectRepoSQL(engine), links)


def get_project_query_service(engine: Engine = Depends(get_engine)) -> ProjectQueryService:
    return ProjectQueryService(ProjectRepoSQL(engine), ExternalLinkRepoSQL(engine, AuthSessionStore(None)))
