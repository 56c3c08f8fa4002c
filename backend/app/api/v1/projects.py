from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from app.projects.app.services import (
    ProjectQueryService,
    ProjectServiceError,
    ProjectSubmissionService,
    get_project_query_service,
    get_project_submission_service,
)
from app.projects.domain.models import (
    Created,
    Failed,
    OutcomeStatus,
    PartiallyCreated,
    SubmissionOutcome,
    SubmissionReceipt,
    Unauthorized,
    Variant,
)

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectOut(BaseModel):
    id: str
    name: str
    description: str | None = None


class ExternalReferenceOut(BaseModel):
    url: str
    project_name: str
    user_id: str


class SubmissionResp(BaseModel):
    submission_id: str
    status: OutcomeStatus
    message: str
    project_id: str | None = None
    links_created: list[str] = Field(default_factory=list)
    failed_urls: list[str] = Field(default_factory=list)


_HTTP_STATUS: dict[OutcomeStatus, int] = {
    OutcomeStatus.CREATED: 201,
    OutcomeStatus.PARTIALLY_CREATED: 201,
    OutcomeStatus.UNAUTHORIZED: 401,
    OutcomeStatus.FAILED: 502,
}

_MESSAGES: dict[tuple[Variant, OutcomeStatus], str] = {
    (Variant.PERSONAL, OutcomeStatus.CREATED): "Project created successfully!",
    (Variant.PERSONAL, OutcomeStatus.FAILED): "Failed to create project",
    (Variant.EXTERNAL, OutcomeStatus.CREATED): "External reference created successfully!",
    (Variant.EXTERNAL, OutcomeStatus.PARTIALLY_CREATED): "Some external links could not be added",
    (Variant.EXTERNAL, OutcomeStatus.UNAUTHORIZED): "You must be logged in to add external references",
    (Variant.EXTERNAL, OutcomeStatus.FAILED): "Failed to create external reference",
}


def render_outcome(variant: Variant, receipt: SubmissionReceipt) -> SubmissionResp:
    outcome: SubmissionOutcome = receipt.outcome
    resp = SubmissionResp(
        submission_id=receipt.submission_id,
        status=outcome.status,
        message=_MESSAGES[(variant, outcome.status)],
    )
    match outcome:
        case Created(project_id=project_id, links_created=links):
            resp.project_id = project_id
            resp.links_created = list(links)
        case PartiallyCreated(project_id=project_id, failed_urls=failed, links_created=links):
            resp.project_id = project_id
            resp.failed_urls = list(failed)
            resp.links_created = list(links)
        case Unauthorized(project_id=project_id):
            resp.project_id = project_id
        case Failed():
            pass
    return resp


def _respond(variant: Variant, receipt: SubmissionReceipt, response: Response) -> SubmissionResp:
    response.status_code = _HTTP_STATUS[receipt.outcome.status]
    return render_outcome(variant, receipt)


@router.get("", response_model=list[ProjectOut])
def list_projects(service: ProjectQueryService = Depends(get_project_query_service)):
    return service.recent_projects()


@router.get("/{project_name}/external-references", response_model=list[ExternalReferenceOut])
def list_external_references(
    project_name: str,
    service: ProjectQueryService = Depends(get_project_query_service),
):
    return service.external_references(project_name)


@router.post("/personal", response_model=SubmissionResp, status_code=201)
def create_personal_project(
    response: Response,
    payload: dict[str, Any] = Body(...),
    service: ProjectSubmissionService = Depends(get_project_submission_service),
) -> SubmissionResp:
    try:
        receipt = service.submit_personal(payload)
    except ProjectServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return _respond(Variant.PERSONAL, receipt, response)


@router.post("/external", response_model=SubmissionResp, status_code=201)
def create_external_reference(
    response: Response,
    payload: dict[str, Any] = Body(...),
    service: ProjectSubmissionService = Depends(get_project_submission_service),
) -> SubmissionResp:
    try:
        receipt = service.submit_external(payload)
    except ProjectServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return _respond(Variant.EXTERNAL, receipt, response)
