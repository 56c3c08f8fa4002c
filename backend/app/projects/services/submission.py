from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, assert_never

from app.projects.adapters.gateways import (
    ExternalLinkStore,
    LinkCreationError,
    ProjectCreationError,
    ProjectStore,
)
from app.projects.domain.models import (
    Created,
    Failed,
    Identity,
    PartiallyCreated,
    SubmissionOutcome,
    Unauthorized,
)
from app.projects.domain.schemas import (
    ExternalReferenceInput,
    PersonalProjectInput,
    ProjectInput,
)
from app.projects.services.description import build_description
from app.projects.services.links import split_candidate_urls
from app.projects.services.trace_logger import SubmissionTrace

logger = logging.getLogger(__name__)


@dataclass
class LinkBatch:
    created: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def create_links(
    urls: Iterable[str],
    project_name: str,
    owner: Identity,
    link_store: ExternalLinkStore,
    *,
    submission_id: str | None = None,
    trace: SubmissionTrace | None = None,
) -> LinkBatch:
    """Write one link record per URL, in order; a failure never stops the rest."""
    batch = LinkBatch()
    for url in urls:
        try:
            link_store.create_link(url, project_name, owner)
        except LinkCreationError as exc:
            batch.failed.append(url)
            logger.warning(
                "external link not saved for project %r: %s",
                project_name,
                exc,
                extra={"submission_id": submission_id, "url": url},
            )
            if trace:
                trace.append_error(stage="link", error=str(exc), meta={"url": url})
            continue

        batch.created.append(url)
        if trace:
            trace.append(stage="link", payload={"url": url, "ok": True})
    return batch


def attach_links(
    payload: ExternalReferenceInput,
    project_id: str,
    identity: Identity | None,
    link_store: ExternalLinkStore,
    *,
    submission_id: str | None = None,
    trace: SubmissionTrace | None = None,
) -> SubmissionOutcome:
    if identity is None:
        # project row stays; no compensating delete
        logger.warning(
            "no authenticated user, external links skipped for project %r",
            payload.name,
            extra={"submission_id": submission_id, "project_id": project_id},
        )
        return Unauthorized(project_id=project_id)

    urls = split_candidate_urls(payload.external_links)
    batch = create_links(
        urls, payload.name, identity, link_store, submission_id=submission_id, trace=trace
    )

    if batch.failed:
        return PartiallyCreated(
            project_id=project_id,
            failed_urls=tuple(batch.failed),
            links_created=tuple(batch.created),
        )
    return Created(project_id=project_id, links_created=tuple(batch.created))


def submit(
    payload: ProjectInput,
    *,
    project_store: ProjectStore,
    link_store: ExternalLinkStore,
    submission_id: str | None = None,
    trace: SubmissionTrace | None = None,
) -> SubmissionOutcome:
    if submission_id is None and trace is not None:
        submission_id = trace.submission_id
    description = build_description(payload)

    try:
        project_id = project_store.create_project(payload.name, description)
    except ProjectCreationError as exc:
        logger.warning(
            "project %r not created: %s",
            payload.name,
            exc,
            extra={"submission_id": submission_id},
        )
        if trace:
            trace.append_error(stage="project", error=str(exc), meta={"name": payload.name})
        return _finish(Failed(reason=str(exc)), trace)

    logger.info(
        "project %r created (%s)",
        payload.name,
        payload.variant,
        extra={"submission_id": submission_id, "project_id": project_id},
    )
    if trace:
        trace.append(
            stage="project",
            payload={"project_id": project_id, "name": payload.name, "variant": payload.variant},
        )

    match payload:
        case PersonalProjectInput():
            outcome: SubmissionOutcome = Created(project_id=project_id)
        case ExternalReferenceInput():
            identity = link_store.current_identity()
            if trace:
                trace.append(stage="identity", payload={"authenticated": identity is not None})
            outcome = attach_links(
                payload,
                project_id,
                identity,
                link_store,
                submission_id=submission_id,
                trace=trace,
            )
        case _:
            assert_never(payload)

    return _finish(outcome, trace)


def _finish(outcome: SubmissionOutcome, trace: SubmissionTrace | None) -> SubmissionOutcome:
    if trace:
        trace.append(stage="outcome", payload={"status": outcome.status, "outcome": outcome})
    return outcome
