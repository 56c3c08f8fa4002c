from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.projects.adapters.auth_sessions import AuthSessionStore
from app.projects.adapters.gateways import LinkCreationError, ProjectCreationError
from app.projects.domain.models import ExternalLinkRecord, Identity


class ProjectRepoSQL:
    """
    Plain SQL over an Engine from deps.py; no ORM session here.
    Every write runs in its own transaction.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_project(self, name: str, description: str) -> str:
        project_id = str(uuid.uuid4())
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    text(
                        """
                        INSERT INTO projects (id, name, description)
                        VALUES (:id, :name, :description)
                        """
                    ),
                    {"id": project_id, "name": name, "description": description},
                )
        except SQLAlchemyError as exc:
            # unique name violations land here too
            raise ProjectCreationError(f"project insert failed: {exc.__class__.__name__}") from exc
        return project_id

    def list_recent(self, limit: int = 50) -> list[dict[str, Any]]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                text(
                    """
                    SELECT id, name, description
                    FROM projects
                    ORDER BY created_at DESC
                    LIMIT :limit
                    """
                ),
                {"limit": limit},
            ).mappings().all()

        items: list[dict[str, Any]] = []
        for r in rows:
            d = dict(r)
            d["id"] = str(d["id"])
            items.append(d)
        return items


class ExternalLinkRepoSQL:
    """external_references writes, scoped to the caller's access token."""

    def __init__(
        self,
        engine: Engine,
        sessions: AuthSessionStore,
        access_token: str | None = None,
    ):
        self.engine = engine
        self.sessions = sessions
        self.access_token = access_token

    def current_identity(self) -> Identity | None:
        return self.sessions.resolve(self.access_token)

    def create_link(self, url: str, project_name: str, owner: Identity) -> None:
        self.insert_record(ExternalLinkRecord(url=url, project_name=project_name, owner=owner))

    def insert_record(self, record: ExternalLinkRecord) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    text(
                        """
                        INSERT INTO external_references (id, url, project_name, user_id)
                        VALUES (:id, :url, :project_name, :user_id)
                        """
                    ),
                    {
                        "id": str(uuid.uuid4()),
                        "url": record.url,
                        "project_name": record.project_name,
                        "user_id": record.owner.user_id,
                    },
                )
        except SQLAlchemyError as exc:
            raise LinkCreationError(f"link insert failed for {record.url}: {exc.__class__.__name__}") from exc

    def list_for_project(self, project_name: str) -> list[ExternalLinkRecord]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                text(
                    """
                    SELECT url, project_name, user_id
                    FROM external_references
                    WHERE project_name = :project_name
                    ORDER BY created_at ASC
                    """
                ),
                {"project_name": project_name},
            ).mappings().all()

        return [
            ExternalLinkRecord(
                url=r["url"],
                project_name=r["project_name"],
                owner=Identity(user_id=r["user_id"]),
            )
            for r in rows
        ]
