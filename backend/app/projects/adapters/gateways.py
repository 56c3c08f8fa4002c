from __future__ import annotations

from typing import Protocol

from app.projects.domain.models import Identity


class ProjectCreationError(RuntimeError):
    """The primary project write failed."""


class LinkCreationError(RuntimeError):
    """One external link record could not be written."""


class ProjectStore(Protocol):
    def create_project(self, name: str, description: str) -> str:
        """Persist a project and return its id; raises ProjectCreationError."""
        raise NotImplementedError


class ExternalLinkStore(Protocol):
    def create_link(self, url: str, project_name: str, owner: Identity) -> None:
        """Persist one link record; raises LinkCreationError."""
        raise NotImplementedError

    def current_identity(self) -> Identity | None:
        """Never raises; None means unauthenticated."""
        raise NotImplementedError
