from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Variant(str, Enum):
    PERSONAL = "personal"
    EXTERNAL = "external"


class OutcomeStatus(str, Enum):
    CREATED = "created"
    PARTIALLY_CREATED = "partially_created"
    UNAUTHORIZED = "unauthorized"
    FAILED = "failed"


@dataclass(frozen=True)
class Identity:
    """Authenticated user handle, opaque to the submission flow."""

    user_id: str


@dataclass(frozen=True)
class ExternalLinkRecord:
    url: str
    project_name: str
    owner: Identity


# --- submission outcomes ---
@dataclass(frozen=True)
class Created:
    status: ClassVar[OutcomeStatus] = OutcomeStatus.CREATED

    project_id: str
    links_created: tuple[str, ...] = ()


@dataclass(frozen=True)
class PartiallyCreated:
    status: ClassVar[OutcomeStatus] = OutcomeStatus.PARTIALLY_CREATED

    project_id: str
    failed_urls: tuple[str, ...]
    links_created: tuple[str, ...] = ()


@dataclass(frozen=True)
class Unauthorized:
    status: ClassVar[OutcomeStatus] = OutcomeStatus.UNAUTHORIZED

    # the project row is kept even though no links could be attached
    project_id: str


@dataclass(frozen=True)
class Failed:
    status: ClassVar[OutcomeStatus] = OutcomeStatus.FAILED

    reason: str


SubmissionOutcome = Created | PartiallyCreated | Unauthorized | Failed


@dataclass(frozen=True)
class SubmissionReceipt:
    """What an entry point hands back: the outcome plus the id its logs and trace use."""

    submission_id: str
    outcome: SubmissionOutcome
