from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

from app.main import app
from app.projects.adapters.gateways import LinkCreationError, ProjectCreationError
from app.projects.app.services import (
    ProjectSubmissionService,
    get_project_query_service,
    get_project_submission_service,
)
from app.projects.domain.models import Identity


class StubProjectStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def create_project(self, name: str, description: str) -> str:
        self.calls.append((name, description))
        if self.fail:
            raise ProjectCreationError("unique violation")
        return "project-1"


class StubLinkStore:
    def __init__(self, identity: Identity | None, failing_urls: set[str] | None = None):
        self.identity = identity
        self.failing_urls = failing_urls or set()
        self.urls: list[str] = []

    def current_identity(self) -> Identity | None:
        return self.identity

    def create_link(self, url: str, project_name: str, owner: Identity) -> None:
        self.urls.append(url)
        if url in self.failing_urls:
            raise LinkCreationError(url)


class StubQueryService:
    def recent_projects(self, limit: int = 50) -> list[dict[str, object]]:
        return [{"id": "project-1", "name": "Poster", "description": "Field: Print"}]

    def external_references(self, project_name: str) -> list[dict[str, object]]:
        return [{"url": "https://a.com", "project_name": project_name, "user_id": "user-1"}]


class ProjectsApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)
        app.dependency_overrides.clear()
        self.projects = StubProjectStore()
        self.links = StubLinkStore(Identity(user_id="user-1"))
        app.dependency_overrides[get_project_submission_service] = (
            lambda: ProjectSubmissionService(self.projects, self.links)
        )

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def test_personal_created(self) -> None:
        response = self.client.post(
            "/v1/projects/personal",
            json={"name": "Poster", "field": "Print", "year": "2022"},
        )

        body = response.json()
        self.assertEqual(response.status_code, 201)
        self.assertTrue(body.pop("submission_id"))
        self.assertEqual(
            body,
            {
                "status": "created",
                "message": "Project created successfully!",
                "project_id": "project-1",
                "links_created": [],
                "failed_urls": [],
            },
        )
        self.assertEqual(self.projects.calls, [("Poster", "Field: Print\nYear: 2022")])
        self.assertEqual(self.links.urls, [])

    def test_personal_validation_errors(self) -> None:
        response = self.client.post("/v1/projects/personal", json={"name": "", "field": ""})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            response.json(),
            {
                "detail": {
                    "field_errors": {
                        "name": "Project name is required",
                        "field": "Field is required",
                    }
                }
            },
        )
        self.assertEqual(self.projects.calls, [])

    def test_personal_failure(self) -> None:
        self.projects.fail = True

        response = self.client.post("/v1/projects/personal", json={"name": "Poster", "field": "Print"})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["status"], "failed")
        self.assertEqual(response.json()["message"], "Failed to create project")

    def test_external_partially_created(self) -> None:
        self.links.failing_urls = {"https://b.com"}

        response = self.client.post(
            "/v1/projects/external",
            json={
                "name": "Grotesk",
                "field": "Typography",
                "externalLinks": "https://a.com, https://b.com, https://c.com",
            },
        )

        body = response.json()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["status"], "partially_created")
        self.assertEqual(body["failed_urls"], ["https://b.com"])
        self.assertEqual(body["links_created"], ["https://a.com", "https://c.com"])
        self.assertEqual(body["message"], "Some external links could not be added")

    def test_external_created(self) -> None:
        response = self.client.post(
            "/v1/projects/external",
            json={"name": "Grotesk", "field": "Typography", "externalLinks": "https://a.com"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "External reference created successfully!")
        self.assertEqual(self.links.urls, ["https://a.com"])

    def test_external_unauthorized(self) -> None:
        self.links.identity = None

        response = self.client.post(
            "/v1/projects/external",
            json={"name": "Grotesk", "field": "Typography", "externalLinks": "https://a.com"},
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["status"], "unauthorized")
        self.assertEqual(response.json()["project_id"], "project-1")
        self.assertEqual(
            response.json()["message"], "You must be logged in to add external references"
        )
        self.assertEqual(self.links.urls, [])

    def test_external_requires_links(self) -> None:
        response = self.client.post(
            "/v1/projects/external",
            json={"name": "Grotesk", "field": "Typography", "externalLinks": "  "},
        )

        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            response.json()["detail"]["field_errors"],
            {"externalLinks": "At least one external link is required"},
        )

    def test_submission_id_names_the_trace_file(self) -> None:
        with tempfile.TemporaryDirectory() as trace_dir:
            with mock.patch.dict(os.environ, {"SUBMISSION_TRACE_DIR": trace_dir}):
                response = self.client.post(
                    "/v1/projects/external",
                    json={"name": "Grotesk", "field": "Typography", "externalLinks": "https://a.com"},
                )

            submission_id = response.json()["submission_id"]
            trace_path = Path(trace_dir) / f"{submission_id}.jsonl"
            self.assertTrue(trace_path.exists())
            entries = [json.loads(line) for line in trace_path.read_text(encoding="utf-8").splitlines()]

        self.assertEqual({e["submission_id"] for e in entries}, {submission_id})
        self.assertEqual(entries[-1]["payload"]["status"], "created")

    def test_listing_contracts(self) -> None:
        app.dependency_overrides[get_project_query_service] = lambda: StubQueryService()

        projects = self.client.get("/v1/projects")
        refs = self.client.get("/v1/projects/Grotesk/external-references")

        self.assertEqual(projects.status_code, 200)
        self.assertEqual(projects.json()[0]["name"], "Poster")
        self.assertEqual(refs.json(), [{"url": "https://a.com", "project_name": "Grotesk", "user_id": "user-1"}])


if __name__ == "__main__":
    unittest.main()
