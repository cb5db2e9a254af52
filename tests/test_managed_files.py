"""
Tests for the managed-file workflow: ordering of uploads, writes and deletes
"""
import logging
import uuid
from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from api.experiences.services import experience_workflow
from api.projects.models import Project
from api.projects.services import project_workflow
from api.resumes.services import resume_workflow
from core.exceptions import (
    NotFoundError,
    PersistError,
    ServiceUnavailableError,
    UploadError,
    ValidationError,
)
from core.managed_files import BlobBinding
from core.uploads import IncomingFile
from tests.conftest import PDF_BYTES, PNG_BYTES, TEST_PUBLIC_URL


def png(filename="logo.png", content=PNG_BYTES):
    return IncomingFile(content=content, filename=filename, content_type="image/png")


def project_values(**overrides):
    values = {
        "title": "Portfolio site",
        "description": "This site",
        "technologies": ["React"],
    }
    values.update(overrides)
    return values


@pytest.fixture(name="workflow")
def workflow_fixture(session, blob_store):
    return project_workflow(session=session, blob_store=blob_store)


class TestBlobBinding:
    def test_paths_are_unique_per_upload(self):
        binding = BlobBinding(folder="projects", url_field="image_url", path_field="stored_image_path")

        first = binding.make_path(png())
        second = binding.make_path(png())

        assert first != second
        assert first.startswith("projects/")
        assert first.endswith("-logo.png")

    def test_path_drops_directory_components(self):
        binding = BlobBinding(folder="projects", url_field="image_url", path_field="stored_image_path")

        path = binding.make_path(png(filename="../../etc/logo.png"))

        assert path.count("/") == 1
        assert path.endswith("-logo.png")


class TestCreate:
    def test_create_with_file(self, workflow, mock_s3_client):
        project = workflow.create(project_values(), png())

        assert project.stored_image_path.startswith("projects/")
        assert project.image_url == f"{TEST_PUBLIC_URL}/{project.stored_image_path}"
        assert mock_s3_client.keys() == [project.stored_image_path]

    def test_create_without_file(self, workflow, mock_s3_client):
        project = workflow.create(project_values())

        assert project.image_url is None
        assert project.stored_image_path is None
        assert mock_s3_client.calls == []

    def test_create_requires_file_when_configured(self, session, blob_store, mock_s3_client):
        workflow = resume_workflow(session=session, blob_store=blob_store)

        with pytest.raises(ValidationError):
            workflow.create({"field": "Data Engineering"})

        assert mock_s3_client.calls == []

    def test_create_records_file_metadata(self, session, blob_store):
        workflow = resume_workflow(session=session, blob_store=blob_store)
        upload = IncomingFile(content=PDF_BYTES, filename="cv.pdf", content_type="application/pdf")

        resume = workflow.create({"field": "Data Engineering"}, upload)

        assert resume.original_filename == "cv.pdf"
        assert resume.mime_type == "application/pdf"
        assert resume.size == len(PDF_BYTES)

    def test_upload_failure_writes_nothing(self, workflow, session, mock_s3_client):
        mock_s3_client.simulate_error("PutObject", "ConnectTimeout")

        with pytest.raises(UploadError):
            workflow.create(project_values(), png())

        assert session.exec(select(Project)).all() == []

    def test_unconfigured_store_makes_no_calls(self, session, unconfigured_blob_store, mock_s3_client):
        workflow = project_workflow(session=session, blob_store=unconfigured_blob_store)

        with pytest.raises(ServiceUnavailableError):
            workflow.create(project_values(), png())

        assert mock_s3_client.calls == []
        assert session.exec(select(Project)).all() == []

    def test_persist_failure_leaves_orphan_and_logs(self, workflow, session, mock_s3_client, caplog):
        with patch.object(
            session, "commit", side_effect=OperationalError("INSERT", {}, Exception("db down"))
        ):
            with caplog.at_level(logging.ERROR, logger="portfolio"):
                with pytest.raises(PersistError):
                    workflow.create(project_values(), png())

        # The blob was uploaded before the failed insert and is reported
        [orphan] = mock_s3_client.keys()
        assert any(orphan in record.getMessage() for record in caplog.records)


class TestUpdate:
    def test_new_file_replaces_old_blob(self, workflow, mock_s3_client):
        project = workflow.create(project_values(), png("logo.png"))
        old_path = project.stored_image_path

        updated = workflow.update(project.id, {}, png("logo2.png"))

        assert updated.stored_image_path != old_path
        assert updated.stored_image_path.endswith("-logo2.png")
        assert mock_s3_client.keys() == [updated.stored_image_path]
        # Upload of the new blob happens before the old one is removed
        operations = [call[0] for call in mock_s3_client.calls]
        assert operations == ["PutObject", "PutObject", "DeleteObject"]

    def test_metadata_only_update_keeps_blob(self, workflow, mock_s3_client):
        project = workflow.create(project_values(), png())
        calls_before = list(mock_s3_client.calls)

        updated = workflow.update(project.id, {"title": "Renamed"})

        assert updated.title == "Renamed"
        assert updated.description == "This site"
        assert updated.stored_image_path == project.stored_image_path
        assert mock_s3_client.calls == calls_before

    def test_upload_failure_leaves_record_and_blob(self, workflow, session, mock_s3_client):
        project = workflow.create(project_values(), png())
        old_path = project.stored_image_path
        old_url = project.image_url
        mock_s3_client.simulate_error("PutObject", "AccessDenied")

        with pytest.raises(UploadError):
            workflow.update(project.id, {"title": "Renamed"}, png("logo2.png"))

        session.refresh(project)
        assert project.title == "Portfolio site"
        assert project.stored_image_path == old_path
        assert project.image_url == old_url
        assert mock_s3_client.keys() == [old_path]

    def test_old_blob_delete_failure_is_not_fatal(self, workflow, mock_s3_client, caplog):
        project = workflow.create(project_values(), png())
        old_path = project.stored_image_path
        mock_s3_client.simulate_error("DeleteObject", "AccessDenied")

        with caplog.at_level(logging.ERROR, logger="portfolio"):
            updated = workflow.update(project.id, {}, png("logo2.png"))

        assert updated.stored_image_path != old_path
        assert any(old_path in record.getMessage() for record in caplog.records)

    def test_update_unconfigured_store_makes_no_calls(
        self, session, unconfigured_blob_store, mock_s3_client
    ):
        workflow = project_workflow(session=session, blob_store=unconfigured_blob_store)
        project = workflow.create(project_values())

        with pytest.raises(ServiceUnavailableError):
            workflow.update(project.id, {"title": "Renamed"}, png())

        session.refresh(project)
        assert project.title == "Portfolio site"
        assert project.image_url is None
        assert mock_s3_client.calls == []

    def test_persist_failure_keeps_old_blob_and_logs_orphan(
        self, workflow, session, mock_s3_client, caplog
    ):
        project = workflow.create(project_values(), png("logo.png"))
        old_path = project.stored_image_path

        with patch.object(
            session, "commit", side_effect=OperationalError("UPDATE", {}, Exception("db down"))
        ):
            with caplog.at_level(logging.ERROR, logger="portfolio"):
                with pytest.raises(PersistError):
                    workflow.update(project.id, {"title": "Renamed"}, png("logo2.png"))

        session.refresh(project)
        assert project.stored_image_path == old_path
        assert project.title == "Portfolio site"
        # Both blobs remain: the old one is still referenced, the new one is orphaned
        [orphan] = [key for key in mock_s3_client.keys() if key != old_path]
        assert orphan.endswith("-logo2.png")
        assert "DeleteObject" not in [call[0] for call in mock_s3_client.calls]
        assert any(orphan in record.getMessage() for record in caplog.records)

    def test_update_missing_record(self, workflow, mock_s3_client):
        with pytest.raises(NotFoundError) as exc_info:
            workflow.update(uuid.uuid4(), {"title": "x"}, png())

        assert exc_info.value.message == "Project not found"
        assert mock_s3_client.calls == []

    def test_on_apply_hook_runs(self, session, blob_store):
        workflow = experience_workflow(session=session, blob_store=blob_store)
        experience = workflow.create({
            "company": "Acme",
            "position": "Engineer",
            "description": "Built things",
            "start_date": date(2020, 1, 1),
            "end_date": date(2021, 6, 30),
        })

        updated = workflow.update(experience.id, {"is_current": True})

        assert updated.end_date is None


class TestDelete:
    def test_delete_removes_record_and_blob(self, workflow, session, mock_s3_client):
        project = workflow.create(project_values(), png())

        workflow.delete(project.id)

        assert session.get(Project, project.id) is None
        assert mock_s3_client.keys() == []

    def test_blob_delete_failure_still_removes_record(self, workflow, session, mock_s3_client, caplog):
        project = workflow.create(project_values(), png())
        path = project.stored_image_path
        mock_s3_client.simulate_error("DeleteObject", "AccessDenied")

        with caplog.at_level(logging.ERROR, logger="portfolio"):
            workflow.delete(project.id)

        assert session.get(Project, project.id) is None
        assert mock_s3_client.keys() == [path]
        assert any(path in record.getMessage() for record in caplog.records)

    def test_delete_without_blob_makes_no_calls(self, workflow, mock_s3_client):
        project = workflow.create(project_values())

        workflow.delete(project.id)

        assert mock_s3_client.calls == []

    def test_delete_persist_failure_keeps_record_and_blob(self, workflow, session, mock_s3_client):
        project = workflow.create(project_values(), png())
        path = project.stored_image_path

        with patch.object(
            session, "commit", side_effect=OperationalError("DELETE", {}, Exception("db down"))
        ):
            with pytest.raises(PersistError) as exc_info:
                workflow.delete(project.id)

        assert exc_info.value.message == "Failed to delete project"
        assert session.get(Project, project.id) is not None
        assert mock_s3_client.keys() == [path]
        assert [call[0] for call in mock_s3_client.calls] == ["PutObject"]

    def test_delete_missing_record(self, workflow):
        with pytest.raises(NotFoundError):
            workflow.delete(uuid.uuid4())
