from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from doglicense.api.schemas.application import CertificateFile, DraftApplication, SubmittedApplication


def test_draft_accepts_camel_case_and_coerces_scalars():
    draft = DraftApplication.model_validate({"ownerName": "Jane", "dogAge": 4, "dogColor": None})
    assert draft.owner_name == "Jane"
    assert draft.dog_age == "4"
    assert draft.dog_color == ""
    assert not draft.is_empty()
    assert DraftApplication().is_empty()


def test_submitted_application_is_frozen():
    record = SubmittedApplication(id="DOG-1-2", submitted_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    assert record.status == "submitted"
    with pytest.raises(ValidationError):
        record.owner_name = "Someone else"


def test_submitted_application_status_is_fixed():
    with pytest.raises(ValidationError):
        SubmittedApplication(id="DOG-1-2", submitted_at=datetime(2026, 1, 1, tzinfo=timezone.utc), status="approved")


def test_certificate_from_streamlit_upload():
    upload = SimpleNamespace(name="shot.png", type="image/png", size=2048)
    assert CertificateFile.from_upload(upload) == CertificateFile(name="shot.png", content_type="image/png", size=2048)


def test_certificate_from_upload_without_size():
    upload = SimpleNamespace(filename="shot.pdf", content_type="application/pdf", getvalue=lambda: b"12345")
    certificate = CertificateFile.from_upload(upload)
    assert certificate.name == "shot.pdf"
    assert certificate.size == 5
