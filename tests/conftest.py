"""Shared fixtures: the development record service and clients wired to it."""

from datetime import UTC, datetime

import httpx
import pytest
import pytest_asyncio

from patient_records.clients.records import RecordServiceClient, RecordServiceConfig
from patient_records.main import app
from patient_records.models.patient import Patient, PatientDraft
from patient_records.services.patient_store import patient_store

TEST_BASE_URL = "http://testserver/api"


@pytest.fixture(autouse=True)
def reset_store():
    """Start every test from the seeded mock patients."""
    patient_store.reset()
    yield
    patient_store.reset()


@pytest_asyncio.fixture
async def record_client():
    """RecordServiceClient talking to the development service in-process."""
    client = RecordServiceClient(
        RecordServiceConfig(base_url=TEST_BASE_URL),
        transport=httpx.ASGITransport(app=app),
    )
    yield client
    await client.aclose()


@pytest.fixture
def valid_draft() -> PatientDraft:
    """A draft that passes every form rule."""
    return PatientDraft(
        name="Ana Lestari",
        nik="3174012345670009",
        date_of_birth="1995-02-17",
        sex="Perempuan",
        address="Jl. Kenanga No. 3, Yogyakarta",
        phone="081300112233",
        email="ana@example.com",
        blood_group="B",
    )


def make_patient(patient_id: int, name: str, nik: str, **overrides) -> Patient:
    """Build a Patient record for tests that do not need the service."""
    now = datetime(2025, 1, 1, tzinfo=UTC)
    fields = {
        "id": patient_id,
        "name": name,
        "nik": nik,
        "date_of_birth": "1990-01-05T00:00:00.000Z",
        "sex": "Laki-laki",
        "address": "Jl. Mawar No. 1",
        "phone": "081200000000",
        "blood_group": "O",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Patient(**fields)


@pytest.fixture
def patient_factory():
    """Factory for Patient records, see make_patient."""
    return make_patient
