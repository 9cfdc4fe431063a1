"""Routes of the development record service."""

from datetime import UTC, datetime

from fastapi import APIRouter

from patient_records import __version__
from patient_records.models.patient import DeleteResult, HealthResponse, Patient, PatientCreate, PatientUpdate
from patient_records.services.patient_store import DuplicateNikError, PatientNotFoundError, patient_store
from patient_records.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class ServiceError(Exception):
    """A request failed; rendered as the service's JSON error body."""

    def __init__(self, status_code: int, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors

    def as_payload(self) -> dict:
        payload: dict = {"success": False, "statusCode": self.status_code, "message": self.message}
        if self.errors is not None:
            payload["errors"] = self.errors
        return payload


def _get_or_404(patient_id: int) -> Patient:
    try:
        return patient_store.get(patient_id)
    except PatientNotFoundError as e:
        raise ServiceError(404, str(e)) from e


@router.get("/patients", response_model=list[Patient], tags=["Patients"])
async def list_patients() -> list[Patient]:
    """List every patient."""
    return patient_store.list_patients()


@router.get("/patients/search", response_model=list[Patient], tags=["Patients"])
async def search_patients(q: str = "") -> list[Patient]:
    """Search patients by name or NIK."""
    return patient_store.search(q)


@router.get("/patients/{patient_id}", response_model=Patient, tags=["Patients"])
async def get_patient(patient_id: int) -> Patient:
    """Get a single patient."""
    return _get_or_404(patient_id)


@router.post("/patients", response_model=Patient, status_code=201, tags=["Patients"])
async def create_patient(data: PatientCreate) -> Patient:
    """Create a patient."""
    try:
        patient = patient_store.create(data)
    except DuplicateNikError as e:
        logger.info(f"Rejected duplicate NIK {e.nik}")
        raise ServiceError(409, str(e), errors=[str(e)]) from e

    logger.info(f"Created patient {patient.id}")
    return patient


@router.patch("/patients/{patient_id}", response_model=Patient, tags=["Patients"])
async def update_patient(patient_id: int, changes: PatientUpdate) -> Patient:
    """Apply a partial update to a patient."""
    _get_or_404(patient_id)
    try:
        patient = patient_store.update(patient_id, changes)
    except DuplicateNikError as e:
        raise ServiceError(409, str(e), errors=[str(e)]) from e

    logger.info(f"Updated patient {patient_id}")
    return patient


@router.delete("/patients/{patient_id}", response_model=DeleteResult, tags=["Patients"])
async def delete_patient(patient_id: int) -> DeleteResult:
    """Delete a patient."""
    patient = _get_or_404(patient_id)
    patient_store.delete(patient_id)
    logger.info(f"Deleted patient {patient_id}")
    return DeleteResult(message=f"Patient {patient.name} (ID {patient_id}) deleted")


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
    )
