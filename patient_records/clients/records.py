"""HTTP client for the patient record service."""

import os
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from patient_records.models.patient import (
    ApiErrorPayload,
    DeleteResult,
    Patient,
    PatientCreate,
    PatientUpdate,
)
from patient_records.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"

_patient = TypeAdapter(Patient)
_patient_list = TypeAdapter(list[Patient])
_delete_result = TypeAdapter(DeleteResult)


def _default_base_url() -> str:
    return os.getenv("PATIENT_RECORDS_API_URL", DEFAULT_BASE_URL)


@dataclass
class RecordServiceConfig:
    """Configuration for the record service client."""

    base_url: str = field(default_factory=_default_base_url)
    timeout: float | None = None  # None waits as long as the service takes


class RecordServiceError(Exception):
    """A record service call failed.

    Raised for HTTP error statuses, transport failures and response bodies
    that do not match the expected shape. ``detail`` and ``errors`` hold the
    text the service itself supplied, when it supplied any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
        errors: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.errors = errors

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RecordServiceError":
        """Build an error from a non-success response, reading its JSON error body when present."""
        message = f"Record service returned HTTP {response.status_code}"
        try:
            payload = ApiErrorPayload.model_validate(response.json())
        except (ValueError, ValidationError):
            return cls(message, status_code=response.status_code)

        detail = payload.message
        if isinstance(detail, list):
            detail = ", ".join(detail)

        return cls(
            f"{message}: {detail}" if detail else message,
            status_code=response.status_code,
            detail=detail or None,
            errors=payload.errors,
        )

    def describe(self) -> str | None:
        """The service's own explanation: its error list, else its message."""
        if self.errors:
            return ", ".join(self.errors)
        return self.detail


class RecordServiceClient:
    """Async client for the record service operations."""

    config: RecordServiceConfig
    client: httpx.AsyncClient

    def __init__(
        self,
        config: RecordServiceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration
            transport: Optional httpx transport, e.g. to route requests to an in-process app
        """
        self.config = config or RecordServiceConfig()
        self.client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "RecordServiceClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self.client.aclose()

    async def list_patients(self) -> list[Patient]:
        """Fetch every patient record."""
        data = await self._request("GET", "/patients")
        return self._parse(_patient_list, data)

    async def get_patient(self, patient_id: int) -> Patient:
        """Fetch a single patient record."""
        data = await self._request("GET", f"/patients/{patient_id}")
        return self._parse(_patient, data)

    async def create_patient(self, patient: PatientCreate) -> Patient:
        """Create a patient. The service assigns id and timestamps."""
        data = await self._request("POST", "/patients", json=patient.to_payload())
        return self._parse(_patient, data)

    async def update_patient(self, patient_id: int, changes: PatientUpdate) -> Patient:
        """Apply a partial update to a patient."""
        data = await self._request("PATCH", f"/patients/{patient_id}", json=changes.to_payload())
        return self._parse(_patient, data)

    async def delete_patient(self, patient_id: int) -> DeleteResult:
        """Delete a patient and return the service's status message."""
        data = await self._request("DELETE", f"/patients/{patient_id}")
        return self._parse(_delete_result, data)

    async def search_patients(self, keyword: str) -> list[Patient]:
        """Search patients on the service side by name or NIK."""
        data = await self._request("GET", "/patients/search", params={"q": keyword})
        return self._parse(_patient_list, data)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body."""
        logger.debug(f"{method} {path}")
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise RecordServiceError(f"Could not reach record service: {e!r}") from e

        if response.is_error:
            error = RecordServiceError.from_response(response)
            logger.warning(f"{method} {path}: {error.message}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise RecordServiceError(
                f"Record service returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
            ) from e

    def _parse[T](self, adapter: TypeAdapter[T], data: Any) -> T:
        """Validate a response body into the expected type."""
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected record service response: {e}")
            raise RecordServiceError("Record service returned an unexpected response") from e
