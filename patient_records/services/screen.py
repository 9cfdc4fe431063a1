"""State and actions of the patient management screen."""

from dataclasses import dataclass, field

from patient_records.clients.records import RecordServiceClient, RecordServiceError
from patient_records.models.patient import DRAFT_FIELDS, Patient, PatientDraft
from patient_records.services.filtering import filter_patients
from patient_records.services.validation import validate_draft
from patient_records.utils.logging import get_logger

logger = get_logger(__name__)

FETCH_FAILED = "Failed to load patient data. Make sure the record service is running."
LOAD_ONE_FAILED = "Failed to load patient details"
SAVE_FAILED = "An error occurred while saving patient data"
DELETE_FAILED = "Failed to delete patient data"

CREATED = "New patient added successfully!"
UPDATED = "Patient data updated successfully!"
DELETED = "Patient data deleted successfully!"


def describe_failure(error: RecordServiceError, fallback: str) -> str:
    """Banner text for a failed call: the service's explanation, or the fallback."""
    return error.describe() or fallback


@dataclass
class PatientScreen:
    """UI state for listing, searching and editing patients.

    The patient list is a non-authoritative copy of the service's records and
    is refetched in full after every successful change. The visible list is
    always derived from it and the search keyword.
    """

    client: RecordServiceClient
    patients: list[Patient] = field(default_factory=list)
    loading: bool = True
    draft: PatientDraft = field(default_factory=PatientDraft)
    errors: dict[str, str] = field(default_factory=dict)
    editing_id: int | None = None
    show_form: bool = False
    success_message: str = ""
    error_message: str = ""
    search_keyword: str = ""
    selected: Patient | None = None

    @property
    def visible_patients(self) -> list[Patient]:
        """Patients matching the current search keyword."""
        return filter_patients(self.patients, self.search_keyword)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    async def refresh(self) -> None:
        """Reload the full patient list from the service."""
        self.loading = True
        try:
            self.patients = await self.client.list_patients()
            logger.debug(f"Loaded {len(self.patients)} patients")
        except RecordServiceError as e:
            logger.warning(f"Failed to fetch patients: {e.message}")
            self.error_message = FETCH_FAILED
        finally:
            self.loading = False

    def set_search(self, keyword: str) -> None:
        self.search_keyword = keyword

    def toggle_form(self) -> None:
        """Show or hide the form, starting from a blank draft either way."""
        self.show_form = not self.show_form
        self._reset_form()

    def open_create_form(self) -> None:
        self.show_form = True
        self._reset_form()

    def cancel_form(self) -> None:
        self.show_form = False
        self._reset_form()

    def start_edit(self, patient: Patient) -> None:
        """Open the form pre-filled with an existing patient."""
        self.draft = PatientDraft.from_patient(patient)
        self.editing_id = patient.id
        self.show_form = True
        self.errors = {}

    def update_field(self, field_name: str, value: str) -> None:
        """Set one draft field and clear its error."""
        if field_name not in DRAFT_FIELDS:
            raise ValueError(f"Unknown form field: {field_name}")

        setattr(self.draft, field_name, value)
        self.errors.pop(field_name, None)

    async def submit(self) -> bool:
        """Validate the draft and create or update the patient.

        Returns:
            True when the service accepted the change, False when validation
            failed or the service rejected it (the form then stays open)
        """
        self.success_message = ""
        self.error_message = ""

        self.errors = validate_draft(self.draft)
        if self.errors:
            logger.debug(f"Draft rejected: {sorted(self.errors)}")
            return False

        try:
            if self.editing_id is not None:
                await self.client.update_patient(self.editing_id, self.draft.to_update())
                logger.info(f"Updated patient {self.editing_id}")
                self.success_message = UPDATED
            else:
                created = await self.client.create_patient(self.draft.to_create())
                logger.info(f"Created patient {created.id}")
                self.success_message = CREATED
        except RecordServiceError as e:
            logger.warning(f"Failed to save patient: {e.message}")
            self.error_message = describe_failure(e, SAVE_FAILED)
            return False

        self.show_form = False
        self._reset_form()
        await self.refresh()
        return True

    async def delete(self, patient: Patient) -> bool:
        """Delete a patient. Asking the user for confirmation is the caller's job."""
        self.success_message = ""
        self.error_message = ""

        try:
            await self.client.delete_patient(patient.id)
        except RecordServiceError as e:
            logger.warning(f"Failed to delete patient {patient.id}: {e.message}")
            self.error_message = describe_failure(e, DELETE_FAILED)
            return False

        logger.info(f"Deleted patient {patient.id}")
        self.success_message = DELETED
        if self.selected is not None and self.selected.id == patient.id:
            self.selected = None
        await self.refresh()
        return True

    async def load_detail(self, patient_id: int) -> Patient | None:
        """Fetch one patient for the detail view."""
        try:
            self.selected = await self.client.get_patient(patient_id)
        except RecordServiceError as e:
            logger.warning(f"Failed to fetch patient {patient_id}: {e.message}")
            self.error_message = describe_failure(e, LOAD_ONE_FAILED)
            self.selected = None
        return self.selected

    def _reset_form(self) -> None:
        self.draft = PatientDraft()
        self.editing_id = None
        self.errors = {}
