"""In-memory patient store backing the development record service."""

from datetime import UTC, datetime

from patient_records.models.patient import Patient, PatientCreate, PatientUpdate
from patient_records.services.filtering import filter_patients


class PatientNotFoundError(LookupError):
    """No patient has the requested id."""

    def __init__(self, patient_id: int):
        super().__init__(f"Patient with ID {patient_id} not found")
        self.patient_id = patient_id


class DuplicateNikError(ValueError):
    """Another patient already has this NIK."""

    def __init__(self, nik: str):
        super().__init__("NIK already exists")
        self.nik = nik


class InMemoryPatientStore:
    """In-memory patient store.

    Seeded with mock patients; ids are assigned sequentially and never reused.
    """

    def __init__(self, seed: bool = True):
        """Initialize the store, optionally with mock patients."""
        self.patients: dict[int, Patient] = {}
        self._next_id = 1
        self.reset(seed=seed)

    def reset(self, seed: bool = True) -> None:
        """Drop every patient and restart id assignment."""
        self.patients.clear()
        self._next_id = 1
        if seed:
            for patient in self._mock_patients():
                self.create(patient)

    def list_patients(self) -> list[Patient]:
        return list(self.patients.values())

    def get(self, patient_id: int) -> Patient:
        patient = self.patients.get(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient

    def search(self, keyword: str) -> list[Patient]:
        """Patients whose name or NIK contains the keyword."""
        return filter_patients(self.list_patients(), keyword)

    def create(self, data: PatientCreate) -> Patient:
        self._ensure_unique_nik(data.nik)

        now = datetime.now(UTC)
        patient = Patient(id=self._next_id, created_at=now, updated_at=now, **data.model_dump())
        self.patients[patient.id] = patient
        self._next_id += 1
        return patient

    def update(self, patient_id: int, changes: PatientUpdate) -> Patient:
        patient = self.get(patient_id)
        updates = changes.model_dump(exclude_unset=True)
        if "nik" in updates and updates["nik"] != patient.nik:
            self._ensure_unique_nik(updates["nik"])

        updated = patient.model_copy(update={**updates, "updated_at": datetime.now(UTC)})
        self.patients[patient_id] = updated
        return updated

    def delete(self, patient_id: int) -> Patient:
        patient = self.get(patient_id)
        del self.patients[patient_id]
        return patient

    def _ensure_unique_nik(self, nik: str | None) -> None:
        if any(patient.nik == nik for patient in self.patients.values()):
            raise DuplicateNikError(nik)

    def _mock_patients(self) -> list[PatientCreate]:
        """Create mock patients for local runs."""
        return [
            PatientCreate(
                name="Budi Santoso",
                nik="3171234567890001",
                date_of_birth="1985-03-12",
                sex="Laki-laki",
                address="Jl. Merdeka No. 10, Jakarta Pusat",
                phone="081234567890",
                email="budi.santoso@example.com",
                blood_group="O",
            ),
            PatientCreate(
                name="Sari Wulandari",
                nik="3273456789012002",
                date_of_birth="1992-11-04",
                sex="Perempuan",
                address="Jl. Dago No. 21, Bandung",
                phone="082198765432",
                blood_group="A",
            ),
            PatientCreate(
                name="Agus Prasetyo",
                nik="3578901234567003",
                date_of_birth="1978-06-30",
                sex="Laki-laki",
                address="Jl. Pemuda No. 5, Surabaya",
                phone="085711223344",
                email="agus.p@example.com",
                blood_group="AB",
            ),
        ]


patient_store = InMemoryPatientStore()
