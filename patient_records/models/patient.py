"""Patient record models shared by the console and the record service."""

from datetime import datetime
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Sex = Literal["Laki-laki", "Perempuan"]
BloodGroup = Literal["A", "B", "AB", "O"]

SEX_OPTIONS: tuple[str, ...] = get_args(Sex)
BLOOD_GROUP_OPTIONS: tuple[str, ...] = get_args(BloodGroup)

# Draft attributes in form order
DRAFT_FIELDS: tuple[str, ...] = (
    "name",
    "nik",
    "date_of_birth",
    "sex",
    "address",
    "phone",
    "email",
    "blood_group",
)


class PatientFields(BaseModel):
    """Base model mapping Python attribute names onto the service's JSON keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Patient(PatientFields):
    """A patient record as stored by the record service."""

    id: int
    name: str = Field(..., alias="nama")
    nik: str
    date_of_birth: str = Field(..., alias="tanggal_lahir")
    sex: Sex = Field(..., alias="jenis_kelamin")
    address: str = Field(..., alias="alamat")
    phone: str = Field(..., alias="no_telepon")
    email: str | None = None
    blood_group: BloodGroup = Field(..., alias="golongan_darah")
    created_at: datetime
    updated_at: datetime


class PatientCreate(PatientFields):
    """Payload for creating a patient. The service assigns id and timestamps."""

    name: str = Field(..., alias="nama")
    nik: str
    date_of_birth: str = Field(..., alias="tanggal_lahir")
    sex: Sex = Field(..., alias="jenis_kelamin")
    address: str = Field(..., alias="alamat")
    phone: str = Field(..., alias="no_telepon")
    email: str | None = None
    blood_group: BloodGroup = Field(..., alias="golongan_darah")

    def to_payload(self) -> dict:
        """Serialize for the wire, leaving out an absent email."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PatientUpdate(PatientFields):
    """Partial update payload. Only explicitly set fields are sent."""

    name: str | None = Field(None, alias="nama")
    nik: str | None = None
    date_of_birth: str | None = Field(None, alias="tanggal_lahir")
    sex: Sex | None = Field(None, alias="jenis_kelamin")
    address: str | None = Field(None, alias="alamat")
    phone: str | None = Field(None, alias="no_telepon")
    email: str | None = None
    blood_group: BloodGroup | None = Field(None, alias="golongan_darah")

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "PatientUpdate":
        """Only email may be cleared; other fields are either omitted or given a value."""
        fields = type(self).model_fields
        nulled = sorted(
            fields[name].alias or name
            for name in self.model_fields_set
            if name != "email" and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Required fields cannot be null: {', '.join(nulled)}")
        return self

    def to_payload(self) -> dict:
        """Serialize only the fields that were set; an explicit None email clears it."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class PatientDraft(BaseModel):
    """Form state for a patient being created or edited.

    Every field is raw text as typed by the user; email is an empty string
    when left blank.
    """

    name: str = ""
    nik: str = ""
    date_of_birth: str = ""
    sex: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    blood_group: str = ""

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientDraft":
        """Pre-fill a draft from an existing record."""
        return cls(
            name=patient.name,
            nik=patient.nik,
            date_of_birth=patient.date_of_birth.split("T")[0],
            sex=patient.sex,
            address=patient.address,
            phone=patient.phone,
            email=patient.email or "",
            blood_group=patient.blood_group,
        )

    def to_create(self) -> PatientCreate:
        """Build the create payload. Call only after the draft validated."""
        return PatientCreate(
            name=self.name,
            nik=self.nik,
            date_of_birth=self.date_of_birth,
            sex=self.sex,
            address=self.address,
            phone=self.phone,
            email=self.email or None,
            blood_group=self.blood_group,
        )

    def to_update(self) -> PatientUpdate:
        """Build an update payload carrying every form field."""
        return PatientUpdate(
            name=self.name,
            nik=self.nik,
            date_of_birth=self.date_of_birth,
            sex=self.sex,
            address=self.address,
            phone=self.phone,
            email=self.email or None,
            blood_group=self.blood_group,
        )


class ApiErrorPayload(BaseModel):
    """Error body returned by the record service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    status_code: int | None = Field(None, alias="statusCode")
    message: str | list[str] | None = None
    errors: list[str] | None = None

    # Malformed parts are dropped so the usable rest of the body still gets through
    @field_validator("success", mode="before")
    @classmethod
    def lenient_success(cls, v: Any) -> bool:
        return v if isinstance(v, bool) else False

    @field_validator("status_code", mode="before")
    @classmethod
    def lenient_status_code(cls, v: Any) -> int | None:
        return v if isinstance(v, int) and not isinstance(v, bool) else None

    @field_validator("message", mode="before")
    @classmethod
    def lenient_message(cls, v: Any) -> str | list[str] | None:
        if isinstance(v, str) or (isinstance(v, list) and all(isinstance(item, str) for item in v)):
            return v
        return None

    @field_validator("errors", mode="before")
    @classmethod
    def lenient_errors(cls, v: Any) -> list[str] | None:
        if isinstance(v, list) and all(isinstance(item, str) for item in v):
            return v
        return None


class DeleteResult(BaseModel):
    """Status message returned after a delete."""

    message: str


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str
    timestamp: datetime
    version: str
