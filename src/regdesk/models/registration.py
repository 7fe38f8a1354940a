"""SQLModel Registration model and its API schemas"""

import enum
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, Column
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel


class RegistrationStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    PENDING = "pending"
    COMPLETED = "completed"


def is_expired_for(status: RegistrationStatus) -> bool:
    """A ticket is expired exactly when its training is completed"""
    return status == RegistrationStatus.COMPLETED


class Registration(SQLModel, table=True):
    """A training-program signup"""

    __tablename__ = "registrations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    ticket_no: Optional[int] = Field(default=None, unique=True, index=True)
    full_name: str = Field(index=True)
    email: str = Field(index=True)
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    experience: Optional[str] = None
    institution: Optional[str] = None
    call_date_time: Optional[datetime] = Field(default=None, index=True)
    hear_about_us: Optional[str] = None
    current_profession: Optional[str] = None
    specialization: Optional[str] = None
    learning_goals: Optional[str] = None
    training_programs: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    additional_programs: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    upload_id: Optional[str] = None  # StoredFile id as string
    status: RegistrationStatus = Field(
        default=RegistrationStatus.UPCOMING,
        sa_column=Column(
            SAEnum(
                RegistrationStatus,
                name="registration_status",
                native_enum=True,
                values_callable=lambda enum: [e.value for e in enum],
            ),
            nullable=False,
            index=True,
            server_default=RegistrationStatus.UPCOMING.value,
        ),
    )
    is_expired: bool = Field(default=False)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class RegistrationFields(CamelModel):
    """Editable contact and program fields shared by create and edit payloads"""

    phone_number: Optional[str] = None
    dob: Optional[date] = None
    experience: Optional[Union[str, int, float]] = None
    institution: Optional[str] = None
    call_date_time: Optional[datetime] = None
    hear_about_us: Optional[str] = None
    current_profession: Optional[str] = None
    specialization: Optional[str] = None
    learning_goals: Optional[str] = None
    training_programs: Optional[List[str]] = None
    additional_programs: Optional[List[str]] = None
    upload_id: Optional[str] = None

    @field_validator("experience")
    @classmethod
    def experience_as_text(cls, value):
        # Years of experience may arrive as a number; it is stored as text
        if value is None:
            return value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value)

    @field_validator("training_programs", "additional_programs")
    @classmethod
    def dedupe_programs(cls, value):
        if value is None:
            return value
        return list(dict.fromkeys(v.strip() for v in value if v and v.strip()))


def _strip_full_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("fullName must not be empty")
    return value


class RegistrationCreate(RegistrationFields):
    full_name: str
    email: EmailStr
    status: RegistrationStatus = RegistrationStatus.UPCOMING

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: str) -> str:
        return _strip_full_name(value)


class RegistrationUpdate(RegistrationFields):
    """Partial edit of a registration; status is changed via StatusUpdate"""

    full_name: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _strip_full_name(value)


class StatusUpdate(CamelModel):
    status: RegistrationStatus
    is_expired: Optional[bool] = None


class BatchStatusUpdate(CamelModel):
    ids: List[str]
    status: RegistrationStatus


class RegistrationRead(CamelModel):
    id: uuid.UUID
    ticket_no: Optional[int] = None
    full_name: str
    email: str
    phone_number: Optional[str] = None
    dob: Optional[date] = None
    experience: Optional[str] = None
    institution: Optional[str] = None
    call_date_time: Optional[datetime] = None
    hear_about_us: Optional[str] = None
    current_profession: Optional[str] = None
    specialization: Optional[str] = None
    learning_goals: Optional[str] = None
    training_programs: List[str] = []
    additional_programs: List[str] = []
    upload_id: Optional[str] = None
    status: RegistrationStatus
    is_expired: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def serialize_registration(registration: Registration) -> dict:
    """Render a Registration as the camelCase JSON document returned by the API"""
    return RegistrationRead.model_validate(registration).model_dump(
        mode="json", by_alias=True
    )
