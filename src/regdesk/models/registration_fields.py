"""Field table describing how each registration field is labelled, edited and sorted"""

from dataclasses import dataclass
from typing import Optional, Tuple

from regdesk.models.field_kind import SORT_TYPE_BY_KIND, FieldKind, SortType
from regdesk.models.registration import RegistrationStatus


@dataclass(frozen=True)
class FieldSpec:
    name: str  # API name, e.g. "fullName"
    attr: str  # Registration attribute, e.g. "full_name"
    label: str
    kind: FieldKind
    editable: bool = True
    exported: bool = True
    options: Optional[Tuple[str, ...]] = None
    true_text: str = "Yes"
    false_text: str = "No"

    @property
    def sort_type(self) -> SortType:
        return SORT_TYPE_BY_KIND[self.kind]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "kind": self.kind.value,
            "editable": self.editable,
            "options": list(self.options) if self.options else None,
        }


REGISTRATION_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("id", "id", "Internal ID", FieldKind.ID, editable=False),
    FieldSpec("ticketNo", "ticket_no", "Ticket No.", FieldKind.NUMBER, editable=False),
    FieldSpec("fullName", "full_name", "Full Name", FieldKind.TEXT),
    FieldSpec("email", "email", "Email Address", FieldKind.EMAIL),
    FieldSpec("phoneNumber", "phone_number", "Phone Number", FieldKind.PHONE),
    FieldSpec("dob", "dob", "Date of Birth", FieldKind.DATE),
    FieldSpec("experience", "experience", "Professional Experience", FieldKind.TEXT),
    FieldSpec("institution", "institution", "Institution", FieldKind.TEXT),
    FieldSpec("callDateTime", "call_date_time", "Registration Date", FieldKind.DATETIME),
    FieldSpec("hearAboutUs", "hear_about_us", "Heard About Us", FieldKind.SELECT),
    FieldSpec(
        "currentProfession", "current_profession", "Current Profession", FieldKind.SELECT
    ),
    FieldSpec(
        "specialization", "specialization", "Area of Specialization", FieldKind.SELECT
    ),
    FieldSpec("learningGoals", "learning_goals", "Learning Goals", FieldKind.TEXTAREA),
    FieldSpec(
        "trainingPrograms", "training_programs", "Training Programs", FieldKind.MULTISELECT
    ),
    FieldSpec(
        "additionalPrograms",
        "additional_programs",
        "Additional Programs",
        FieldKind.MULTISELECT,
    ),
    FieldSpec("uploadId", "upload_id", "ID Card Upload", FieldKind.FILE),
    FieldSpec(
        "status",
        "status",
        "Training Status",
        FieldKind.SELECT,
        editable=False,
        options=tuple(s.value for s in RegistrationStatus),
    ),
    FieldSpec(
        "isExpired",
        "is_expired",
        "Ticket State",
        FieldKind.BOOLEAN,
        editable=False,
        true_text="Expired",
        false_text="Active",
    ),
    FieldSpec(
        "createdAt",
        "created_at",
        "Created At",
        FieldKind.DATETIME,
        editable=False,
        exported=False,
    ),
    FieldSpec(
        "updatedAt",
        "updated_at",
        "Updated At",
        FieldKind.DATETIME,
        editable=False,
        exported=False,
    ),
)

FIELDS_BY_NAME = {spec.name: spec for spec in REGISTRATION_FIELDS}

EXPORT_FIELDS: Tuple[FieldSpec, ...] = tuple(
    spec for spec in REGISTRATION_FIELDS if spec.exported
)


def get_field(name: str) -> FieldSpec:
    """Look up a field by its API name, raising ValueError for unknown names"""
    try:
        return FIELDS_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown registration field: {name}") from None
