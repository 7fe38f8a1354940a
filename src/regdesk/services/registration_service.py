"""Registration service for managing registration records"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from regdesk.models.registration import (
    Registration,
    RegistrationCreate,
    RegistrationStatus,
    RegistrationUpdate,
    is_expired_for,
)
from regdesk.services.exceptions import RegistrationNotFoundError, StoreError
from regdesk.services.query_service import QueryResult, RegistrationQuery, apply_query
from regdesk.services.sequence_service import TICKET_SEQUENCE, SequenceService

logger = logging.getLogger(__name__)


def parse_registration_id(value) -> uuid.UUID:
    """Parse a registration id, raising ValueError if it is not a UUID"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid registration id: {value}") from None


def parse_registration_ids(raw: str) -> List[uuid.UUID]:
    """Parse a comma separated id list, dropping blanks and duplicates"""
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    if not ids:
        raise ValueError("At least one registration id is required")
    return list(dict.fromkeys(parse_registration_id(part) for part in ids))


class RegistrationService:
    """Service for managing registrations"""

    def __init__(self, db_session: Session, ticket_sequence_start: int = 0):
        self.db = db_session
        self.sequence = SequenceService(db_session, start=ticket_sequence_start)

    def list_registrations(self) -> List[Registration]:
        """Get all registrations, newest first"""
        try:
            stmt = select(Registration).order_by(col(Registration.created_at).desc())
            return list(self.db.exec(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching registrations: {e}")
            raise StoreError("Failed to fetch registrations") from e

    def query_registrations(self, query: RegistrationQuery) -> QueryResult:
        """Filter, sort and paginate the stored registrations"""
        return apply_query(self.list_registrations(), query)

    def get_registration(self, registration_id: uuid.UUID) -> Registration:
        """Get a registration by ID, raising RegistrationNotFoundError if absent"""
        try:
            registration = self.db.get(Registration, registration_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching registration {registration_id}: {e}")
            raise StoreError("Failed to fetch registration") from e

        if not registration:
            raise RegistrationNotFoundError(registration_id)
        return registration

    def get_registrations_by_ids(
        self, registration_ids: Iterable[uuid.UUID]
    ) -> List[Registration]:
        """Get the registrations that exist among the given IDs, in request order"""
        registration_ids = list(registration_ids)
        if not registration_ids:
            return []
        try:
            stmt = select(Registration).where(
                col(Registration.id).in_(registration_ids)
            )
            found = {r.id: r for r in self.db.exec(stmt).all()}
        except SQLAlchemyError as e:
            logger.error(f"Error fetching registrations {registration_ids}: {e}")
            raise StoreError("Failed to fetch registrations") from e

        return [found[rid] for rid in registration_ids if rid in found]

    def create_registration(self, data: RegistrationCreate) -> Registration:
        """
        Create a new registration and assign it the next ticket number.

        Args:
            data: Validated registration payload

        Returns:
            Registration: The created registration

        Raises:
            StoreError: If the registration could not be saved
        """
        values = data.model_dump(exclude_none=True)
        values.setdefault("training_programs", [])
        values.setdefault("additional_programs", [])

        try:
            registration = Registration(
                **values,
                ticket_no=self.sequence.next_value(TICKET_SEQUENCE),
                is_expired=is_expired_for(data.status),
            )
            self.db.add(registration)
            self.db.commit()
            self.db.refresh(registration)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating registration for {data.email}: {e}")
            raise StoreError("Failed to register") from e

        logger.info(
            f"Created registration {registration.id} with ticket {registration.ticket_no}"
        )
        return registration

    def update_status(
        self, registration_id: uuid.UUID, status: RegistrationStatus
    ) -> Registration:
        """Set the status of one registration; is_expired follows the status"""
        registration = self.get_registration(registration_id)
        self._apply_status(registration, status)

        try:
            self.db.add(registration)
            self.db.commit()
            self.db.refresh(registration)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating status of {registration_id}: {e}")
            raise StoreError("Failed to update status") from e

        logger.info(f"Registration {registration_id} status set to {status.value}")
        return registration

    def update_status_batch(
        self, registration_ids: List[uuid.UUID], status: RegistrationStatus
    ) -> List[Registration]:
        """
        Set the status of several registrations in one transaction.

        Either every registration is updated or none is: if any ID does not
        exist RegistrationNotFoundError is raised before anything is written.
        """
        registrations = self.get_registrations_by_ids(registration_ids)
        found = {r.id for r in registrations}
        missing = [rid for rid in registration_ids if rid not in found]
        if missing:
            raise RegistrationNotFoundError(", ".join(str(m) for m in missing))

        for registration in registrations:
            self._apply_status(registration, status)
            self.db.add(registration)

        try:
            self.db.commit()
            for registration in registrations:
                self.db.refresh(registration)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating status of {len(registrations)} registrations: {e}")
            raise StoreError("Failed to update status") from e

        logger.info(
            f"Set status {status.value} on {len(registrations)} registrations"
        )
        return registrations

    def update_registration(
        self, registration_id: uuid.UUID, data: RegistrationUpdate
    ) -> Registration:
        """Apply a partial edit of the general (non-status) fields"""
        registration = self.get_registration(registration_id)

        updated_fields = data.model_dump(exclude_unset=True)
        for name in ("full_name", "email", "training_programs", "additional_programs"):
            # These columns are not nullable
            if name in updated_fields and updated_fields[name] is None:
                del updated_fields[name]

        for name, value in updated_fields.items():
            setattr(registration, name, value)
        registration.updated_at = datetime.now(timezone.utc)

        try:
            self.db.add(registration)
            self.db.commit()
            self.db.refresh(registration)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating registration {registration_id}: {e}")
            raise StoreError("Failed to update registration") from e

        logger.info(
            f"Updated registration {registration_id} fields: {sorted(updated_fields)}"
        )
        return registration

    def delete_registration(self, registration_id: uuid.UUID) -> None:
        """Permanently delete a registration"""
        registration = self.get_registration(registration_id)

        try:
            self.db.delete(registration)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting registration {registration_id}: {e}")
            raise StoreError("Failed to delete registration") from e

        logger.info(f"Deleted registration {registration_id}")

    @staticmethod
    def _apply_status(registration: Registration, status: RegistrationStatus) -> None:
        registration.status = status
        registration.is_expired = is_expired_for(status)
        registration.updated_at = datetime.now(timezone.utc)
