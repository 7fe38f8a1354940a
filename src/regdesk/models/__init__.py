"""Database models for regdesk"""

from regdesk.models.counter import Counter
from regdesk.models.registration import Registration, RegistrationStatus
from regdesk.models.stored_file import StoredFile

__all__ = [
    "Registration",
    "RegistrationStatus",
    "Counter",
    "StoredFile",
]
