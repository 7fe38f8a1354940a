"""Exceptions raised by regdesk services"""


class StoreError(Exception):
    """The database rejected or failed a read or write"""


class RegistrationNotFoundError(LookupError):
    def __init__(self, registration_id):
        super().__init__(f"Registration not found: {registration_id}")
        self.registration_id = registration_id


class StoredFileNotFoundError(LookupError):
    def __init__(self, file_id):
        super().__init__(f"File not found: {file_id}")
        self.file_id = file_id


class EmptyExportError(ValueError):
    """No registrations matched an export request"""
