"""
Service-level exceptions.

Every rule violation raised by the service layer is a subclass of
``PetClinicError`` so the API layer can map each kind to an HTTP status
in one place (see ``app.main``).  Anything else that escapes a service
(for example a storage failure) is not interpreted and surfaces as an
internal error.
"""


class PetClinicError(Exception):
    """Base class for all service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PetClinicError):
    """A referenced owner (or pet type) does not exist."""


class BusinessRuleError(PetClinicError):
    """A semantic precondition of the request failed."""


class DuplicateError(PetClinicError):
    """The request conflicts with other stored data (telephone already in use)."""
