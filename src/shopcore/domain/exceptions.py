"""Domain-level exceptions.

Every failure the core can report is a subclass of DomainException so
callers (CLI, checkout endpoint) can catch them uniformly, while still
telling the kinds apart.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A write collided with existing state (e.g. a duplicate unique key)."""


class TransientStoreError(DomainException):
    """The backing store failed (unreachable, timed out, corrupt payload)."""


class PartialFailureError(DomainException):
    """A multi-step write stopped half way and had to be compensated.

    ``compensated`` is False when undoing the completed steps failed too.
    """

    def __init__(self, message: str, compensated: bool) -> None:
        super().__init__(message)
        self.compensated = compensated


# Failures that mean "the store could not answer", whatever raised them.
STORE_FAILURES = (TransientStoreError, TimeoutError, ConnectionError)
