"""Exception hierarchy for taskboard."""

from enum import Enum


class TaskboardError(Exception):
    """Base exception for taskboard errors."""

    pass


class InvalidMoveError(TaskboardError):
    """A move does not fit the snapshot it is applied to."""

    pass


class FailureKind(str, Enum):
    """Why the persistence API refused or failed a move."""

    VALIDATION = "validation"  # Server-side constraint, e.g. column deleted
    TRANSPORT = "transport"  # Network error or timeout
    SERVER = "server"  # Explicit server error


class PersistenceError(TaskboardError):
    """Base exception raised by persistence backends."""

    kind: FailureKind = FailureKind.SERVER


class TransportError(PersistenceError):
    """The backend could not be reached."""

    kind = FailureKind.TRANSPORT


class ValidationFailure(PersistenceError):
    """The backend rejected the command."""

    kind = FailureKind.VALIDATION
