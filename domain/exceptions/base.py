class DomainError(Exception):
    """Base class for every business-rule violation raised by the engine."""


class NotFoundError(DomainError):
    """A team, hackathon or participant id does not resolve."""


class ConflictError(DomainError):
    """The request contradicts the current state of a generation."""


class InvalidInputError(DomainError):
    """The request is rejected before any store access."""
