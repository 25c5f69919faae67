"""Domain exceptions."""


class SynjarError(Exception):
    """Base exception for Synjar."""

    pass


class InvalidStateError(SynjarError):
    """Requested transition is not allowed in the current lifecycle state."""

    pass


class ValidationError(SynjarError):
    """Validation failed for input data."""

    pass


class NotFoundError(SynjarError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f'{resource} "{identifier}" not found')
        self.resource = resource
        self.identifier = identifier
