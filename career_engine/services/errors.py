"""Exceptions raised by the career intelligence engine."""


class CareerEngineError(Exception):
    """Base class for engine errors."""


class NotFoundError(CareerEngineError):
    """A requested user or role does not exist. Never retried."""

    def __init__(self, resource: str, identifier: str) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier!r} not found")


class CacheUnavailableError(CareerEngineError):
    """The cache backend could not be reached."""
