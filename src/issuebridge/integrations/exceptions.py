"""Custom exceptions for issue tracker integrations."""


class IntegrationError(Exception):
    """Base exception for issue tracker integration errors."""


class InvalidURLError(IntegrationError, ValueError):
    """A configured or computed tracker URL cannot be parsed."""


class ServiceValidationError(IntegrationError):
    """Service configuration failed validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


class UnknownServiceError(IntegrationError):
    """No integration is registered under the given name."""
