"""Custom exceptions for Service Store."""


class ServiceStoreError(Exception):
    """Base exception for Service Store errors."""


class ServiceNotFoundError(ServiceStoreError):
    """Service record with given ID or type does not exist."""


class ServiceExistsError(ServiceStoreError):
    """A service of this type is already configured for the project."""
