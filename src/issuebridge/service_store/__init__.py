"""Service Store - Persistent configuration of issue tracker integrations."""

from issuebridge.service_store.exceptions import (
    ServiceExistsError,
    ServiceNotFoundError,
    ServiceStoreError,
)
from issuebridge.service_store.models import ServiceRecord
from issuebridge.service_store.store import ServiceStore, merge_properties

__all__ = [
    "ServiceExistsError",
    "ServiceNotFoundError",
    "ServiceRecord",
    "ServiceStore",
    "ServiceStoreError",
    "merge_properties",
]
