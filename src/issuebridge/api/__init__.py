"""REST API for IssueBridge."""

from issuebridge.api.app import app, create_app
from issuebridge.api.models import (
    APIResponse,
    DispatchResponse,
    ServiceResponse,
    ServiceUpdate,
)

__all__ = [
    "APIResponse",
    "DispatchResponse",
    "ServiceResponse",
    "ServiceUpdate",
    "app",
    "create_app",
]
