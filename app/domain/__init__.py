"""Domain layer: invalidation events and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.events import InvalidationEvent, normalize_model_name
from app.domain.exceptions import (
    AuthenticationException,
    CmsUnavailableException,
    InvalidWebhookPayloadException,
    ResourceNotFoundException,
    SagenaException,
)

__all__ = [
    # Events
    "InvalidationEvent",
    "normalize_model_name",
    # Exceptions
    "AuthenticationException",
    "CmsUnavailableException",
    "InvalidWebhookPayloadException",
    "ResourceNotFoundException",
    "SagenaException",
]
