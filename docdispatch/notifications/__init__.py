"""Repository dispatch delivery.

This module provides:
- DispatchService: replays a report as repository dispatch events
- GhCliClient / RestApiClient: transports behind the DispatchClient interface
- Payload builders for basic and enhanced client payloads
"""

from .clients import DispatchClient, GhCliClient, RestApiClient, build_client
from .models import (
    DispatchAuthenticationError,
    DispatchDeliveryError,
    DispatchError,
    DispatchOutcome,
    DispatchResponse,
    DispatchRunResult,
)
from .payloads import build_basic_payload, build_enhanced_payload, build_request_body
from .service import PACING_SECONDS, DispatchService

__all__ = [
    # Service
    "DispatchService",
    "PACING_SECONDS",
    # Transports
    "DispatchClient",
    "GhCliClient",
    "RestApiClient",
    "build_client",
    # Payloads
    "build_basic_payload",
    "build_enhanced_payload",
    "build_request_body",
    # Models
    "DispatchOutcome",
    "DispatchResponse",
    "DispatchRunResult",
    # Exceptions
    "DispatchError",
    "DispatchDeliveryError",
    "DispatchAuthenticationError",
]
