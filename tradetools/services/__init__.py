"""
Tradetools Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from tradetools.services.base import (
    BaseService,
    ConfigurationError,
    ExternalAPIError,
    ServiceError,
    ValidationError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ValidationError",
    "ExternalAPIError",
    "ConfigurationError",
]
