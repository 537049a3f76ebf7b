"""
Indicator Engine Services

Each service has a defined interface (contract) and implementation.
"""

from indicator_engine.services.base import BaseService, ServiceError, ValidationError

__all__ = ["BaseService", "ServiceError", "ValidationError"]
