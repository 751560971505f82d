"""
Core configuration, logging and error types for Manu-shop.
"""

from .config import Settings, SessionKeys, get_settings, reset_settings
from .exceptions import (
    ErrorCode,
    ManuShopError,
    ConfigurationError,
    ValidationError,
    DatabaseError,
    LLMAPIError,
    CheckoutError,
    EmptyCartError
)

__all__ = [
    'Settings',
    'SessionKeys',
    'get_settings',
    'reset_settings',
    'ErrorCode',
    'ManuShopError',
    'ConfigurationError',
    'ValidationError',
    'DatabaseError',
    'LLMAPIError',
    'CheckoutError',
    'EmptyCartError'
]
