"""
Custom exceptions for Manu-shop.

This module defines application-specific exceptions that provide
more context and structured error handling throughout the application.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

# Configure logger
logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error codes for categorizing exceptions."""
    # Configuration errors (1000-1999)
    CONFIG_ERROR = 1000
    MISSING_CREDENTIALS = 1001

    # Data validation errors (3000-3999)
    VALIDATION_ERROR = 3000
    MISSING_REQUIRED_FIELD = 3001
    DATA_TYPE_ERROR = 3002

    # API integration errors (4000-4999)
    API_ERROR = 4000
    DATABASE_ERROR = 4001
    REALTIME_ERROR = 4002
    LLM_API_ERROR = 4003

    # Business rule errors (7000-7999)
    CHECKOUT_ERROR = 7000
    EMPTY_CART = 7001

    # Internal errors (9000-9999)
    INTERNAL_ERROR = 9000
    UNEXPECTED_ERROR = 9999


class ManuShopError(Exception):
    """Base exception for all Manu-shop errors."""

    def __init__(
        self,
        message: str = "An error occurred",
        error_code: ErrorCode = ErrorCode.UNEXPECTED_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.original_exception = original_exception

        # Log the error
        self._log_error()

        super().__init__(self.message)

    def _log_error(self) -> None:
        """Log the error with appropriate level and details."""
        log_message = f"{self.error_code.name} ({self.error_code.value}): {self.message}"

        if self.details:
            log_message += f" | Details: {self.details}"

        if self.original_exception:
            log_message += f" | Original exception: {str(self.original_exception)}"

        if self.error_code.value < 2000:  # Configuration errors
            logger.error(log_message)
        elif self.error_code.value < 4000:  # Validation errors
            logger.warning(log_message)
        elif self.error_code.value < 7000:  # API errors
            logger.error(log_message)
        elif self.error_code.value < 9000:  # Business rules
            logger.warning(log_message)
        else:
            logger.critical(log_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary."""
        return {
            "error": True,
            "error_code": self.error_code.value,
            "error_type": self.error_code.name,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(ManuShopError):
    """Exception raised for configuration-related errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        error_code: ErrorCode = ErrorCode.CONFIG_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original_exception=original_exception
        )


class ValidationError(ManuShopError):
    """Exception raised for invalid user input."""

    def __init__(
        self,
        message: str = "Data validation error",
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        validation_errors: Optional[List[Dict[str, Any]]] = None
    ):
        details = details or {}
        if validation_errors:
            details["validation_errors"] = validation_errors
        self.validation_errors = validation_errors or []

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original_exception=original_exception
        )


class DatabaseError(ManuShopError):
    """Exception raised when a call to the hosted database fails."""

    def __init__(
        self,
        message: str = "Database error",
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        table: Optional[str] = None,
        operation: Optional[str] = None
    ):
        details = details or {}
        if table:
            details["table"] = table
        if operation:
            details["operation"] = operation
        self.table = table
        self.operation = operation

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original_exception=original_exception
        )


class LLMAPIError(ManuShopError):
    """Exception raised for chat-completion API errors."""

    def __init__(
        self,
        message: str = "LLM API error",
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        model: Optional[str] = None
    ):
        details = details or {}
        if model:
            details["model"] = model
        self.model = model

        super().__init__(
            message=message,
            error_code=ErrorCode.LLM_API_ERROR,
            details=details,
            original_exception=original_exception
        )


class CheckoutError(ManuShopError):
    """
    Exception raised when checkout fails.

    ``sale_id`` is None when the sale header was never created;
    ``completed_items`` lists the product ids whose line item and stock
    update both went through before the failure.
    """

    def __init__(
        self,
        message: str = "Checkout failed",
        error_code: ErrorCode = ErrorCode.CHECKOUT_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        sale_id: Optional[str] = None,
        completed_items: Optional[List[str]] = None
    ):
        details = details or {}
        self.sale_id = sale_id
        self.completed_items = list(completed_items or [])
        if sale_id:
            details["sale_id"] = sale_id
        if self.completed_items:
            details["completed_items"] = self.completed_items

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original_exception=original_exception
        )


class EmptyCartError(CheckoutError):
    """Exception raised when checking out an empty cart."""

    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message=message, error_code=ErrorCode.EMPTY_CART)
