"""Standardized error handling patterns for contactcore."""

from typing import Any, Dict, Optional


class ContactCoreError(Exception):
    """Base exception for all contactcore errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}


class ValidationError(ContactCoreError):
    """Error from contact input validation."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Any = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="validation_error", context=context)
        self.field_name = field_name
        self.field_value = field_value


class ConfigurationError(ContactCoreError):
    """Error from configuration or parameter validation."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="configuration_error", context=context)
        self.config_key = config_key


class MergeError(ContactCoreError):
    """Error raised when a merge cannot be suggested."""

    def __init__(
        self,
        message: str,
        group_size: int = 0,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code="merge_error", context=context)
        self.group_size = group_size

