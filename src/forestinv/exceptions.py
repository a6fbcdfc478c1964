"""
Custom exceptions for forestinv.
Provides domain-specific error handling with informative messages.

Two kinds of failure reach callers of the analysis engine:
- InsufficientDataError: the inventory has fewer plots than an operation needs
- InvalidArgumentError: a configuration value is outside its valid domain
"""
import math
from typing import Any


class ForestAnalysisError(Exception):
    """Base exception for all forestinv errors."""
    pass


class ConfigurationError(ForestAnalysisError):
    """Raised when there are configuration-related issues."""
    pass


class InsufficientDataError(ForestAnalysisError):
    """Raised when an operation needs more plots than the inventory has."""
    def __init__(self, operation: str, required: int, available: int):
        self.operation = operation
        self.required = required
        self.available = available
        super().__init__(f"Not enough data for '{operation}': requires at least "
                         f"{required} plot(s), inventory has {available}")


class ParameterError(ForestAnalysisError):
    """Raised when parameters are invalid or out of bounds."""
    pass


class InvalidArgumentError(ParameterError):
    """Raised when a caller-supplied configuration value is invalid."""
    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        message = f"Invalid value for parameter '{param_name}': {value}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DataError(ForestAnalysisError):
    """Raised when there are data-related issues."""
    pass


class InvalidDataError(DataError):
    """Raised when data is malformed or invalid."""
    def __init__(self, data_description: str, reason: str):
        self.data_description = data_description
        self.reason = reason
        super().__init__(f"Invalid {data_description}: {reason}")


# Validation utilities
def validate_finite(value: float, param_name: str) -> float:
    """Validate that a value is a finite number.

    Args:
        value: Value to validate
        param_name: Parameter name for error message

    Returns:
        The validated value

    Raises:
        InvalidArgumentError: If value is NaN or infinite
    """
    if not math.isfinite(value):
        raise InvalidArgumentError(param_name, value, "must be a finite number")
    return value


def validate_positive(value: float, param_name: str) -> float:
    """Validate that a value is positive and finite.

    Args:
        value: Value to validate
        param_name: Parameter name for error message

    Returns:
        The validated value

    Raises:
        InvalidArgumentError: If value is not positive
    """
    validate_finite(value, param_name)
    if value <= 0:
        raise InvalidArgumentError(param_name, value, "must be positive")
    return value


def validate_open_unit_interval(value: float, param_name: str) -> float:
    """Validate that a value lies strictly between 0 and 1.

    Raises:
        InvalidArgumentError: If value is not in (0, 1)
    """
    if not 0 < value < 1:
        raise InvalidArgumentError(param_name, value, "must be strictly between 0 and 1")
    return value
