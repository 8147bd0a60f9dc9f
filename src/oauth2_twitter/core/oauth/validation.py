"""
Validation utilities for the OAuth engine.

All validation functions raise InvalidConfigError with descriptive
messages when validation fails.

Example:
    >>> validate_url("http://example.com", "token_base_url", require_https=True)
    InvalidConfigError: Invalid 'token_base_url': URL must use HTTPS scheme
    (got 'http://example.com')
"""

from __future__ import annotations

import urllib.parse

from .exceptions import InvalidConfigError

# =============================================================================
# TYPE VALIDATION
# =============================================================================


def validate_type(value: object, expected_type: type | tuple[type, ...], field_name: str) -> None:
    """Validate that value is of expected type.

    Args:
        value: The value to validate
        expected_type: Type or tuple of types to check against
        field_name: Name of the field (for error messages)

    Raises:
        InvalidConfigError: If value is not of expected type
    """
    if not isinstance(value, expected_type):
        type_names = (
            expected_type.__name__
            if isinstance(expected_type, type)
            else " or ".join(t.__name__ for t in expected_type)
        )
        raise InvalidConfigError(
            field_name, value, f"must be {type_names}, got {type(value).__name__}"
        )


def validate_string(
    value: object,
    field_name: str,
    allow_empty: bool = False,
    secret: bool = False,
) -> str:
    """Validate that value is a string (optionally non-empty).

    Args:
        value: The value to validate
        field_name: Name of the field (for error messages)
        allow_empty: If True, empty strings are allowed
        secret: If True, the value is masked in the raised error

    Returns:
        The validated string

    Raises:
        InvalidConfigError: If value is not a string or is empty when not allowed
    """
    if not isinstance(value, str):
        shown = "***" if secret and value is not None else value
        raise InvalidConfigError(field_name, shown, f"must be str, got {type(value).__name__}")

    if not allow_empty and not value:
        raise InvalidConfigError(field_name, value, "must be a non-empty string")

    return value


# =============================================================================
# RANGE VALIDATION
# =============================================================================


def validate_range(
    value: int | float,
    field_name: str,
    min_value: int | float | None = None,
    max_value: int | float | None = None,
) -> None:
    """Validate that a number is within specified range.

    Args:
        value: The value to validate
        field_name: Name of the field (for error messages)
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive)

    Raises:
        InvalidConfigError: If value is outside range
    """
    # bool is an int subclass, but True is never a meaningful length or timeout
    if isinstance(value, bool):
        raise InvalidConfigError(field_name, value, "must be a number, got bool")
    validate_type(value, (int, float), field_name)

    if min_value is not None and value < min_value:
        raise InvalidConfigError(field_name, value, f"must be at least {min_value}")

    if max_value is not None and value > max_value:
        raise InvalidConfigError(field_name, value, f"must be at most {max_value}")


# =============================================================================
# FORMAT VALIDATION
# =============================================================================


def validate_url(value: object, field_name: str, require_https: bool = False) -> str:
    """Validate that value is a well-formed absolute URL.

    Args:
        value: URL string to validate
        field_name: Name of the field (for error messages)
        require_https: If True, only HTTPS URLs are allowed

    Returns:
        The validated URL string

    Raises:
        InvalidConfigError: If URL is malformed or has wrong scheme
    """
    url = validate_string(value, field_name)

    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError as e:
        raise InvalidConfigError(field_name, url, f"malformed URL: {e}") from e

    if not parsed.scheme or not parsed.netloc:
        raise InvalidConfigError(field_name, url, "URL must have scheme and netloc")

    if require_https and parsed.scheme != "https":
        raise InvalidConfigError(field_name, url, "URL must use HTTPS scheme")

    return url


def validate_scopes(value: object, field_name: str = "scopes") -> tuple[str, ...]:
    """Validate an ordered sequence of scope strings.

    A bare string is rejected: iterating it would yield characters.

    Returns:
        The scopes as a tuple

    Raises:
        InvalidConfigError: If value is not a sequence of non-empty strings
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidConfigError(field_name, value, "must be a list or tuple of strings")

    for index, scope in enumerate(value):
        validate_string(scope, f"{field_name}[{index}]")

    return tuple(value)


__all__ = [
    "validate_type",
    "validate_string",
    "validate_range",
    "validate_url",
    "validate_scopes",
]
