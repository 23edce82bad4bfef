"""
Validation of conversion options.
"""


class ValidationError(Exception):
    """Raised when conversion options are invalid."""

    pass


def validate_rate(rate: float) -> None:
    """
    Validate the IMF output tick rate.

    Args:
        rate: Output rate in Hz, integer or fractional

    Raises:
        ValidationError: If rate is not a positive number
    """
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise ValidationError(f"Rate must be a number, got {rate!r}")
    if not rate > 0:
        raise ValidationError(f"Rate must be positive, got {rate}")


def validate_tag_text(value: str, name: str) -> None:
    """
    Validate that a tag field is text.

    Args:
        value: Field value
        name: Field name for error messages

    Raises:
        ValidationError: If value is not a string
    """
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}")
