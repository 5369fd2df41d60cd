"""Shared validation utilities"""

import re
from typing import Optional


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number to E.164-like form.

    Args:
        phone: Phone number string in various formats ("+39 333 123 4567", "333-1234567")

    Returns:
        "+" followed by digits when an international prefix was given, digits otherwise

    Raises:
        ValueError: If the number has fewer than 6 or more than 15 digits
    """
    if not phone:
        return phone

    international = phone.strip().startswith(("+", "00"))
    digits = re.sub(r"\D", "", phone)
    if phone.strip().startswith("00"):
        digits = digits[2:]

    if not 6 <= len(digits) <= 15:
        raise ValueError("Phone number must contain between 6 and 15 digits")

    return f"+{digits}" if international else digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_geo_location(value: Optional[str]) -> Optional[str]:
    """Validate a "latitude,longitude" pair and normalize spacing."""
    if not value:
        return value

    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise ValueError("Geo location must be 'latitude,longitude'")

    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError("Geo location coordinates must be numbers") from None

    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise ValueError("Geo location coordinates out of range")

    return f"{parts[0]},{parts[1]}"


def validate_choice(value: Optional[str], choices: tuple[str, ...], label: str) -> Optional[str]:
    if value is None:
        return value
    if value not in choices:
        raise ValueError(f"Invalid {label} '{value}', expected one of {', '.join(choices)}")
    return value
