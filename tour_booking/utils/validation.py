"""
Validation utilities for the booking forms.
"""

import re
from typing import Dict, Optional, Tuple

from ..core.models.catalog import Country

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
DIGITS_PATTERN = re.compile(r"[0-9]+")


class ValidationUtils:
    """Validation utilities for form input."""

    @staticmethod
    def validate_email(email: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate an email address.

        Args:
            email: Email address as typed

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not email or not email.strip():
            return False, "Email is required"

        if not EMAIL_PATTERN.match(email.strip()):
            return False, "Please enter a valid email address"

        if ".." in email:
            return False, "Email cannot contain consecutive dots"

        if email.startswith(".") or email.startswith("@"):
            return False, "Please enter a valid email address"

        return True, None

    @staticmethod
    def validate_phone(
        phone: Optional[str],
        country: Optional[Country],
        required: bool = False,
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate a sanitised phone number against the selected country.

        Args:
            phone: Digits-only phone number
            country: Selected country, if any
            required: Whether the form requires a phone number

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not phone:
            if required:
                return False, "Phone number is required"
            return True, None

        if not DIGITS_PATTERN.fullmatch(phone):
            return False, "Phone number can only contain digits"

        if country is None:
            return False, "Invalid country selected"

        return True, None

    @staticmethod
    def validate_name(name: Optional[str]) -> Tuple[bool, Optional[str]]:
        """Validate that a name was entered."""
        if not name or not name.strip():
            return False, "Name is required"
        if len(name.strip()) > 100:
            return False, "Name is too long"
        return True, None

    @staticmethod
    def collect_errors(**checks: Tuple[bool, Optional[str]]) -> Dict[str, str]:
        """Turn named validation results into a field -> message mapping."""
        return {
            field: message or "Invalid value"
            for field, (valid, message) in checks.items()
            if not valid
        }
