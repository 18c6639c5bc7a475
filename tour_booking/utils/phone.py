"""
Phone number sanitising utilities.
"""

import re
from typing import Optional

from ..core.models.catalog import Country


class PhoneNumberParser:
    """Phone helpers for the contact forms."""

    @staticmethod
    def sanitize(value: Optional[str]) -> str:
        """
        Strip everything but digits from typed or pasted input.

        Args:
            value: Raw input, e.g. "+31 (6) 123-45678"

        Returns:
            Digits only, e.g. "31612345678"
        """
        if not value:
            return ""
        return re.sub(r"[^0-9]", "", value)

    @classmethod
    def with_dial_code(cls, phone: str, country: Country) -> str:
        """Prefix the sanitised number with the country's dial code."""
        return f"{country.code}{cls.sanitize(phone)}"
