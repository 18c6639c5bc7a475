"""
Country table for the phone and country pickers.
"""

import re
from typing import Dict, List, Optional

from ...core.models.catalog import Country


class CountryDirectory:
    """Read-only country reference data, loaded once."""

    COUNTRIES = [
        {"id": "nl", "emoji": "🇳🇱", "name": "Netherlands", "code": "+31", "placeholder": "6 12345678"},
        {"id": "us", "emoji": "🇺🇸", "name": "United States", "code": "+1", "placeholder": "201 555 0123"},
        {"id": "gb", "emoji": "🇬🇧", "name": "United Kingdom", "code": "+44", "placeholder": "7400 123456"},
        {"id": "de", "emoji": "🇩🇪", "name": "Germany", "code": "+49", "placeholder": "1512 3456789"},
        {"id": "fr", "emoji": "🇫🇷", "name": "France", "code": "+33", "placeholder": "6 12 34 56 78"},
        {"id": "be", "emoji": "🇧🇪", "name": "Belgium", "code": "+32", "placeholder": "470 12 34 56"},
        {"id": "es", "emoji": "🇪🇸", "name": "Spain", "code": "+34", "placeholder": "612 34 56 78"},
        {"id": "it", "emoji": "🇮🇹", "name": "Italy", "code": "+39", "placeholder": "312 345 6789"},
        {"id": "pt", "emoji": "🇵🇹", "name": "Portugal", "code": "+351", "placeholder": "912 345 678"},
        {"id": "ie", "emoji": "🇮🇪", "name": "Ireland", "code": "+353", "placeholder": "85 012 3456"},
        {"id": "ch", "emoji": "🇨🇭", "name": "Switzerland", "code": "+41", "placeholder": "78 123 45 67"},
        {"id": "at", "emoji": "🇦🇹", "name": "Austria", "code": "+43", "placeholder": "664 123456"},
        {"id": "dk", "emoji": "🇩🇰", "name": "Denmark", "code": "+45", "placeholder": "32 12 34 56"},
        {"id": "se", "emoji": "🇸🇪", "name": "Sweden", "code": "+46", "placeholder": "70 123 45 67"},
        {"id": "no", "emoji": "🇳🇴", "name": "Norway", "code": "+47", "placeholder": "406 12 345"},
        {"id": "fi", "emoji": "🇫🇮", "name": "Finland", "code": "+358", "placeholder": "41 2345678"},
        {"id": "pl", "emoji": "🇵🇱", "name": "Poland", "code": "+48", "placeholder": "512 345 678"},
        {"id": "cz", "emoji": "🇨🇿", "name": "Czech Republic", "code": "+420", "placeholder": "601 123 456"},
        {"id": "gr", "emoji": "🇬🇷", "name": "Greece", "code": "+30", "placeholder": "691 234 5678"},
        {"id": "tr", "emoji": "🇹🇷", "name": "Turkey", "code": "+90", "placeholder": "501 234 56 78"},
        {"id": "ca", "emoji": "🇨🇦", "name": "Canada", "code": "+1", "placeholder": "506 234 5678"},
        {"id": "mx", "emoji": "🇲🇽", "name": "Mexico", "code": "+52", "placeholder": "222 123 4567"},
        {"id": "br", "emoji": "🇧🇷", "name": "Brazil", "code": "+55", "placeholder": "11 96123 4567"},
        {"id": "ar", "emoji": "🇦🇷", "name": "Argentina", "code": "+54", "placeholder": "11 2345 6789"},
        {"id": "cl", "emoji": "🇨🇱", "name": "Chile", "code": "+56", "placeholder": "2 2123 4567"},
        {"id": "co", "emoji": "🇨🇴", "name": "Colombia", "code": "+57", "placeholder": "321 1234567"},
        {"id": "au", "emoji": "🇦🇺", "name": "Australia", "code": "+61", "placeholder": "412 345 678"},
        {"id": "nz", "emoji": "🇳🇿", "name": "New Zealand", "code": "+64", "placeholder": "21 123 4567"},
        {"id": "jp", "emoji": "🇯🇵", "name": "Japan", "code": "+81", "placeholder": "90 1234 5678"},
        {"id": "kr", "emoji": "🇰🇷", "name": "South Korea", "code": "+82", "placeholder": "10 2000 0000"},
        {"id": "cn", "emoji": "🇨🇳", "name": "China", "code": "+86", "placeholder": "131 2345 6789"},
        {"id": "in", "emoji": "🇮🇳", "name": "India", "code": "+91", "placeholder": "81234 56789"},
        {"id": "sg", "emoji": "🇸🇬", "name": "Singapore", "code": "+65", "placeholder": "8123 4567"},
        {"id": "il", "emoji": "🇮🇱", "name": "Israel", "code": "+972", "placeholder": "50 234 5678"},
        {"id": "ae", "emoji": "🇦🇪", "name": "United Arab Emirates", "code": "+971", "placeholder": "50 123 4567"},
        {"id": "za", "emoji": "🇿🇦", "name": "South Africa", "code": "+27", "placeholder": "71 123 4567"},
        {"id": "ng", "emoji": "🇳🇬", "name": "Nigeria", "code": "+234", "placeholder": "802 123 4567"},
        {"id": "eg", "emoji": "🇪🇬", "name": "Egypt", "code": "+20", "placeholder": "100 123 4567"},
        {"id": "ma", "emoji": "🇲🇦", "name": "Morocco", "code": "+212", "placeholder": "650 123456"},
        {"id": "ro", "emoji": "🇷🇴", "name": "Romania", "code": "+40", "placeholder": "712 034 567"},
        {"id": "hu", "emoji": "🇭🇺", "name": "Hungary", "code": "+36", "placeholder": "20 123 4567"},
        {"id": "ua", "emoji": "🇺🇦", "name": "Ukraine", "code": "+380", "placeholder": "50 123 4567"},
        {"id": "hr", "emoji": "🇭🇷", "name": "Croatia", "code": "+385", "placeholder": "92 123 4567"},
        {"id": "lu", "emoji": "🇱🇺", "name": "Luxembourg", "code": "+352", "placeholder": "628 123 456"},
        {"id": "is", "emoji": "🇮🇸", "name": "Iceland", "code": "+354", "placeholder": "611 1234"},
    ]

    # Countries also found by searching for "the"
    THE_PREFIX_IDS = {"nl"}

    def __init__(self, countries: Optional[List[Dict[str, str]]] = None):
        self._countries = [Country(**item) for item in (countries or self.COUNTRIES)]
        self._by_id = {country.id: country for country in self._countries}

    def all(self) -> List[Country]:
        return list(self._countries)

    def find(self, country_id: Optional[str]) -> Optional[Country]:
        """Look up a country by its id (e.g. "nl")."""
        if not country_id:
            return None
        return self._by_id.get(country_id.lower())

    def search(self, query: str) -> List[Country]:
        """
        Countries whose name token, dial code or id starts with ``query``.

        "+31" matches dial codes literally, bare digits ("31") match the code
        digits, and an empty query matches nothing.
        """
        raw = (query or "").strip()
        if not raw:
            return []

        lowered = raw.lower()
        digits = re.sub(r"\D", "", raw)
        matches = []
        for country in self._countries:
            tokens = [t for t in re.split(r"[\s-]+", country.name.lower()) if t]
            if country.id in self.THE_PREFIX_IDS:
                tokens.append("the")
            name_match = any(token.startswith(lowered) for token in tokens)

            if lowered.startswith("+"):
                code_plain = re.sub(r"[\s-]+", "", country.code.lower())
                code_match = code_plain.startswith(re.sub(r"[\s-]+", "", lowered))
            else:
                code_match = bool(digits) and re.sub(r"\D", "", country.code).startswith(digits)

            id_match = country.id.startswith(lowered)

            if name_match or code_match or id_match:
                matches.append(country)
        return matches


countries = CountryDirectory()
