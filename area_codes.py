"""NANP area code hints used to pick one zone for US/CA numbers."""

from types import MappingProxyType
from typing import Optional

# Partial table: area code -> IANA timezone. Extend as needed.
NANP_TZ_BY_AREACODE = MappingProxyType({
    "212": "America/New_York", "315": "America/New_York", "347": "America/New_York",
    "310": "America/Los_Angeles", "424": "America/Los_Angeles", "702": "America/Los_Angeles",
    "312": "America/Chicago", "214": "America/Chicago",
    "602": "America/Denver", "480": "America/Denver",
    "416": "America/Toronto", "647": "America/Toronto",
    "604": "America/Vancouver", "778": "America/Vancouver",
})

NANP_COUNTRIES = frozenset({"US", "CA"})


def lookup_area_code_timezone(country_code: Optional[str], national_number: Optional[str]) -> Optional[str]:
    """Return the table zone for the number's area code, or None if there is no entry."""
    if country_code not in NANP_COUNTRIES:
        return None
    if not national_number or len(national_number) < 10:
        return None
    return NANP_TZ_BY_AREACODE.get(national_number[:3])
