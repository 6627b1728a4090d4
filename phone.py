"""Phone number normalization and parsing."""

import logging
from typing import Optional, Protocol

import phonenumbers
from phonenumbers import NumberParseException
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Region codes phonenumbers uses for numbers without a country
NON_GEOGRAPHIC_REGIONS = frozenset({"001", "ZZ"})


class PhoneQuery(BaseModel):
    raw_input: str
    verbose: bool = False


class ParsedPhone(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    country: Optional[str] = None
    national_number: str = ""
    e164: str = ""


class PhoneParser(Protocol):
    def parse(self, text: str) -> Optional[ParsedPhone]:
        ...


def normalize_phone(raw: str) -> str:
    """Add a leading '+' if missing. Nothing else is reformatted."""
    return raw if raw.startswith("+") else f"+{raw}"


class PhonenumbersParser:
    """PhoneParser backed by the phonenumbers library."""

    def parse(self, text: str) -> Optional[ParsedPhone]:
        try:
            parsed = phonenumbers.parse(text, None)
        except NumberParseException as e:
            logger.debug(f"Unparsable phone input: {e.error_type}")
            return None

        region = phonenumbers.region_code_for_number(parsed)
        if region in NON_GEOGRAPHIC_REGIONS:
            region = None

        return ParsedPhone(
            is_valid=phonenumbers.is_valid_number(parsed),
            country=region,
            national_number=phonenumbers.national_significant_number(parsed),
            e164=phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164),
        )
