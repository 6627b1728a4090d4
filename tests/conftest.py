"""Shared fixtures for the API and lookup tests."""
import pytest
from fastapi.testclient import TestClient

from main import app, get_phone_parser, get_timezone_db
from phone import ParsedPhone
from stubs import StubPhoneParser, StubTimezoneDatabase
from timezones import CountryInfo, ZoneOffsets


@pytest.fixture
def tz_db():
    return StubTimezoneDatabase(
        countries={
            "US": CountryInfo(
                name="United States",
                timezones=["America/New_York", "America/Chicago", "America/Denver", "America/Los_Angeles"],
            ),
            "CA": CountryInfo(name="Canada", timezones=["America/St_Johns", "America/Toronto", "America/Vancouver"]),
            "JP": CountryInfo(name="Japan", timezones=["Asia/Tokyo"]),
            "AQ": CountryInfo(name="Antarctica", timezones=[]),
            "NZ": CountryInfo(name="New Zealand", timezones=["Pacific/Auckland", "Pacific/Unlisted"]),
        },
        zones={
            "America/New_York": ZoneOffsets(utc_offset=-300, dst_offset=-240),
            "America/Chicago": ZoneOffsets(utc_offset=-360, dst_offset=-300),
            "America/Denver": ZoneOffsets(utc_offset=-420, dst_offset=-360),
            "America/Los_Angeles": ZoneOffsets(utc_offset=-480, dst_offset=-420),
            "America/St_Johns": ZoneOffsets(utc_offset=-210, dst_offset=-150),
            "America/Toronto": ZoneOffsets(utc_offset=-300, dst_offset=-240),
            "America/Vancouver": ZoneOffsets(utc_offset=-480, dst_offset=-420),
            "Asia/Tokyo": ZoneOffsets(utc_offset=540, dst_offset=540),
            "Pacific/Auckland": ZoneOffsets(utc_offset=720, dst_offset=780),
        },
    )


@pytest.fixture
def phone_parser():
    return StubPhoneParser({
        "+2125551234": ParsedPhone(
            is_valid=True, country="US", national_number="2125551234", e164="+12125551234"
        ),
        "+12125551234": ParsedPhone(
            is_valid=True, country="US", national_number="2125551234", e164="+12125551234"
        ),
        "+19995551234": ParsedPhone(
            is_valid=True, country="US", national_number="9995551234", e164="+19995551234"
        ),
        "+819012345678": ParsedPhone(
            is_valid=True, country="JP", national_number="9012345678", e164="+819012345678"
        ),
        "+80012345678": ParsedPhone(
            is_valid=True, country=None, national_number="12345678", e164="+80012345678"
        ),
        "+672123456": ParsedPhone(
            is_valid=True, country="AQ", national_number="123456", e164="+672123456"
        ),
        "+6421123456": ParsedPhone(
            is_valid=True, country="NZ", national_number="21123456", e164="+6421123456"
        ),
        "+15555555555": ParsedPhone(
            is_valid=False, country="US", national_number="5555555555", e164="+15555555555"
        ),
    })


@pytest.fixture
def client(phone_parser, tz_db):
    app.dependency_overrides[get_phone_parser] = lambda: phone_parser
    app.dependency_overrides[get_timezone_db] = lambda: tz_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
