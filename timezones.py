"""Country to time zone resolution and best-guess selection."""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Protocol, Sequence

import pytz
from pydantic import BaseModel, ConfigDict, Field

from area_codes import lookup_area_code_timezone

logger = logging.getLogger(__name__)


class CountryInfo(BaseModel):
    name: str
    timezones: List[str] = []


class ZoneOffsets(BaseModel):
    """Offsets in minutes east of UTC. dst_offset equals utc_offset for zones without DST."""

    utc_offset: Optional[int] = None
    dst_offset: Optional[int] = None


class TimeZoneCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    iana_name: str = Field(serialization_alias="timeZone")
    raw_offset_minutes: Optional[int] = Field(default=None, serialization_alias="rawOffsetMin")
    dst_offset_minutes: Optional[int] = Field(default=None, serialization_alias="dstOffsetMin")
    has_dst: bool = Field(default=False, serialization_alias="hasDst")


class TimezoneDatabase(Protocol):
    def get_country(self, iso2: str) -> Optional[CountryInfo]:
        ...

    def get_timezone(self, name: str) -> Optional[ZoneOffsets]:
        ...


def _minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


class PytzTimezoneDatabase:
    """TimezoneDatabase backed by pytz country tables and zone data.

    Offsets are sampled at noon on 1 January and 1 July of the reference
    year, which catches DST in both hemispheres.
    """

    def __init__(self, reference_year: Optional[int] = None):
        # None means the current year, looked up on every call
        self.reference_year = reference_year

    def sample_year(self) -> int:
        return self.reference_year or datetime.now().year

    def get_country(self, iso2: str) -> Optional[CountryInfo]:
        code = iso2.upper()
        if code not in pytz.country_names:
            return None
        zones = pytz.country_timezones[code] if code in pytz.country_timezones else []
        return CountryInfo(name=pytz.country_names[code], timezones=list(zones))

    def get_timezone(self, name: str) -> Optional[ZoneOffsets]:
        year = self.sample_year()
        try:
            tz = pytz.timezone(name)
        except pytz.UnknownTimeZoneError:
            return None

        samples = [
            tz.localize(datetime(year, 1, 1, 12)),
            tz.localize(datetime(year, 7, 1, 12)),
        ]
        standard = [s for s in samples if not s.dst()]
        if standard:
            raw = standard[0].utcoffset()
        else:
            raw = min(s.utcoffset() for s in samples)
        shifted = [s.utcoffset() for s in samples if s.utcoffset() != raw]
        dst = shifted[0] if shifted else raw
        return ZoneOffsets(utc_offset=_minutes(raw), dst_offset=_minutes(dst))


def has_dst(raw_offset: Optional[int], dst_offset: Optional[int]) -> bool:
    # Zero minutes is a real offset, only None means unknown
    return dst_offset is not None and dst_offset != raw_offset


def resolve_country_timezones(country_code: Optional[str], db: TimezoneDatabase) -> List[TimeZoneCandidate]:
    """
    List the distinct time zones of a country, in the order the database gives them.

    Args:
        country_code: ISO-3166 alpha-2 code, or None
        db: country/zone lookup

    Returns:
        One TimeZoneCandidate per zone name; empty when the country is
        missing or unknown. Zones the database cannot resolve are kept
        with no offsets.
    """
    if not country_code:
        return []
    country = db.get_country(country_code)
    if country is None:
        return []

    unique = {}
    for name in country.timezones:
        if not name or name in unique:
            continue
        offsets = db.get_timezone(name)
        raw = offsets.utc_offset if offsets else None
        dst = offsets.dst_offset if offsets else None
        unique[name] = TimeZoneCandidate(
            iana_name=name,
            raw_offset_minutes=raw,
            dst_offset_minutes=dst,
            has_dst=has_dst(raw, dst),
        )
    return list(unique.values())


def select_best_timezone(
    country_code: Optional[str],
    national_number: Optional[str],
    candidates: Sequence[TimeZoneCandidate],
) -> Optional[str]:
    """
    Pick one zone for a number.

    A country with a single zone always wins over the area code table; the
    table is only consulted to break ties between several candidates.
    """
    if not country_code:
        return None
    if len(candidates) == 1:
        return candidates[0].iana_name

    hinted = lookup_area_code_timezone(country_code, national_number)
    if hinted:
        return hinted

    return candidates[0].iana_name if candidates else None

