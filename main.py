import json
import logging
from functools import lru_cache
from typing import Any, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from phone import PhoneParser, PhonenumbersParser, PhoneQuery, normalize_phone
from timezones import (
    PytzTimezoneDatabase,
    TimezoneDatabase,
    resolve_country_timezones,
    select_best_timezone,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# OPTIONS is answered by the preflight middleware
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET,POST,OPTIONS",
    "access-control-allow-headers": "content-type",
}


class ApiResponse(JSONResponse):
    """Pretty-printed JSON with cache and CORS headers on every response."""

    media_type = "application/json; charset=utf-8"

    def __init__(self, content: Any, status_code: int = 200, headers: Optional[dict] = None, **kwargs):
        merged = {"cache-control": f"public, max-age={settings.cache_max_age}", **CORS_HEADERS}
        merged.update(headers or {})
        super().__init__(content, status_code=status_code, headers=merged, **kwargs)

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


app = FastAPI(
    title="Phone to Timezone API",
    version=settings.service_version,
    default_response_class=ApiResponse,
)


@app.middleware("http")
async def preflight(request: Request, call_next):
    # Any OPTIONS request is a CORS preflight, whatever the path
    if request.method == "OPTIONS":
        return ApiResponse({"ok": True})
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ApiResponse:
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return ApiResponse({"error": message}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> ApiResponse:
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return ApiResponse({"error": "Internal server error"}, status_code=500)


@lru_cache()
def get_phone_parser() -> PhoneParser:
    return PhonenumbersParser()


@lru_cache()
def get_timezone_db() -> TimezoneDatabase:
    return PytzTimezoneDatabase()


async def read_phone_query(request: Request) -> Optional[PhoneQuery]:
    """Phone from ?phone= on GET or the JSON body on POST; None when absent or for other methods."""
    verbose = request.query_params.get("verbose") == "1"

    if request.method == "POST":
        try:
            body = await request.json()
        except ValueError:
            body = None
        phone = body.get("phone") if isinstance(body, dict) else None
    elif request.method == "GET":
        phone = request.query_params.get("phone")
    else:
        phone = None

    if isinstance(phone, int) and not isinstance(phone, bool):
        phone = str(phone)
    if not isinstance(phone, str) or not phone:
        return None
    return PhoneQuery(raw_input=phone, verbose=verbose)


@app.api_route("/", methods=ROUTE_METHODS)
@app.api_route("/health", methods=ROUTE_METHODS)
def health_check():
    return {"ok": True, "name": settings.service_name, "version": settings.service_version}


@app.api_route("/api/timezone", methods=ROUTE_METHODS)
async def phone_timezone(
    request: Request,
    parser: PhoneParser = Depends(get_phone_parser),
    tz_db: TimezoneDatabase = Depends(get_timezone_db),
):
    query = await read_phone_query(request)
    if query is None:
        raise HTTPException(status_code=400, detail='Missing "phone"')

    parsed = parser.parse(normalize_phone(query.raw_input))
    if parsed is None or not parsed.is_valid:
        logger.info("Rejected invalid phone number")
        return {"valid": False, "iana_timezone": None, "country": None, "note": "Invalid phone number"}

    candidates = resolve_country_timezones(parsed.country, tz_db)
    guess = select_best_timezone(parsed.country, parsed.national_number, candidates)
    logger.debug(f"Country {parsed.country}: {len(candidates)} candidate zones, picked {guess}")

    result = {
        "valid": True,
        "iana_timezone": guess or settings.fallback_timezone,
        "country": parsed.country or None,
        "Phone": parsed.e164,
    }

    if query.verbose:
        country = tz_db.get_country(parsed.country) if parsed.country else None
        result["meta"] = {
            "e164": parsed.e164,
            "countryName": country.name if country else None,
            "possibleTimezones": [c.model_dump(by_alias=True, exclude_none=True) for c in candidates],
        }

    return result


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
