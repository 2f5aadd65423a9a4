"""Caller-side computation layer — geocoding, time zone lookup, and report assembly."""

import logging
from datetime import datetime

import httpx
from pytz import UnknownTimeZoneError, timezone, utc
from timezonefinder import TimezoneFinder

from qiblafinder.config import DEFAULT_USER_AGENT
from qiblafinder.direction import DEFAULT_ALIGNMENT_THRESHOLD, compute_direction
from qiblafinder.models import (
    CalculationMethod,
    GeoCoordinate,
    Madhab,
    ObserverContext,
    QiblaReport,
    QueryInput,
)
from qiblafinder.navigator import current_prayer, next_prayer
from qiblafinder.prayer_times import compute_schedule

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()


class GeocodingError(Exception):
    """Geocoder call failure."""


def _geocode_nominatim(
    address: str, lang: str = "en", user_agent: str = DEFAULT_USER_AGENT
) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1, "accept-language": lang}
    headers = {"User-Agent": user_agent}
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers=headers,
        timeout=10,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def resolve_timezone(coordinate: GeoCoordinate) -> str:
    """IANA zone name at coordinate. Open ocean and unknown zones fall back to UTC."""
    tz_str = _tf.timezone_at(lat=coordinate.latitude, lng=coordinate.longitude)
    if tz_str is None:
        logger.warning("No time zone at %s, using UTC", coordinate)
        return "UTC"
    try:
        timezone(tz_str)
    except UnknownTimeZoneError:
        logger.warning("pytz does not know %s, using UTC", tz_str)
        return "UTC"
    return tz_str


def observer_at(
    coordinate: GeoCoordinate,
    date_str: str | None = None,
    address_display: str = "",
    now: datetime | None = None,
) -> ObserverContext:
    """Build an ObserverContext for a known coordinate (e.g. browser geolocation).

    Args:
        coordinate: Observer position.
        date_str: Local calendar date "YYYY-MM-DD"; today in the local zone if None.
        address_display: Label shown in the UI.
        now: Aware instant used for "today"; the current time if None.
    """
    tz_str = resolve_timezone(coordinate)
    if date_str:
        local_date = datetime.strptime(date_str, "%Y-%m-%d").date()
    else:
        instant = now if now is not None else datetime.now(utc)
        local_date = instant.astimezone(timezone(tz_str)).date()
    return ObserverContext(
        coordinate=coordinate,
        timezone=tz_str,
        local_date=local_date,
        address_display=address_display
        or f"{coordinate.latitude:.4f}, {coordinate.longitude:.4f}",
    )


def geocode_address(
    address: str,
    date_str: str | None = None,
    lang: str = "en",
    user_agent: str = DEFAULT_USER_AGENT,
) -> ObserverContext:
    """Resolve an address string and date string to an ObserverContext.

    Args:
        address: Address string in any language.
        date_str: Local date in "YYYY-MM-DD" format; today if None.
        lang: Preferred language for the returned display name.
        user_agent: Sent to Nominatim, which requires one per application.

    Returns:
        ObserverContext containing the coordinate, IANA zone and local date.

    Raises:
        GeocodingError: On API error or when address cannot be found.
        ValueError: date_str is not "YYYY-MM-DD".
    """
    try:
        result = _geocode_nominatim(address, lang=lang, user_agent=user_agent)
    except httpx.HTTPError as exc:
        logger.warning("Nominatim request failed for %r: %s", address, exc)
        raise GeocodingError(f"Geocoder request failed: {exc}") from exc
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, address_display = result
    logger.info("Geocoded %r to %.4f, %.4f", address, lat, lng)
    return observer_at(GeoCoordinate(lat, lng), date_str, address_display)


def build_report(
    context: ObserverContext,
    method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE,
    madhab: Madhab = Madhab.SHAFI,
    now: datetime | None = None,
    heading: float | None = None,
    alignment_threshold: float = DEFAULT_ALIGNMENT_THRESHOLD,
    points: int = 8,
) -> QiblaReport:
    """Compute direction and schedule for an already-resolved observer.

    Next/current prayer are only filled in when now falls on the schedule's
    local date; for other dates they stay None.
    """
    if now is None:
        now = datetime.now(utc)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    direction = compute_direction(
        context.coordinate,
        alignment_threshold=alignment_threshold,
        heading=heading,
        points=points,
    )
    schedule = compute_schedule(context.coordinate, context.local_date, method, madhab)

    upcoming = current = None
    local_today = now.astimezone(timezone(context.timezone)).date()
    if schedule is not None and local_today == context.local_date:
        upcoming = next_prayer(schedule, now)
        current = current_prayer(schedule, now)

    return QiblaReport(
        context=context,
        direction=direction,
        schedule=schedule,
        next_prayer=upcoming,
        current_prayer=current,
    )


def run(
    query: QueryInput,
    method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE,
    madhab: Madhab = Madhab.SHAFI,
    now: datetime | None = None,
    lang: str = "en",
) -> QiblaReport:
    """Top-level entry point: takes a QueryInput and returns a QiblaReport.

    Args:
        query: User input (address, date string).
        method: Prayer time calculation method.
        madhab: Asr shadow rule.
        now: Aware instant for next/current prayer; the current time if None.
        lang: Preferred language for the geocoder's display name.

    Returns:
        Fully computed QiblaReport.
    """
    context = geocode_address(query.address, query.date or None, lang=lang)
    return build_report(context, method, madhab, now)
