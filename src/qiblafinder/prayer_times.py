"""Prayer time engine — six daily solar-event times for a date, place and method.

Solar geometry, twilight angles and the high-latitude bounds come from adhanpy.
This module picks the parameters, applies the method and caller minutes and
rounding, keeps the schedule on the observer's solar day near the date line,
and refuses anything that is not strictly ordered.

All datetimes are timezone-aware UTC. A date/place combination with no valid
schedule (polar day or night, or a high-latitude fallback that still cannot
order the six entries) yields None; it is never papered over with defaults.
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from adhanpy.PrayerTimes import PrayerTimes
from adhanpy.calculation import CalculationMethod as AdhanMethod
from adhanpy.calculation.CalculationParameters import (
    CalculationParameters as AdhanParameters,
)
from adhanpy.calculation.HighLatitudeRule import HighLatitudeRule as AdhanHighLatitudeRule
from adhanpy.calculation.Madhab import Madhab as AdhanMadhab

from qiblafinder.methods import get_parameters
from qiblafinder.models import (
    CalculationMethod,
    CalculationParameters,
    DailyPrayerSchedule,
    GeoCoordinate,
    HighLatitudeRule,
    Madhab,
    Prayer,
    PrayerAdjustments,
)
from qiblafinder.timeutil import round_to_minute

logger = logging.getLogger(__name__)

HIGH_LATITUDE_THRESHOLD = 48.0

_UTC = ZoneInfo("UTC")

# Raised by adhanpy or datetime arithmetic when no time exists for the date
_UNSOLVABLE = (ArithmeticError, ValueError, TypeError)


def resolve_high_latitude_rule(
    coordinate: GeoCoordinate,
    params: CalculationParameters,
    override: HighLatitudeRule | None = None,
) -> HighLatitudeRule:
    """Pick the rule bounding Fajr and Isha.

    Explicit override first, then the method's own rule, then middle of the
    night (used both above 48° and as the general safety bound).
    """
    if override is not None:
        return override
    if params.high_latitude_rule is not None:
        return params.high_latitude_rule
    if abs(coordinate.latitude) > HIGH_LATITUDE_THRESHOLD:
        logger.debug(
            "latitude %.4f above %.0f°, bounding twilight by middle of the night",
            coordinate.latitude,
            HIGH_LATITUDE_THRESHOLD,
        )
    return HighLatitudeRule.MIDDLE_OF_THE_NIGHT


def _library_parameters(
    fajr_angle: float,
    isha_angle: float,
    madhab: Madhab,
    rule: HighLatitudeRule,
    moonsighting: bool = False,
) -> AdhanParameters:
    library_params = AdhanParameters(fajr_angle=fajr_angle, isha_angle=isha_angle)
    library_params.madhab = getattr(AdhanMadhab, madhab.name)
    library_params.high_latitude_rule = getattr(AdhanHighLatitudeRule, rule.name)
    if moonsighting:
        # Switches on the seasonal twilight tables and night/7 above 55°
        library_params.method = AdhanMethod.MOON_SIGHTING_COMMITTEE
    return library_params


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _solve(coordinate: GeoCoordinate, day: date, library_params: AdhanParameters):
    times = PrayerTimes(
        (coordinate.latitude, coordinate.longitude),
        datetime(day.year, day.month, day.day),
        calculation_parameters=library_params,
        time_zone=_UTC,
    )
    raw = {
        Prayer.FAJR: _as_utc(times.fajr),
        Prayer.SUNRISE: _as_utc(times.sunrise),
        Prayer.DHUHR: _as_utc(times.dhuhr),
        Prayer.ASR: _as_utc(times.asr),
        Prayer.MAGHRIB: _as_utc(times.maghrib),
        Prayer.ISHA: _as_utc(times.isha),
    }
    if any(when is None for when in raw.values()):
        return None
    return raw


def _solar_day_shift(transit: datetime, day: date, longitude: float) -> int:
    """Whole days to move the computation so transit sits near local noon.

    Close to the date line the library's transit can wrap to the far end of
    the UTC day, which would put the schedule on the neighbouring local date.
    """
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    nominal = midnight + timedelta(hours=12 - longitude / 15)
    if transit - nominal > timedelta(hours=12):
        return -1
    if transit - nominal < timedelta(hours=-12):
        return 1
    return 0


def _is_ordered(times: list[datetime]) -> bool:
    return all(earlier < later for earlier, later in zip(times, times[1:]))


def _compute(
    coordinate: GeoCoordinate,
    day: date,
    method: CalculationMethod,
    params: CalculationParameters,
    madhab: Madhab,
    rule: HighLatitudeRule,
    total: PrayerAdjustments,
) -> dict[Prayer, datetime] | None:
    # Interval methods have no Isha angle; the Fajr angle only feeds the night bounds
    library_params = _library_parameters(
        params.fajr_angle,
        params.isha_angle or params.fajr_angle,
        madhab,
        rule,
        moonsighting=method is CalculationMethod.MOONSIGHTING_COMMITTEE,
    )

    solar_day = day
    raw = _solve(coordinate, solar_day, library_params)
    if raw is None:
        return None
    shift = _solar_day_shift(raw[Prayer.DHUHR], day, coordinate.longitude)
    if shift:
        solar_day = day + timedelta(days=shift)
        logger.debug("transit wrapped at %s on %s, solving for %s", coordinate, day, solar_day)
        raw = _solve(coordinate, solar_day, library_params)
        if raw is None:
            return None

    sunset = raw[Prayer.MAGHRIB]
    if params.isha_interval > 0:
        raw[Prayer.ISHA] = sunset + timedelta(minutes=params.isha_interval)

    if params.maghrib_angle is not None:
        # Evening time at the maghrib depression, solved as an Isha angle
        dusk = _solve(
            coordinate,
            solar_day,
            _library_parameters(params.fajr_angle, params.maghrib_angle, madhab, rule),
        )
        if dusk is not None and sunset < dusk[Prayer.ISHA] < raw[Prayer.ISHA]:
            raw[Prayer.MAGHRIB] = dusk[Prayer.ISHA]

    return {
        prayer: round_to_minute(
            when + timedelta(minutes=total.minutes_for(prayer)), params.rounding
        )
        for prayer, when in raw.items()
    }


def compute_schedule(
    coordinate: GeoCoordinate,
    day: date,
    method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE,
    madhab: Madhab = Madhab.SHAFI,
    *,
    high_latitude_rule: HighLatitudeRule | None = None,
    adjustments: PrayerAdjustments | None = None,
) -> DailyPrayerSchedule | None:
    """Compute the six daily times for one calendar date.

    Args:
        coordinate: Observer position.
        day: Calendar date at the observer. Times near the date line may fall
            on the neighbouring UTC date.
        method: Twilight angles and corrections.
        madhab: Asr shadow rule.
        high_latitude_rule: Overrides the method's rule for bounding Fajr/Isha.
        adjustments: Extra per-entry minutes added to the method's own.

    Returns:
        DailyPrayerSchedule with fajr < sunrise < dhuhr < asr < maghrib < isha,
        or None when no such schedule exists for this date and place.
    """
    if not (math.isfinite(coordinate.latitude) and math.isfinite(coordinate.longitude)):
        logger.debug("non-finite coordinate %s, no schedule", coordinate)
        return None

    params = get_parameters(method)
    rule = resolve_high_latitude_rule(coordinate, params, high_latitude_rule)
    total = params.method_adjustments + (adjustments or PrayerAdjustments())

    try:
        final = _compute(coordinate, day, method, params, madhab, rule, total)
    except _UNSOLVABLE as exc:
        logger.debug("no schedule at %s on %s: %s", coordinate, day, exc)
        return None
    if final is None:
        logger.debug("no sunrise/sunset at %s on %s (polar day or night)", coordinate, day)
        return None

    if not _is_ordered(list(final.values())):
        logger.debug("out-of-order schedule at %s on %s: %s", coordinate, day, final)
        return None

    return DailyPrayerSchedule(
        date=day,
        coordinate=coordinate,
        method=method,
        madhab=madhab,
        fajr=final[Prayer.FAJR],
        sunrise=final[Prayer.SUNRISE],
        dhuhr=final[Prayer.DHUHR],
        asr=final[Prayer.ASR],
        maghrib=final[Prayer.MAGHRIB],
        isha=final[Prayer.ISHA],
    )


def compute_schedule_for(
    coordinate: GeoCoordinate,
    when: datetime,
    tz: tzinfo,
    method: CalculationMethod = CalculationMethod.MUSLIM_WORLD_LEAGUE,
    madhab: Madhab = Madhab.SHAFI,
    **kwargs,
) -> DailyPrayerSchedule | None:
    """Schedule for the local calendar date (in tz) containing the instant when."""
    if when.tzinfo is None:
        raise ValueError("when must be timezone-aware")
    local_date = when.astimezone(tz).date()
    return compute_schedule(coordinate, local_date, method, madhab, **kwargs)


def schedule_for_next_day(
    schedule: DailyPrayerSchedule, **kwargs
) -> DailyPrayerSchedule | None:
    """Same place, method and madhab, one calendar day later; None past date.max."""
    if schedule.date == date.max:
        return None
    return compute_schedule(
        schedule.coordinate,
        schedule.date + timedelta(days=1),
        schedule.method,
        schedule.madhab,
        **kwargs,
    )
