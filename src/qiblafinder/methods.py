"""Calculation method parameter table."""

from qiblafinder.models import (
    CalculationMethod,
    CalculationParameters,
    Madhab,
    PrayerAdjustments,
    Rounding,
)

_PARAMETERS: dict[CalculationMethod, CalculationParameters] = {
    CalculationMethod.MUSLIM_WORLD_LEAGUE: CalculationParameters(
        fajr_angle=18.0,
        isha_angle=17.0,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.NORTH_AMERICA: CalculationParameters(
        fajr_angle=15.0,
        isha_angle=15.0,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.EGYPTIAN: CalculationParameters(
        fajr_angle=19.5,
        isha_angle=17.5,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.KARACHI: CalculationParameters(
        fajr_angle=18.0,
        isha_angle=18.0,
        method_adjustments=PrayerAdjustments(dhuhr=1),
    ),
    CalculationMethod.UMM_AL_QURA: CalculationParameters(
        fajr_angle=18.5,
        isha_interval=90,
    ),
    CalculationMethod.DUBAI: CalculationParameters(
        fajr_angle=18.2,
        isha_angle=18.2,
        method_adjustments=PrayerAdjustments(sunrise=-3, dhuhr=3, asr=3, maghrib=3),
    ),
    CalculationMethod.MOONSIGHTING_COMMITTEE: CalculationParameters(
        fajr_angle=18.0,
        isha_angle=18.0,
        method_adjustments=PrayerAdjustments(dhuhr=5, maghrib=3),
    ),
    CalculationMethod.KUWAIT: CalculationParameters(
        fajr_angle=18.0,
        isha_angle=17.5,
    ),
    CalculationMethod.QATAR: CalculationParameters(
        fajr_angle=18.0,
        isha_interval=90,
    ),
    CalculationMethod.SINGAPORE: CalculationParameters(
        fajr_angle=20.0,
        isha_angle=18.0,
        method_adjustments=PrayerAdjustments(dhuhr=1),
        rounding=Rounding.UP,
    ),
    CalculationMethod.TEHRAN: CalculationParameters(
        fajr_angle=17.7,
        isha_angle=14.0,
        maghrib_angle=4.5,
    ),
    CalculationMethod.TURKEY: CalculationParameters(
        fajr_angle=18.0,
        isha_angle=17.0,
        method_adjustments=PrayerAdjustments(sunrise=-7, dhuhr=5, asr=4, maghrib=7),
    ),
}

DESCRIPTIONS: dict[CalculationMethod, str] = {
    CalculationMethod.MUSLIM_WORLD_LEAGUE: "Widely used worldwide",
    CalculationMethod.NORTH_AMERICA: "Used in US/Canada",
    CalculationMethod.EGYPTIAN: "Used in Egypt, Middle East",
    CalculationMethod.KARACHI: "Used in Pakistan, Bangladesh, India",
    CalculationMethod.UMM_AL_QURA: "Official method in Saudi Arabia",
    CalculationMethod.DUBAI: "Used in UAE",
    CalculationMethod.MOONSIGHTING_COMMITTEE: "Used by some communities in US",
    CalculationMethod.KUWAIT: "Used in Kuwait",
    CalculationMethod.QATAR: "Used in Qatar",
    CalculationMethod.SINGAPORE: "Used in Singapore, Malaysia",
    CalculationMethod.TEHRAN: "Used in Iran",
    CalculationMethod.TURKEY: "Used in Turkey",
}


def get_parameters(method: CalculationMethod) -> CalculationParameters:
    return _PARAMETERS[method]


def _lookup(enum_cls, name: str):
    key = name.strip()
    for member in enum_cls:
        if key.lower() in (member.name.lower(), member.value.lower()):
            return member
    raise ValueError(f"Unknown {enum_cls.__name__}: {name!r}")


def method_from_name(name: str) -> CalculationMethod:
    """Resolve "muslim_world_league", "MUSLIM_WORLD_LEAGUE" or "Muslim World League"."""
    return _lookup(CalculationMethod, name)


def madhab_from_name(name: str) -> Madhab:
    """Resolve "hanafi", "SHAFI" or "Shafi/Maliki/Hanbali"; "standard" means Shafi."""
    if name.strip().lower() in ("standard", "shafi", "maliki", "hanbali"):
        return Madhab.SHAFI
    return _lookup(Madhab, name)
