"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum, IntEnum


@dataclass(frozen=True)
class GeoCoordinate:
    """A point on the globe. Not validated; degenerate values stay numerically defined."""

    latitude: float  # Decimal degrees, south negative
    longitude: float  # Decimal degrees, west negative


@dataclass(frozen=True)
class LocationFix:
    """A reading from an external location source."""

    coordinate: GeoCoordinate
    horizontal_accuracy: float  # Metres; negative means unknown


class CalibrationLevel(IntEnum):
    """Compass calibration quality derived from heading accuracy."""

    INVALID = -1
    LOW = 0
    MEDIUM = 1
    HIGH = 2


@dataclass(frozen=True)
class HeadingSample:
    """A reading from an external compass source."""

    heading: float  # Degrees clockwise from true north
    accuracy: float  # Degrees; negative means the reading is invalid

    @property
    def calibration(self) -> CalibrationLevel:
        if self.accuracy < 0:
            return CalibrationLevel.INVALID
        if self.accuracy <= 5:
            return CalibrationLevel.HIGH
        if self.accuracy <= 15:
            return CalibrationLevel.MEDIUM
        return CalibrationLevel.LOW

    @property
    def is_calibrated(self) -> bool:
        return self.calibration >= CalibrationLevel.MEDIUM


@dataclass(frozen=True)
class QiblaDirection:
    """Great-circle direction from an origin to the Kaaba. Replaced, never mutated."""

    bearing: float  # Degrees in [0, 360), 0 = North
    distance: float  # Metres
    cardinal_direction: str  # "N", "NE", ... or 16-point "NNE", ...
    is_aligned: bool  # Device heading within the alignment threshold
    relative_bearing: float | None = None  # Bearing minus heading in (-180, 180]

    @property
    def distance_km(self) -> float:
        return self.distance / 1000.0

    @property
    def formatted_bearing(self) -> str:
        """e.g. "58° NE"."""
        return f"{int(self.bearing)}° {self.cardinal_direction}"

    @property
    def formatted_distance(self) -> str:
        """e.g. "10,303 km"."""
        return f"{self.distance_km:,.0f} km"


class Prayer(Enum):
    """The six daily schedule entries, in chronological order."""

    FAJR = "Fajr"
    SUNRISE = "Sunrise"
    DHUHR = "Dhuhr"
    ASR = "Asr"
    MAGHRIB = "Maghrib"
    ISHA = "Isha"

    @property
    def is_prayer(self) -> bool:
        """Sunrise is a solar reference event, not a prayer."""
        return self is not Prayer.SUNRISE

    @property
    def arabic_name(self) -> str:
        return _ARABIC_NAMES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_ARABIC_NAMES: dict[Prayer, str] = {
    Prayer.FAJR: "الفجر",
    Prayer.SUNRISE: "الشروق",
    Prayer.DHUHR: "الظهر",
    Prayer.ASR: "العصر",
    Prayer.MAGHRIB: "المغرب",
    Prayer.ISHA: "العشاء",
}

_DESCRIPTIONS: dict[Prayer, str] = {
    Prayer.FAJR: "Dawn",
    Prayer.SUNRISE: "Sunrise",
    Prayer.DHUHR: "Noon",
    Prayer.ASR: "Afternoon",
    Prayer.MAGHRIB: "Sunset",
    Prayer.ISHA: "Night",
}


class Madhab(Enum):
    """Asr shadow-ratio rule."""

    SHAFI = "Shafi/Maliki/Hanbali"
    HANAFI = "Hanafi"

    @property
    def shadow_length(self) -> int:
        """Shadow length as a multiple of the object's height."""
        return 2 if self is Madhab.HANAFI else 1


class HighLatitudeRule(Enum):
    """How Fajr and Isha are bounded when twilight is long or never ends."""

    MIDDLE_OF_THE_NIGHT = "middle_of_the_night"
    SEVENTH_OF_THE_NIGHT = "seventh_of_the_night"
    TWILIGHT_ANGLE = "twilight_angle"


class Rounding(Enum):
    """How computed prayer times are snapped to whole minutes."""

    NEAREST = "nearest"
    UP = "up"
    NONE = "none"


class CalculationMethod(Enum):
    """Named astronomical parameter bundles. Parameters live in qiblafinder.methods."""

    MUSLIM_WORLD_LEAGUE = "Muslim World League"
    NORTH_AMERICA = "ISNA (North America)"
    EGYPTIAN = "Egyptian General Authority"
    KARACHI = "University of Islamic Sciences, Karachi"
    UMM_AL_QURA = "Umm al-Qura (Saudi Arabia)"
    DUBAI = "Dubai"
    MOONSIGHTING_COMMITTEE = "Moonsighting Committee"
    KUWAIT = "Kuwait"
    QATAR = "Qatar"
    SINGAPORE = "Singapore"
    TEHRAN = "Tehran"
    TURKEY = "Turkey"


@dataclass(frozen=True)
class PrayerAdjustments:
    """Per-entry offsets in minutes."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    def minutes_for(self, prayer: Prayer) -> int:
        return getattr(self, prayer.name.lower())

    def __add__(self, other: "PrayerAdjustments") -> "PrayerAdjustments":
        return PrayerAdjustments(
            fajr=self.fajr + other.fajr,
            sunrise=self.sunrise + other.sunrise,
            dhuhr=self.dhuhr + other.dhuhr,
            asr=self.asr + other.asr,
            maghrib=self.maghrib + other.maghrib,
            isha=self.isha + other.isha,
        )


@dataclass(frozen=True)
class CalculationParameters:
    """Twilight angles and corrections for one calculation method."""

    fajr_angle: float
    isha_angle: float = 0.0
    isha_interval: int = 0  # Minutes after maghrib; 0 means use isha_angle
    maghrib_angle: float | None = None
    method_adjustments: PrayerAdjustments = PrayerAdjustments()
    rounding: Rounding = Rounding.NEAREST
    high_latitude_rule: HighLatitudeRule | None = None


PRAYER_ORDER: tuple[Prayer, ...] = tuple(Prayer)


@dataclass(frozen=True)
class DailyPrayerSchedule:
    """Six aware UTC instants for one date, coordinate, method and madhab."""

    date: date
    coordinate: GeoCoordinate
    method: CalculationMethod
    madhab: Madhab
    fajr: datetime
    sunrise: datetime
    dhuhr: datetime
    asr: datetime
    maghrib: datetime
    isha: datetime

    def time_for(self, prayer: Prayer) -> datetime:
        return getattr(self, prayer.name.lower())

    def __iter__(self) -> Iterator[tuple[Prayer, datetime]]:
        for prayer in PRAYER_ORDER:
            yield prayer, self.time_for(prayer)

    def localized(self, tz: tzinfo) -> tuple[tuple[Prayer, datetime], ...]:
        """All six entries converted to tz, in chronological order."""
        return tuple((prayer, when.astimezone(tz)) for prayer, when in self)


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address ("Regent's Park Mosque, London")
    date: str  # "YYYY-MM-DD" format string


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone resolution. Input to the report builder."""

    coordinate: GeoCoordinate
    timezone: str  # IANA zone name ("Europe/London")
    local_date: date  # Calendar date the schedule is computed for
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class QiblaReport:
    """Everything the UI needs for one query. Fully computed state."""

    context: ObserverContext
    direction: QiblaDirection
    schedule: DailyPrayerSchedule | None  # None when the date is unsolvable here
    next_prayer: Prayer | None
    current_prayer: Prayer | None
