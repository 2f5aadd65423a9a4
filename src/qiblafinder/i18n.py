"""Simple two-language (en/ar) translation helper."""

from qiblafinder.models import Prayer

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "en": "QiblaFinder",
        "ar": "محدد القبلة",
    },
    "label_place": {
        "en": "Location",
        "ar": "الموقع",
    },
    "label_date": {
        "en": "Date",
        "ar": "التاريخ",
    },
    "label_method": {
        "en": "Calculation method",
        "ar": "طريقة الحساب",
    },
    "label_madhab": {
        "en": "Asr (madhab)",
        "ar": "العصر (المذهب)",
    },
    "label_heading": {
        "en": "Device heading (°)",
        "ar": "اتجاه الجهاز (°)",
    },
    "btn_find": {
        "en": "Find Qibla",
        "ar": "حدد القبلة",
    },
    "btn_locate": {
        "en": "Use my location",
        "ar": "استخدم موقعي",
    },
    "btn_save": {
        "en": "Save compass",
        "ar": "حفظ البوصلة",
    },
    "placeholder": {
        "en": "Enter a location to see the Qibla direction and today's prayer times",
        "ar": "أدخل موقعًا لعرض اتجاه القبلة ومواقيت الصلاة",
    },
    "loading_compute": {
        "en": "Computing direction and prayer times",
        "ar": "جارٍ حساب الاتجاه ومواقيت الصلاة",
    },
    "error_address": {
        "en": "Address not found. Try a more specific address. ({error})",
        "ar": "تعذر العثور على العنوان. جرّب عنوانًا أدق. ({error})",
    },
    "error_geolocation": {
        "en": "Location is unavailable in this browser.",
        "ar": "الموقع غير متاح في هذا المتصفح.",
    },
    "qibla_bearing": {
        "en": "Qibla bearing",
        "ar": "اتجاه القبلة",
    },
    "distance_to_kaaba": {
        "en": "Distance to the Kaaba",
        "ar": "المسافة إلى الكعبة",
    },
    "aligned": {
        "en": "Facing the Qibla",
        "ar": "أنت متجه نحو القبلة",
    },
    "turn_right": {
        "en": "Turn right {degrees:.0f}°",
        "ar": "استدر يمينًا {degrees:.0f}°",
    },
    "turn_left": {
        "en": "Turn left {degrees:.0f}°",
        "ar": "استدر يسارًا {degrees:.0f}°",
    },
    "prayer_times": {
        "en": "Prayer times",
        "ar": "مواقيت الصلاة",
    },
    "next_prayer": {
        "en": "Next: {prayer} {countdown}",
        "ar": "القادمة: {prayer} {countdown}",
    },
    "no_schedule": {
        "en": "Prayer times cannot be computed for this date at this latitude.",
        "ar": "لا يمكن حساب مواقيت الصلاة لهذا التاريخ عند خط العرض هذا.",
    },
    "heading_marker": {
        "en": "Heading",
        "ar": "الاتجاه",
    },
    "qibla_marker": {
        "en": "Qibla",
        "ar": "القبلة",
    },
    "compass_filename": {
        "en": "qibla-compass.png",
        "ar": "qibla-compass.png",
    },
}

_CARDINALS_AR: dict[str, str] = {
    "N": "ش",
    "NNE": "ش ش ق",
    "NE": "ش ق",
    "ENE": "ق ش ق",
    "E": "ق",
    "ESE": "ق ج ق",
    "SE": "ج ق",
    "SSE": "ج ج ق",
    "S": "ج",
    "SSW": "ج ج غ",
    "SW": "ج غ",
    "WSW": "غ ج غ",
    "W": "غ",
    "WNW": "غ ش غ",
    "NW": "ش غ",
    "NNW": "ش ش غ",
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def prayer_name(prayer: Prayer, lang: str) -> str:
    return prayer.arabic_name if lang == "ar" else prayer.value


def cardinal_label(label: str, lang: str) -> str:
    """Localized compass label ("NE" -> "ش ق" in Arabic); unknown labels pass through."""
    if lang == "ar":
        return _CARDINALS_AR.get(label, label)
    return label
