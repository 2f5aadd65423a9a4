"""QiblaFinder — Streamlit app for the Qibla direction and daily prayer times."""

import datetime
import html

import streamlit as st
from dotenv import load_dotenv
from pytz import timezone, utc
from streamlit_js_eval import get_geolocation, streamlit_js_eval

load_dotenv()

from qiblafinder.compute import GeocodingError, build_report, geocode_address, observer_at  # noqa: E402
from qiblafinder.config import configure_logging, load_settings  # noqa: E402
from qiblafinder.i18n import cardinal_label, prayer_name, t  # noqa: E402
from qiblafinder.methods import DESCRIPTIONS  # noqa: E402
from qiblafinder.models import CalculationMethod, GeoCoordinate, Madhab  # noqa: E402
from qiblafinder.navigator import upcoming  # noqa: E402
from qiblafinder.prayer_times import schedule_for_next_day  # noqa: E402
from qiblafinder.renderers.plotly_compass import render_compass  # noqa: E402
from qiblafinder.timeutil import countdown_string, hijri_date_string  # noqa: E402

_settings = load_settings()
configure_logging(_settings.log_level)

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ar" if _browser_lang.lower().startswith("ar") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="🕋",
    layout="centered",
)

# --- Session state initialization ---

if "context" not in st.session_state:
    st.session_state.context = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "locate_requested" not in st.session_state:
    st.session_state.locate_requested = False

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0b1f1a !important;
        color: #e8e8e8;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] { display: none !important; }
    .prayer-row { display: flex; justify-content: space-between; padding: 0.3rem 0; }
    .prayer-row.current { color: #d4af37; font-weight: 600; }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Input panel ---
_methods = list(CalculationMethod)
_madhabs = list(Madhab)

col1, col2 = st.columns([3, 2])
with col1:
    address = st.text_input(t("label_place", _lang), value="")
with col2:
    date_val = st.date_input(t("label_date", _lang), value=datetime.date.today())

col3, col4, col5 = st.columns([3, 2, 2])
with col3:
    method = st.selectbox(
        t("label_method", _lang),
        _methods,
        index=_methods.index(_settings.default_method),
        format_func=lambda m: m.value,
    )
    st.caption(DESCRIPTIONS[method])
with col4:
    madhab = st.selectbox(
        t("label_madhab", _lang),
        _madhabs,
        index=_madhabs.index(_settings.default_madhab),
        format_func=lambda m: m.value,
    )
with col5:
    heading_val = st.number_input(
        t("label_heading", _lang),
        min_value=0.0,
        max_value=359.9,
        value=None,
        step=1.0,
    )

bcol1, bcol2 = st.columns(2)
with bcol1:
    submitted = st.button(t("btn_find", _lang), use_container_width=True)
with bcol2:
    if st.button(t("btn_locate", _lang), use_container_width=True):
        st.session_state.locate_requested = True

date_str = date_val.strftime("%Y-%m-%d")

if submitted and address:
    st.session_state.error_msg = None
    with st.spinner(t("loading_compute", _lang)):
        try:
            st.session_state.context = geocode_address(
                address,
                date_str,
                lang=_lang,
                user_agent=_settings.nominatim_user_agent,
            )
        except GeocodingError as e:
            st.session_state.context = None
            st.session_state.error_msg = t("error_address", _lang).format(
                error=html.escape(str(e))
            )

# --- Browser geolocation ---
# get_geolocation() also resolves asynchronously: None until the browser answers.
if st.session_state.locate_requested:
    _fix = get_geolocation()
    if _fix is not None:
        st.session_state.locate_requested = False
        coords = _fix.get("coords") if isinstance(_fix, dict) else None
        if coords:
            st.session_state.error_msg = None
            st.session_state.context = observer_at(
                GeoCoordinate(float(coords["latitude"]), float(coords["longitude"])),
                date_str,
            )
        else:
            st.session_state.error_msg = t("error_geolocation", _lang)

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)

context = st.session_state.context
if context is None:
    st.info(t("placeholder", _lang))
    st.stop()

now = datetime.datetime.now(utc)
report = build_report(
    context,
    method,
    madhab,
    now=now,
    heading=heading_val,
    alignment_threshold=_settings.alignment_threshold,
    points=_settings.compass_points,
)
local_tz = timezone(context.timezone)
direction = report.direction

# --- Compass ---
st.subheader(context.address_display)
st.caption(hijri_date_string(context.local_date))
st.plotly_chart(
    render_compass(direction, heading_val, lang=_lang),
    use_container_width=True,
    config={"displayModeBar": False},
)

mcol1, mcol2 = st.columns(2)
mcol1.metric(
    t("qibla_bearing", _lang),
    f"{direction.bearing:.1f}° {cardinal_label(direction.cardinal_direction, _lang)}",
)
mcol2.metric(t("distance_to_kaaba", _lang), direction.formatted_distance)

if direction.relative_bearing is not None:
    if direction.is_aligned:
        st.success(t("aligned", _lang))
    elif direction.relative_bearing > 0:
        st.warning(t("turn_right", _lang).format(degrees=direction.relative_bearing))
    else:
        st.warning(t("turn_left", _lang).format(degrees=-direction.relative_bearing))

# --- Prayer times ---
st.subheader(t("prayer_times", _lang))
schedule = report.schedule
if schedule is None:
    st.warning(t("no_schedule", _lang))
    st.stop()

rows = []
for prayer, when in schedule.localized(local_tz):
    css = "prayer-row current" if prayer is report.current_prayer else "prayer-row"
    rows.append(
        f"<div class='{css}'><span>{prayer_name(prayer, _lang)}</span>"
        f"<span>{when.strftime('%H:%M')}</span></div>"
    )
st.markdown("".join(rows), unsafe_allow_html=True)

if now.astimezone(local_tz).date() == context.local_date:
    nxt = upcoming(schedule, schedule_for_next_day(schedule), now)
    if nxt is not None:
        prayer, when = nxt
        st.caption(
            t("next_prayer", _lang).format(
                prayer=prayer_name(prayer, _lang),
                countdown=countdown_string(when, now),
            )
        )
