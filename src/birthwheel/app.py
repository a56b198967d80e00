"""BirthWheel Streamlit app for a minimal Sun/Moon/Ascendant birth chart."""

import datetime
import logging

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from birthwheel.compute import compute_chart_snapshot, compute_sun_snapshot  # noqa: E402
from birthwheel.config import configure_logging  # noqa: E402
from birthwheel.exceptions import ChartValidationError  # noqa: E402
from birthwheel.forms import form_errors, parse_birth_form  # noqa: E402
from birthwheel.geocoding import MIN_QUERY_LENGTH, search_places  # noqa: E402
from birthwheel.i18n import t  # noqa: E402
from birthwheel.models import Place, SignMode  # noqa: E402
from birthwheel.renderers.svg_wheel import render_wheel_html  # noqa: E402

configure_logging()
logger = logging.getLogger("birthwheel.app")

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in, at which point _lang is set correctly.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☉",
    layout="centered",
)

# --- Session state initialization ---

_now = datetime.datetime.now()
if "iso_date" not in st.session_state:
    st.session_state.iso_date = _now.date()
if "time_str" not in st.session_state:
    st.session_state.time_str = _now.strftime("%H:%M")
if "latitude" not in st.session_state:
    st.session_state.latitude = ""
if "longitude" not in st.session_state:
    st.session_state.longitude = ""
if "sign_mode" not in st.session_state:
    st.session_state.sign_mode = SignMode.STAR_ALIGNED.value

st.markdown(
    """
    <style>
    .error-row { min-height: 20px; line-height: 20px; font-size: 12px; color: #b88700; }
    </style>
    """,
    unsafe_allow_html=True,
)


@st.cache_data(ttl=3600, show_spinner=False)
def _cached_search(query: str) -> tuple[Place, ...]:
    return search_places(query)


def _error_row(message: str | None) -> None:
    # Fixed-height row so the form does not jump when a message appears
    st.markdown(f'<div class="error-row">{message or "&nbsp;"}</div>', unsafe_allow_html=True)


def _pick_place() -> None:
    place: Place | None = st.session_state.get("place_pick")
    if place is not None:
        st.session_state.latitude = f"{place.latitude:.4f}"
        st.session_state.longitude = f"{place.longitude:.4f}"


st.title(t("heading", _lang))
st.caption(t("subheading", _lang))

mode_labels = {
    SignMode.STAR_ALIGNED.value: t("mode_star_aligned", _lang),
    SignMode.TROPICAL.value: t("mode_tropical", _lang),
}
st.radio(
    t("mode_label", _lang),
    options=list(mode_labels),
    format_func=mode_labels.__getitem__,
    horizontal=True,
    key="sign_mode",
)
mode = SignMode(st.session_state.sign_mode)

# --- Place search ---
query = st.text_input(t("label_place", _lang), placeholder=t("place_placeholder", _lang))
if query.strip():
    if len(query.strip()) < MIN_QUERY_LENGTH:
        st.caption(t("place_min_chars", _lang))
    else:
        places = _cached_search(query.strip())
        if places:
            st.selectbox(
                t("label_place", _lang),
                options=places,
                format_func=lambda p: f"{p.label} • {p.latitude:.4f}, {p.longitude:.4f}",
                index=None,
                key="place_pick",
                on_change=_pick_place,
                label_visibility="collapsed",
            )
        else:
            st.caption(t("place_none", _lang))

# --- Birth form ---
col_date, col_time = st.columns(2)
with col_date:
    iso_date: datetime.date = st.date_input(
        t("label_date", _lang),
        key="iso_date",
        min_value=datetime.date(1900, 1, 1),
        max_value=datetime.date(2050, 12, 31),
    )
with col_time:
    time_str: str = st.text_input(t("label_time", _lang), key="time_str", placeholder="HH:mm:ss")

col_lat, col_lng = st.columns(2)
with col_lat:
    lat_str: str = st.text_input(
        t("label_latitude", _lang), key="latitude", placeholder="e.g. 40.7128"
    )
with col_lng:
    lng_str: str = st.text_input(
        t("label_longitude", _lang), key="longitude", placeholder="-74.0060"
    )

date_str = iso_date.isoformat() if iso_date else ""
errors = form_errors(date_str, time_str, lat_str or None, lng_str or None)

with col_date:
    _error_row(errors.get("iso_date"))
with col_time:
    _error_row(errors.get("time"))
with col_lat:
    _error_row(errors.get("latitude") if lat_str else None)
with col_lng:
    _error_row(errors.get("longitude") if lng_str else None)

# --- Chart, and the wheel rotation ---
# With a chart, the ring rotates from the chart's own Sun (same local zone).
# Without a place yet, the date/time is read as UTC for a provisional rotation.
sun_longitude: float | None = None
sun_constellation: str | None = None
snapshot = None
try:
    if not errors:
        snapshot = compute_chart_snapshot(parse_birth_form(date_str, time_str, lat_str, lng_str))
    elif "iso_date" not in errors and "time" not in errors:
        rotation_moment = parse_birth_form(date_str, time_str, "0", "0")
        sun_only = compute_sun_snapshot(rotation_moment, timezone_name="UTC")
        sun_longitude = sun_only.sun.ecliptic.longitude
        sun_constellation = sun_only.sun.star_aligned.name
except ChartValidationError as exc:
    st.error(exc.message)
except Exception as exc:  # provider failures reach the user as a generic error
    logger.exception("Chart computation failed")
    st.error(t("error_unexpected", _lang).format(error=exc))

components.html(
    render_wheel_html(
        snapshot,
        mode,
        sun_longitude=sun_longitude,
        sun_constellation=sun_constellation,
        lang=_lang,
    ),
    height=600,
)
