"""Place search: Open-Meteo geocoder with US shorthand expansion and an offline fallback."""

import logging
import re

import httpx

from birthwheel.config import load_settings
from birthwheel.exceptions import GeocodingError
from birthwheel.gazetteer import search_offline
from birthwheel.models import Place

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
_MAX_CANDIDATES = 10
_RESULT_COUNT = 8

# US state and territory expansions
US_ABBR: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "DC": "District of Columbia", "FL": "Florida", "GA": "Georgia", "HI": "Hawaii",
    "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "PR": "Puerto Rico",
    "VI": "U.S. Virgin Islands", "GU": "Guam", "MP": "Northern Mariana Islands",
    "AS": "American Samoa",
}

_ZIP_RE = re.compile(r"^\d{5}$")


def _title_case_words(s: str) -> str:
    return re.sub(r"\b([a-z])", lambda m: m.group(1).upper(), s)


def normalize_query(raw: str) -> str:
    """Unify commas, collapse whitespace, and canonicalize a few spellings."""
    s = re.sub(r"\s+", " ", raw.replace("，", ",")).strip()
    s = re.sub(r"\bst\.?\s+", "saint ", s, flags=re.IGNORECASE)
    if re.match(r"^washington\s*[, ]?\s*dc$", s, re.IGNORECASE):
        return "washington, district of columbia"
    if re.match(r"^dc$", s, re.IGNORECASE):
        return "district of columbia"
    return s


def looks_us_like(query: str) -> bool:
    if _ZIP_RE.match(query):
        return True
    if re.search(r"\busa\b|\bunited states\b", query, re.IGNORECASE):
        return True
    if re.search(r"\b[a-z]{2}\b$", query, re.IGNORECASE):
        if query.strip()[-2:].upper() in US_ABBR:
            return True
    return bool(re.search(r"\bdc\b", query, re.IGNORECASE))


def expand_us_variants(norm: str) -> list[str]:
    """Alternative spellings for US-style "city st" queries, title-cased, deduplicated."""
    out: list[str] = []
    # arlington va -> arlington, va
    if "," not in norm and re.search(r"\s+[a-z]{2}$", norm, re.IGNORECASE):
        out.append(re.sub(r"\s+([A-Za-z]{2})$", lambda m: f", {m.group(1)}", norm))
    end_code = re.search(r"\b([A-Za-z]{2})\b$", norm)
    if end_code:
        full = US_ABBR.get(end_code.group(1).upper())
        if full:
            out.append(re.sub(r"\b([A-Za-z]{2})\b$", lambda m: full.lower(), norm))
    in_text = re.search(r",\s*([A-Za-z]{2})(\s|$)", norm)
    if in_text:
        full = US_ABBR.get(in_text.group(1).upper())
        if full:
            out.append(
                re.sub(
                    r",\s*([A-Za-z]{2})(\s|$)",
                    lambda m: f", {full.lower()}{m.group(2)}",
                    norm,
                    count=1,
                )
            )
    for base in [norm, *out]:
        if not re.search(r"united states", base, re.IGNORECASE):
            out.append(f"{base}, United States")
            out.append(f"{base}, USA")
    return list(dict.fromkeys(_title_case_words(s) for s in out))


def candidate_queries(raw: str) -> list[str]:
    """Queries to try in order: ZIP as typed, normalized text, then US expansions."""
    raw = raw.strip()
    norm = normalize_query(raw)
    candidates: list[str] = []
    if _ZIP_RE.match(raw):
        candidates.append(raw)
    candidates.append(norm)
    candidates.extend(expand_us_variants(norm))
    return list(dict.fromkeys(candidates))[:_MAX_CANDIDATES]


def _open_meteo_once(name: str, country_code: str | None = None) -> list[Place]:
    """Single Open-Meteo search call. Empty on non-2xx.

    Raises:
        GeocodingError: On transport errors or an unreadable payload.
    """
    settings = load_settings()
    params = {
        "name": name,
        "count": str(_RESULT_COUNT),
        "language": "en",
        "format": "json",
    }
    if country_code:
        params["countryCode"] = country_code
    try:
        resp = httpx.get(
            settings.geocoder_url, params=params, timeout=settings.geocoder_timeout
        )
    except httpx.HTTPError as exc:
        raise GeocodingError(f"Open-Meteo request failed: {exc}") from exc
    if resp.is_error:
        return []
    try:
        results = resp.json().get("results") or []
        return [
            Place(
                id=int(r.get("id", 0)),
                name=str(r["name"]),
                country=str(r.get("country") or ""),
                admin1=str(r["admin1"]) if r.get("admin1") else None,
                latitude=float(r["latitude"]),
                longitude=float(r["longitude"]),
            )
            for r in results
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise GeocodingError(f"Open-Meteo returned an unusable response: {exc!r}") from exc


def _query_open_meteo(name: str, prefer_us: bool) -> list[Place]:
    # US filter first if applicable, then without
    if prefer_us:
        us = _open_meteo_once(name, "US")
        if us:
            return us
    return _open_meteo_once(name)


def search_places(query: str) -> tuple[Place, ...]:
    """Resolve free text to candidate places.

    Tries each candidate query against Open-Meteo until one returns hits.
    Falls back to the offline gazetteer on geocoder failure or no hits.

    Args:
        query: City, region, ZIP code, or country.

    Returns:
        Matching places; empty when the query is shorter than two characters
        or nothing matches anywhere.
    """
    raw = query.strip()
    if len(raw) < MIN_QUERY_LENGTH:
        return ()

    prefer_us = looks_us_like(raw)
    places: list[Place] = []
    try:
        for candidate in candidate_queries(raw):
            places = _query_open_meteo(candidate, prefer_us)
            if places:
                break
    except GeocodingError as exc:
        logger.warning("Geocoder unavailable, using offline gazetteer: %s", exc)

    if not places:
        return search_offline(normalize_query(raw))
    return tuple(places)
