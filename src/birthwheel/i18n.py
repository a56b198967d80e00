"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "나의 출생 차트",
        "en": "BirthWheel",
    },
    "heading": {
        "ko": "간결하고 정확한 출생 차트",
        "en": "Your birth chart, minimally and accurately",
    },
    "subheading": {
        "ko": "출생 날짜, 정확한 시각, 장소를 입력하면 별자리 기준과 트로피컬 기준의 태양, 달, 상승점을 보여드려요",
        "en": "Enter birth date, exact time, and location to see Sun, Moon, and Ascendant for star-aligned and tropical interpretations",
    },
    "label_date": {
        "ko": "출생 날짜",
        "en": "Date of birth",
    },
    "label_time": {
        "ko": "출생 시각",
        "en": "Time of birth",
    },
    "label_place": {
        "ko": "장소 검색",
        "en": "Search location",
    },
    "label_latitude": {
        "ko": "위도",
        "en": "Latitude",
    },
    "label_longitude": {
        "ko": "경도",
        "en": "Longitude",
    },
    "place_placeholder": {
        "ko": "도시, 지역, 우편번호 또는 국가",
        "en": "City, region, ZIP code or country (avoid acronyms)",
    },
    "place_min_chars": {
        "ko": "두 글자 이상 입력하세요",
        "en": "Type at least 2 characters",
    },
    "place_none": {
        "ko": "검색 결과가 없어요",
        "en": "No matching places",
    },
    "mode_label": {
        "ko": "표시 방식",
        "en": "Sign mode",
    },
    "mode_star_aligned": {
        "ko": "별자리 기준",
        "en": "Star-aligned",
    },
    "mode_tropical": {
        "ko": "트로피컬",
        "en": "Tropical",
    },
    "recalculating": {
        "ko": "다시 계산하는 중…",
        "en": "recalculating…",
    },
    "error_unexpected": {
        "ko": "예기치 못한 오류가 발생했어요. ({error})",
        "en": "Unexpected error ({error})",
    },
    "svg_btn_save": {
        "ko": "저장",
        "en": "Save",
    },
    "svg_filename": {
        "ko": "출생차트.png",
        "en": "birth-chart.png",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
