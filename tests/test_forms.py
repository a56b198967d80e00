from datetime import date, datetime

import pytest

from birthwheel.exceptions import ChartValidationError
from birthwheel.forms import BirthForm, form_errors, parse_birth_form


def test_valid_form_has_no_errors() -> None:
    assert form_errors("1990-06-15", "14:30", "40.7128", "-74.0060") == {}


def test_empty_form_reports_every_field_in_order() -> None:
    errors = form_errors("", "", None, None)
    assert list(errors) == ["iso_date", "time", "latitude", "longitude"]
    assert errors == {
        "iso_date": "Please select a date",
        "time": "Please enter a time",
        "latitude": "Latitude is required",
        "longitude": "Longitude is required",
    }


@pytest.mark.parametrize(
    "raw, message",
    [
        ("1:2", "Please enter a time"),
        ("12:30:00:00", "Time must be HH:mm or HH:mm:ss"),
        ("12:3a", "Time must contain numbers only"),
        ("1²:30", "Time must contain numbers only"),
        ("24:00", "Hour must be between 0 and 23"),
        ("12:60", "Minute must be between 0 and 59"),
        ("12:30:60", "Second must be between 0 and 59"),
    ],
)
def test_time_messages(raw: str, message: str) -> None:
    assert form_errors("2000-01-01", raw, "0", "0") == {"time": message}


@pytest.mark.parametrize(
    "lat, lng, expected",
    [
        ("abc", "0", {"latitude": "Latitude must be a number"}),
        ("nan", "0", {"latitude": "Latitude must be a number"}),
        ("90.01", "0", {"latitude": "Latitude must be between -90 and 90"}),
        ("0", "-180.5", {"longitude": "Longitude must be between -180 and 180"}),
        ("  ", "0", {"latitude": "Latitude is required"}),
    ],
)
def test_coordinate_messages(lat: str, lng: str, expected: dict) -> None:
    assert form_errors("2000-01-01", "12:00", lat, lng) == expected


def test_bad_date_string() -> None:
    assert form_errors("2000-02-30", "12:00", "0", "0") == {"iso_date": "Please select a date"}


def test_parse_builds_naive_wall_clock_moment() -> None:
    moment = parse_birth_form("1990-06-15", " 14:30 ", "40.7128", "-74.0060")
    assert moment.when == datetime(1990, 6, 15, 14, 30, 0)
    assert moment.when.tzinfo is None
    assert moment.latitude == pytest.approx(40.7128)
    assert moment.longitude == pytest.approx(-74.006)


def test_parse_keeps_seconds() -> None:
    assert parse_birth_form("2000-01-01", "23:59:58", "0", "0").when == datetime(
        2000, 1, 1, 23, 59, 58
    )


def test_parse_accepts_pole_which_compute_rejects() -> None:
    assert parse_birth_form("2000-01-01", "12:00", "90", "0").latitude == 90.0


def test_parse_raises_first_invalid_field() -> None:
    with pytest.raises(ChartValidationError) as exc_info:
        parse_birth_form("2000-01-01", "99:00", "abc", "500")
    assert exc_info.value.field == "time"
    assert exc_info.value.message == "Hour must be between 0 and 23"


def test_model_accepts_date_objects() -> None:
    form = BirthForm.model_validate(
        {"iso_date": date(2000, 1, 1), "time": "06:00", "latitude": 1, "longitude": 2}
    )
    assert form.time == (6, 0, 0)
    assert form.to_moment().when == datetime(2000, 1, 1, 6, 0)
