"""Birth form parsing: raw strings from the UI into a BirthMoment."""

import math
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from birthwheel.exceptions import ChartValidationError
from birthwheel.models import BirthMoment

FORM_FIELDS = ("iso_date", "time", "latitude", "longitude")


def _coordinate(value: str | None, label: str, limit: float) -> float:
    if value is None or value.strip() == "":
        raise ValueError(f"{label} is required")
    try:
        n = float(value)
    except ValueError:
        raise ValueError(f"{label} must be a number") from None
    if not math.isfinite(n):
        raise ValueError(f"{label} must be a number")
    if n < -limit or n > limit:
        raise ValueError(f"{label} must be between -{limit:g} and {limit:g}")
    return n


class BirthForm(BaseModel):
    """Raw user input. Each field validates independently."""

    model_config = ConfigDict(frozen=True)

    iso_date: date
    time: tuple[int, int, int]
    latitude: float
    longitude: float

    @field_validator("iso_date", mode="before")
    @classmethod
    def _check_date(cls, v: object) -> date:
        if isinstance(v, date):
            return v
        if not isinstance(v, str) or len(v) != 10:
            raise ValueError("Please select a date")
        try:
            return date.fromisoformat(v)
        except ValueError:
            raise ValueError("Please select a date") from None

    @field_validator("time", mode="before")
    @classmethod
    def _check_time(cls, v: object) -> tuple[int, int, int]:
        if not isinstance(v, str) or len(v.strip()) < 4:
            raise ValueError("Please enter a time")
        parts = v.strip().split(":")
        if len(parts) < 2 or len(parts) > 3:
            raise ValueError("Time must be HH:mm or HH:mm:ss")
        if len(parts) == 2:
            parts.append("0")
        if not all(p.isdecimal() for p in parts):
            raise ValueError("Time must contain numbers only")
        hour, minute, second = (int(p) for p in parts)
        if hour > 23:
            raise ValueError("Hour must be between 0 and 23")
        if minute > 59:
            raise ValueError("Minute must be between 0 and 59")
        if second > 59:
            raise ValueError("Second must be between 0 and 59")
        return hour, minute, second

    @field_validator("latitude", mode="before")
    @classmethod
    def _check_latitude(cls, v: object) -> float:
        return _coordinate(None if v is None else str(v), "Latitude", 90.0)

    @field_validator("longitude", mode="before")
    @classmethod
    def _check_longitude(cls, v: object) -> float:
        return _coordinate(None if v is None else str(v), "Longitude", 180.0)

    def to_moment(self) -> BirthMoment:
        hour, minute, second = self.time
        when = datetime(
            self.iso_date.year, self.iso_date.month, self.iso_date.day, hour, minute, second
        )
        return BirthMoment(when=when, latitude=self.latitude, longitude=self.longitude)


def _raw(
    iso_date: str, time: str, latitude: str | None, longitude: str | None
) -> dict[str, str | None]:
    return {"iso_date": iso_date, "time": time, "latitude": latitude, "longitude": longitude}


def _messages(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0])
        original = (err.get("ctx") or {}).get("error")
        errors.setdefault(field, str(original) if original is not None else err["msg"])
    return {f: errors[f] for f in FORM_FIELDS if f in errors}


def form_errors(
    iso_date: str, time: str, latitude: str | None, longitude: str | None
) -> dict[str, str]:
    """Per-field messages for the form rows. Empty when everything parses."""
    try:
        BirthForm.model_validate(_raw(iso_date, time, latitude, longitude))
    except ValidationError as exc:
        return _messages(exc)
    return {}


def parse_birth_form(
    iso_date: str, time: str, latitude: str | None, longitude: str | None
) -> BirthMoment:
    """Parse the four form strings into a BirthMoment.

    Raises:
        ChartValidationError: For the first invalid field, in form order.
    """
    try:
        form = BirthForm.model_validate(_raw(iso_date, time, latitude, longitude))
    except ValidationError as exc:
        field, message = next(iter(_messages(exc).items()))
        raise ChartValidationError(field, message) from exc
    return form.to_moment()
