"""Wheel geometry shared by the SVG and static renderers.

Screen angles grow clockwise (SVG y axis points down). A body at ecliptic
longitude L sits at screen angle 360 - L, so longitudes run counter-clockwise
from the east point.
"""

import math
from dataclasses import dataclass

from birthwheel.models import BodyReading, ChartSnapshot, SignMode
from birthwheel.zodiac import label_for, ring_labels, wheel_name

BODY_STYLE: dict[str, tuple[str, str, str]] = {
    # body: (display name, color, glyph)
    "sun": ("Sun", "#f0c419", "☉"),
    "moon": ("Moon", "#e6e6e6", "☾"),
    "ascendant": ("Ascendant", "#8be9fd", "↑"),
}


@dataclass(frozen=True)
class SliceLabel:
    text: str
    spoke_angle: float  # Screen angle (degrees) of the slice's starting spoke
    label_angle: float  # Screen angle (degrees) of the slice midline
    highlight: bool


@dataclass(frozen=True)
class LegendRow:
    body: str
    glyph: str
    star_aligned: str
    tropical: str


def to_point(cx: float, cy: float, r: float, ecliptic_longitude: float) -> tuple[float, float]:
    angle = math.radians(360 - ecliptic_longitude)
    return cx + r * math.cos(angle), cy + r * math.sin(angle)


def polar(cx: float, cy: float, r: float, screen_angle: float) -> tuple[float, float]:
    angle = math.radians(screen_angle)
    return cx + r * math.cos(angle), cy + r * math.sin(angle)


def slice_labels(
    mode: SignMode,
    sun_longitude: float | None = None,
    sun_constellation: str | None = None,
) -> list[SliceLabel]:
    """Ring labels with their spoke and label angles.

    Rotation depends on the Sun's longitude and anchor constellation only.
    """
    labels = ring_labels(mode, sun_longitude, sun_constellation)
    step = 360 / len(labels)
    target = wheel_name(sun_constellation).lower() if sun_constellation else None
    return [
        SliceLabel(
            text=label,
            spoke_angle=-idx * step,
            label_angle=-idx * step - step / 2,
            highlight=mode is SignMode.STAR_ALIGNED and label.lower() == target,
        )
        for idx, label in enumerate(labels)
    ]


def legend_rows(snapshot: ChartSnapshot | None) -> list[LegendRow]:
    """One row per body; "N/A" until a snapshot exists."""
    readings: dict[str, BodyReading | None] = {
        "sun": snapshot.sun if snapshot else None,
        "moon": snapshot.moon if snapshot else None,
        "ascendant": snapshot.ascendant if snapshot else None,
    }
    rows: list[LegendRow] = []
    for body, reading in readings.items():
        name, _, glyph = BODY_STYLE[body]
        rows.append(
            LegendRow(
                body=name,
                glyph=glyph,
                star_aligned=label_for(reading, SignMode.STAR_ALIGNED) if reading else "N/A",
                tropical=label_for(reading, SignMode.TROPICAL) if reading else "N/A",
            )
        )
    return rows
