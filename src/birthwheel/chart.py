"""CLI entry point for birth chart computation.

    uv run python -m birthwheel.chart 1990-06-15 14:30 40.7128 -74.0060 --png chart.png
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from birthwheel.compute import compute_chart_snapshot  # noqa: E402
from birthwheel.config import configure_logging  # noqa: E402
from birthwheel.exceptions import ChartValidationError  # noqa: E402
from birthwheel.forms import parse_birth_form  # noqa: E402
from birthwheel.models import ChartSnapshot, SignMode  # noqa: E402
from birthwheel.renderers.static import save_static_chart  # noqa: E402


def format_snapshot(snapshot: ChartSnapshot) -> str:
    lines = [f"UTC: {snapshot.utc_dt:%Y-%m-%d %H:%M:%S}"]
    for reading in snapshot.readings:
        ecl = reading.ecliptic
        label = reading.at_birth
        line = (
            f"{reading.body:<10} {ecl.longitude:8.3f}°  {ecl.sign:<12}"
            f"  {label.name} ({label.abbreviation})"
        )
        if reading.anchor is not None:
            line += f"  anchor {reading.anchor.name} ({reading.anchor.abbreviation})"
        lines.append(line)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sun, Moon and Ascendant for a birth moment.")
    parser.add_argument("date", help="YYYY-MM-DD")
    parser.add_argument("time", help="HH:MM or HH:MM:SS, local time at the birth place")
    parser.add_argument("latitude")
    parser.add_argument("longitude")
    parser.add_argument("--tz", dest="timezone_name", help="IANA zone; looked up if omitted")
    parser.add_argument("--year", type=int, help="year of the Sun's anchor date")
    parser.add_argument("--png", help="also save the wheel as PNG")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in SignMode],
        default=SignMode.STAR_ALIGNED.value,
    )
    args = parser.parse_args(argv)

    configure_logging()
    try:
        moment = parse_birth_form(args.date, args.time, args.latitude, args.longitude)
        snapshot = compute_chart_snapshot(
            moment, current_year=args.year, timezone_name=args.timezone_name
        )
    except ChartValidationError as exc:
        print(f"Invalid {exc.field}: {exc.message}", file=sys.stderr)
        return 2

    print(format_snapshot(snapshot))
    if args.png:
        path = save_static_chart(snapshot, Path(args.png), SignMode(args.mode))
        print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
