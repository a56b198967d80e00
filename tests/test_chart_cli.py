import pytest

from birthwheel import chart
from birthwheel.compute import compute_chart_snapshot


@pytest.fixture
def fake_compute(monkeypatch, make_ephemeris):
    def compute(moment, **kwargs):
        return compute_chart_snapshot(moment, ephemeris=make_ephemeris(), **kwargs)

    monkeypatch.setattr(chart, "compute_chart_snapshot", compute)


def test_prints_chart(fake_compute, capsys) -> None:
    code = chart.main(
        ["1990-06-15", "14:30", "40.7128", "-74.0060", "--tz", "UTC", "--year", "2026"]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("UTC: 1990-06-15 14:30:00")
    lines = out.splitlines()
    assert lines[1].startswith("sun") and "Capricorn" in lines[1] and "anchor" in lines[1]
    assert lines[2].startswith("moon") and "Taurus" in lines[2]
    assert "anchor" not in lines[2]
    assert lines[3].startswith("ascendant")


def test_invalid_input_exits_with_2(fake_compute, capsys) -> None:
    code = chart.main(["1990-06-15", "14:30", "north", "0"])
    assert code == 2
    assert "Invalid latitude: Latitude must be a number" in capsys.readouterr().err


def test_pole_rejected_by_compute(fake_compute, capsys) -> None:
    code = chart.main(["1990-06-15", "14:30", "90", "0", "--tz", "UTC"])
    assert code == 2
    assert "Invalid latitude" in capsys.readouterr().err


def test_png_option(fake_compute, capsys, tmp_path) -> None:
    target = tmp_path / "wheel.png"
    code = chart.main(
        ["2000-01-01", "00:00", "0", "0", "--tz", "UTC", "--year", "2026"]
        + ["--png", str(target), "--mode", "tropical"]
    )
    assert code == 0
    assert target.exists()
    assert f"Saved: {target}" in capsys.readouterr().out
