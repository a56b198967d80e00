"""Matplotlib static PNG renderer."""

import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.patches import Circle  # noqa: E402

from birthwheel.models import ChartSnapshot, SignMode  # noqa: E402
from birthwheel.renderers.wheel import BODY_STYLE, legend_rows, slice_labels  # noqa: E402

_ROOT = Path(__file__).parent.parent.parent.parent

_BG = "#0d1b35"


def _xy(r: float, screen_angle: float) -> tuple[float, float]:
    # Screen angles are clockwise with y down; matplotlib's y axis points up
    a = math.radians(screen_angle)
    return r * math.cos(a), -r * math.sin(a)


def render_static_chart(
    snapshot: ChartSnapshot, mode: SignMode = SignMode.STAR_ALIGNED, chart_size: int = 8
) -> Figure:
    """Render a ChartSnapshot as a static matplotlib wheel.

    Args:
        snapshot: Fully computed chart.
        mode: Which label ring to draw.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    ax.add_patch(Circle((0, 0), 1, fill=False, color="#888888", linewidth=1.5))

    sun = snapshot.sun
    for sl in slice_labels(mode, sun.ecliptic.longitude, sun.star_aligned.name):
        x0, y0 = _xy(1, sl.spoke_angle)
        ax.plot([0, x0], [0, y0], color="#666666", linewidth=0.6, zorder=1)
        lx, ly = _xy(0.81, sl.label_angle)
        ax.text(
            lx,
            ly,
            sl.text,
            color="#dddddd",
            fontsize=9,
            ha="center",
            va="center",
            fontweight="bold" if sl.highlight else "normal",
        )

    for reading in snapshot.readings:
        name, color, _ = BODY_STYLE[reading.body]
        x, y = _xy(1, 360 - reading.ecliptic.longitude)
        ax.plot([0, x], [0, y], color=color, linewidth=1.5, zorder=2)
        ax.scatter([x], [y], s=40, color=color, zorder=3)
        ax.text(x + 0.03, y + 0.03, name, color=color, fontsize=9)

    legend = "\n".join(
        f"{row.body}: {row.star_aligned} / {row.tropical}" for row in legend_rows(snapshot)
    )
    ax.text(-1.1, -1.2, legend, color="#e8d5a3", fontsize=9, va="top", family="monospace")

    ax.set_xlim(-1.15, 1.15)
    ax.set_ylim(-1.45, 1.15)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_chart(
    snapshot: ChartSnapshot,
    output_path: Path | None = None,
    mode: SignMode = SignMode.STAR_ALIGNED,
) -> Path:
    """Save a ChartSnapshot as a PNG file.

    Args:
        snapshot: Fully computed chart.
        output_path: Destination path. Auto-generated under results/ if None.
        mode: Which label ring to draw.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        m = snapshot.moment
        when_str = m.when.strftime("%Y_%m_%d_%H_%M")
        filename = f"chart__{when_str}__{m.latitude:.4f}_{m.longitude:.4f}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(snapshot, mode)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
