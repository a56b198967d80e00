"""SVG zodiac wheel renderer.

Produces a self-contained SVG string, and an HTML page wrapping it for
embedding via st.components.v1.html(). Geometry lives in wheel.py.
"""

from __future__ import annotations

import html

from birthwheel.i18n import t
from birthwheel.models import ChartSnapshot, SignMode
from birthwheel.renderers.wheel import (
    BODY_STYLE,
    legend_rows,
    polar,
    slice_labels,
    to_point,
)

_BG = "#0d1b35"
_RING_COLOR = "#888888"
_SPOKE_COLOR = "#666666"
_LABEL_COLOR = "#dddddd"


def render_wheel_svg(
    snapshot: ChartSnapshot | None,
    mode: SignMode,
    sun_longitude: float | None = None,
    sun_constellation: str | None = None,
    size: int = 460,
) -> str:
    """Return the wheel as an SVG element string.

    Body spokes are only drawn when snapshot is set. The ring rotation comes
    from sun_longitude/sun_constellation; when omitted they are taken from the
    snapshot's Sun, keeping the Sun spoke inside its anchor slice.

    Args:
        snapshot: Computed chart, or None while inputs are incomplete.
        mode: Which label ring to draw.
        sun_longitude: Sun ecliptic longitude driving the star-aligned rotation.
        sun_constellation: Sun anchor constellation name for the rotation.
        size: Width and height in pixels.
    """
    if snapshot is not None:
        if sun_longitude is None:
            sun_longitude = snapshot.sun.ecliptic.longitude
        if sun_constellation is None:
            sun_constellation = snapshot.sun.star_aligned.name

    center = size / 2
    radius = size * 190 / 460

    parts: list[str] = [
        f'<circle cx="{center}" cy="{center}" r="{radius:.2f}" fill="none"'
        f' stroke="{_RING_COLOR}" stroke-width="2"/>'
    ]

    for sl in slice_labels(mode, sun_longitude, sun_constellation):
        x0, y0 = polar(center, center, radius, sl.spoke_angle)
        lx, ly = polar(center, center, radius - 36, sl.label_angle)
        weight = 700 if sl.highlight else 600
        parts.append(
            f'<g><line x1="{center}" y1="{center}" x2="{x0:.2f}" y2="{y0:.2f}"'
            f' stroke="{_SPOKE_COLOR}"/>'
            f'<text x="{lx:.2f}" y="{ly:.2f}" text-anchor="middle"'
            f' dominant-baseline="middle" font-size="12" fill="{_LABEL_COLOR}"'
            f' font-weight="{weight}">{html.escape(sl.text)}</text></g>'
        )

    if snapshot is not None:
        for reading in snapshot.readings:
            name, color, _ = BODY_STYLE[reading.body]
            px, py = to_point(center, center, radius, reading.ecliptic.longitude)
            parts.append(
                f'<g class="body body-{reading.body}">'
                f'<line x1="{center}" y1="{center}" x2="{px:.2f}" y2="{py:.2f}"'
                f' stroke="{color}" stroke-width="2"/>'
                f'<circle cx="{px:.2f}" cy="{py:.2f}" r="6" fill="{color}"/>'
                f'<text x="{px + 8:.2f}" y="{py - 8:.2f}" font-size="12"'
                f' text-anchor="start" dominant-baseline="central" fill="{color}">'
                f"{name}</text></g>"
            )

    body = "\n  ".join(parts)
    return (
        f'<svg id="wheel" width="{size}" height="{size}" viewBox="0 0 {size} {size}"'
        f' xmlns="http://www.w3.org/2000/svg" role="img" aria-label="Birth chart wheel">\n'
        f"  {body}\n</svg>"
    )


def render_wheel_html(
    snapshot: ChartSnapshot | None,
    mode: SignMode,
    sun_longitude: float | None = None,
    sun_constellation: str | None = None,
    is_computing: bool = False,
    lang: str = "en",
) -> str:
    """Return a self-contained HTML page with the wheel, legend and a PNG save button.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    svg = render_wheel_svg(snapshot, mode, sun_longitude, sun_constellation)

    rows: list[str] = []
    for i, row in enumerate(legend_rows(snapshot)):
        suffix = f" • {html.escape(t('recalculating', lang))}" if is_computing and i == 0 else ""
        rows.append(
            f'<div><span aria-hidden="true">{row.glyph} </span>'
            f"{html.escape(row.body)} • {html.escape(t('mode_star_aligned', lang))}:"
            f" <strong>{html.escape(row.star_aligned)}</strong>"
            f" • {html.escape(t('mode_tropical', lang))}:"
            f" <strong>{html.escape(row.tropical)}</strong>{suffix}</div>"
        )
    legend = "\n    ".join(rows)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{ background: {_BG}; color: #e8d5a3; font-family: sans-serif; }}
figure {{ display: grid; justify-items: center; gap: 8px; padding: 8px; }}
#legend {{ display: grid; gap: 4px; font-size: 13px; opacity: 0.95; }}
#save-btn {{
    background: rgba(13,27,53,0.85);
    color: #c9a96e;
    border: 1px solid rgba(201,169,110,0.4);
    border-radius: 6px;
    padding: 0.3rem 0.8rem;
    cursor: pointer;
}}
</style>
</head>
<body>
<figure>
  {svg}
  <div id="legend">
    {legend}
  </div>
  <button id="save-btn">↓ {html.escape(t("svg_btn_save", lang))}</button>
</figure>
<script>
(function() {{
  // Rasterize the wheel onto a canvas and download it as PNG
  document.getElementById('save-btn').addEventListener('click', function() {{
    var svg = document.getElementById('wheel');
    var str = new XMLSerializer().serializeToString(svg);
    var img = new Image();
    img.onload = function() {{
      var c = document.createElement('canvas');
      c.width = svg.width.baseVal.value;
      c.height = svg.height.baseVal.value;
      var ctx = c.getContext('2d');
      ctx.fillStyle = '{_BG}';
      ctx.fillRect(0, 0, c.width, c.height);
      ctx.drawImage(img, 0, 0);
      var a = document.createElement('a');
      a.download = '{t("svg_filename", lang)}';
      a.href = c.toDataURL('image/png');
      a.click();
    }};
    img.src = 'data:image/svg+xml;base64,' + btoa(unescape(encodeURIComponent(str)));
  }});
}})();
</script>
</body>
</html>"""
