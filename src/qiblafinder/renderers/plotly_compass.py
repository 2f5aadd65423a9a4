"""Plotly interactive compass renderer.

Polar axes rotated so 0° is at the top and bearings increase clockwise,
matching a physical compass. The Qibla needle is drawn from the centre to
the rim; the device heading, when known, is a dashed line.
"""

import numpy as np
import plotly.graph_objects as go

from qiblafinder.i18n import cardinal_label, t
from qiblafinder.models import QiblaDirection

_BG = "#0b1f1a"
_DIAL_COLOR = "#2f5d50"
_TICK_COLOR = "#8fb8a8"
_NEEDLE_COLOR = "#d4af37"
_ALIGNED_COLOR = "#3ddc84"
_HEADING_COLOR = "#e8e8e8"

_ROSE_8 = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def _tick_trace() -> go.Scatterpolar:
    # Major tick every 30°, minor every 10°: single trace using None separators
    r: list[float | None] = []
    theta: list[float | None] = []
    for angle in np.arange(0, 360, 10):
        inner = 0.88 if angle % 30 == 0 else 0.93
        r += [inner, 1.0, None]
        theta += [float(angle), float(angle), None]
    return go.Scatterpolar(
        r=r,
        theta=theta,
        mode="lines",
        line=dict(color=_TICK_COLOR, width=1),
        hoverinfo="skip",
        name="ticks",
    )


def render_compass(
    direction: QiblaDirection, heading: float | None = None, lang: str = "en"
) -> go.Figure:
    """Render a QiblaDirection as a Plotly polar compass.

    Args:
        direction: Computed direction; its bearing sets the needle.
        heading: Device heading in degrees, or None when no compass is available.
        lang: Language for labels ('en' or 'ar').

    Returns:
        Plotly Figure object.
    """
    needle_color = _ALIGNED_COLOR if direction.is_aligned else _NEEDLE_COLOR
    needle = go.Scatterpolar(
        r=[0.0, 0.82],
        theta=[direction.bearing, direction.bearing],
        mode="lines+markers",
        line=dict(color=needle_color, width=5),
        marker=dict(size=[0, 16], symbol="diamond", color=needle_color),
        hovertemplate=f"{t('qibla_marker', lang)}: {direction.formatted_bearing}<extra></extra>",
        name="qibla",
    )

    traces = [_tick_trace(), needle]
    if heading is not None:
        traces.append(
            go.Scatterpolar(
                r=[0.0, 0.75],
                theta=[heading, heading],
                mode="lines",
                line=dict(color=_HEADING_COLOR, width=2, dash="dash"),
                hovertemplate=f"{t('heading_marker', lang)}: {heading:.0f}°<extra></extra>",
                name="heading",
            )
        )

    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=30, r=30, t=30, b=30),
        width=420,
        height=420,
        polar=dict(
            bgcolor=_BG,
            radialaxis=dict(visible=False, range=[0, 1.0]),
            angularaxis=dict(
                rotation=90,
                direction="clockwise",
                tickmode="array",
                tickvals=list(np.arange(0, 360, 45)),
                ticktext=[cardinal_label(label, lang) for label in _ROSE_8],
                tickfont=dict(color=_TICK_COLOR, size=14),
                gridcolor=_DIAL_COLOR,
                linecolor=_DIAL_COLOR,
            ),
        ),
    )

    # Static dial: no zoom, no mode bar
    fig._config = {"scrollZoom": False, "displayModeBar": False}  # type: ignore[attr-defined]

    return fig
