"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from qiblafinder.models import QiblaDirection

_ROOT = Path(__file__).parent.parent.parent.parent

_ROSE_8 = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def render_static_compass(
    direction: QiblaDirection, heading: float | None = None, chart_size: int = 6
) -> Figure:
    """Render a QiblaDirection as a static matplotlib compass.

    Args:
        direction: Computed direction; its bearing sets the needle.
        heading: Device heading in degrees, or None to omit the heading line.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig = plt.figure(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor("#0b1f1a")
    ax = fig.add_subplot(projection="polar")
    ax.set_facecolor("#0b1f1a")
    ax.set_theta_zero_location("N")
    ax.set_theta_direction(-1)
    ax.set_ylim(0, 1)
    ax.set_yticks([])

    ax.set_xticks(np.radians(np.arange(0, 360, 45)))
    ax.set_xticklabels(_ROSE_8, color="#8fb8a8", fontsize=12)
    ax.grid(color="#2f5d50", linewidth=0.5)

    for angle in np.arange(0, 360, 10):
        inner = 0.88 if angle % 30 == 0 else 0.93
        theta = np.radians(angle)
        ax.plot([theta, theta], [inner, 1.0], color="#8fb8a8", linewidth=0.8)

    needle_color = "#3ddc84" if direction.is_aligned else "#d4af37"
    bearing = np.radians(direction.bearing)
    ax.annotate(
        "",
        xy=(bearing, 0.82),
        xytext=(0, 0),
        arrowprops=dict(arrowstyle="-|>", color=needle_color, linewidth=3),
    )
    if heading is not None:
        theta = np.radians(heading)
        ax.plot([theta, theta], [0, 0.75], color="#e8e8e8", linewidth=1.5, linestyle="--")

    ax.set_title(
        f"{direction.formatted_bearing}  ·  {direction.formatted_distance}",
        color="#e8e8e8",
        pad=20,
    )
    return fig


def save_static_compass(
    direction: QiblaDirection,
    output_path: Path | None = None,
    heading: float | None = None,
) -> Path:
    """Save a QiblaDirection compass as a PNG file.

    Args:
        direction: Computed direction.
        output_path: Destination path. Auto-generated under results/ if None.
        heading: Device heading in degrees, or None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = f"qibla_{direction.bearing:.1f}_{direction.cardinal_direction}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_compass(direction, heading)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path
