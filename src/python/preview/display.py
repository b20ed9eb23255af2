"""Matplotlib-based preview display for rendered framebuffers.

Shows a framebuffer on screen after the same clamp the exporter applies,
so what is displayed matches the bytes written to disk.

Example:
    >>> from src.python.preview.display import show_preview
    >>> from src.python.core.integrator import get_framebuffer_numpy
    >>>
    >>> show_preview(get_framebuffer_numpy())
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.python.preview.export import clamp_image


def process_image_for_display(
    image: npt.NDArray[np.floating],
) -> npt.NDArray[np.float32]:
    """Prepare a linear framebuffer for display.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        Image clamped to [0, 1] per channel, float32.
    """
    return clamp_image(image)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a framebuffer as a Matplotlib figure.

    Args:
        image: Linear image array of shape (H, W, 3).
        title: Custom title (default shows the resolution).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.shape[1]}x{image.shape[0]}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
