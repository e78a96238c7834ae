"""
Fit a stack of rendered lines into a canvas.

Scaling happens in two phases. Every line is first shrunk on its own until it
fits the canvas, then the whole block is shrunk uniformly if the stacked
height (line spacing included) is still too tall. Text is never enlarged.
The block is centered vertically and every line is centered horizontally.
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Sequence, Tuple

logger = logging.getLogger(__name__)

DEFAULT_LINE_SPACE = 16


class TextScaledWarning(UserWarning):
    """The text block was too tall for the canvas and has been shrunk."""


@dataclass(frozen=True)
class PlacedLine:
    scale: float
    real_width: int
    real_height: int
    left: int
    top: int
    global_scale: float = 1.0

    @property
    def target_width(self) -> int:
        return math.floor(self.real_width * self.global_scale)

    @property
    def target_height(self) -> int:
        return math.floor(self.real_height * self.global_scale)

    @property
    def needs_resample(self) -> bool:
        return self.scale != 1 or self.global_scale != 1


def _ratio(target, actual):
    # zero-sized input is caller error, treat it as "no scaling"
    if actual == 0:
        return 1
    return target / actual


def fit_scale(width, height, canvas_width, canvas_height):
    """Scale that makes a single (width, height) box fit the canvas."""
    scale = 1
    if width > canvas_width:
        scale = _ratio(canvas_width, width)
    if height > canvas_height:
        scale = min(scale, _ratio(canvas_height, height))
    return scale


def block_height(real_heights, line_space):
    total = -line_space
    for h in real_heights:
        total += h + line_space
    return total


def compute_global_scale(total_height, canvas_height):
    if total_height > canvas_height:
        return _ratio(canvas_height, total_height)
    return 1


def layout(
    rendered_lines: Sequence,
    canvas_size: Tuple[int, int],
    line_space: int = DEFAULT_LINE_SPACE,
) -> list[PlacedLine]:
    """Place rendered lines on a canvas.

    Args:
        rendered_lines: objects with `width` and `height` in pixels.
        canvas_size: (width, height) of the canvas.
        line_space: gap between consecutive lines before scaling.

    Returns:
        One PlacedLine per input line, in input order.
    """
    if not rendered_lines:
        return []
    canvas_width, canvas_height = canvas_size

    fitted = []
    for line in rendered_lines:
        scale = fit_scale(line.width, line.height, canvas_width, canvas_height)
        fitted.append(
            (
                scale,
                math.floor(line.width * scale),
                math.floor(line.height * scale),
            )
        )

    total_height = block_height([h for _, _, h in fitted], line_space)
    global_scale = compute_global_scale(total_height, canvas_height)
    if global_scale < 1:
        msg = (
            f"Input lines are too high for image and will be scaled to "
            f"{global_scale:.4f}x"
        )
        logger.warning(msg)
        warnings.warn(msg, TextScaledWarning, stacklevel=2)

    placed = []
    y = math.floor((canvas_height - total_height * global_scale) / 2)
    for scale, real_width, real_height in fitted:
        placed.append(
            PlacedLine(
                scale=scale,
                real_width=real_width,
                real_height=real_height,
                left=math.floor((canvas_width - real_width * global_scale) / 2),
                top=y,
                global_scale=global_scale,
            )
        )
        y += math.floor(line_space * global_scale + real_height * global_scale)

    return placed
