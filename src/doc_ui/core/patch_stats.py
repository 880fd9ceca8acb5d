"""
Patch Statistics
================

This module samples per-channel mean intensities over a square patch of a
decoded photograph. The workflow takes two such patches per image: one on
the water sample and one on the white paper reference.

Classes
-------
Point
    Integer pixel coordinate in image space
PatchStats
    Integer (R, G, B) means in 0-255

Functions
---------
clamp_patch
    Intersect a patch rectangle with the image bounds
extract_patch_mean
    Mean of one channel over a patch, in [0, 1]
extract_patch_stats
    Mean of all three channels over a patch, scaled to 0-255

Notes
-----
The patch is anchored at its **top-left** corner, not centered on the
click. When the rectangle extends past the right or bottom edge of the
image it is clamped to the image bounds and only in-bounds pixels are
averaged. Scaling to 0-255 multiplies by 255 and truncates toward zero.
"""

from typing import NamedTuple

import numpy as np

from .image_io import ImageBuffer

PATCH_SIZE = 200

RED, GREEN, BLUE = 0, 1, 2


class Point(NamedTuple):
    x: int
    y: int


class PatchStats(NamedTuple):
    r: int
    g: int
    b: int


def clamp_patch(
    anchor: Point, width: int, height: int, image_width: int, image_height: int
) -> tuple[int, int, int, int]:
    """
    Clamp a top-left anchored patch to the image bounds.

    Parameters
    ----------
    anchor : Point
        Top-left corner of the patch, inside the image
    width, height : int
        Requested patch size in pixels
    image_width, image_height : int
        Image dimensions

    Returns
    -------
    tuple
        (x0, y0, x1, y1) with exclusive upper bounds

    Raises
    ------
    ValueError
        If the anchor lies outside the image or the patch size is not positive

    Examples
    --------
    >>> clamp_patch(Point(250, 10), 200, 200, 300, 100)
    (250, 10, 300, 100)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Patch size must be positive, got {width}x{height}")
    x, y = int(anchor[0]), int(anchor[1])
    if not (0 <= x < image_width and 0 <= y < image_height):
        raise ValueError(
            f"Anchor ({x}, {y}) outside image of size {image_width}x{image_height}"
        )
    return (x, y, min(x + width, image_width), min(y + height, image_height))


def extract_patch_mean(
    buffer: ImageBuffer, channel: int, anchor: Point, patch_width: int, patch_height: int
) -> float:
    """
    Mean intensity of one channel over a patch.

    Parameters
    ----------
    buffer : ImageBuffer
        Decoded image
    channel : int
        Channel index (RED, GREEN or BLUE)
    anchor : Point
        Top-left corner of the patch
    patch_width, patch_height : int
        Patch size before clamping

    Returns
    -------
    float
        Arithmetic mean in [0, 1]

    Examples
    --------
    >>> from pathlib import Path
    >>> buf = ImageBuffer(Path("x.png"), np.full((400, 400, 3), 0.5))
    >>> extract_patch_mean(buf, BLUE, Point(0, 0), 200, 200)
    0.5
    """
    x0, y0, x1, y1 = clamp_patch(
        anchor, patch_width, patch_height, buffer.width, buffer.height
    )
    return float(buffer.channel(channel)[y0:y1, x0:x1].mean())


def extract_patch_stats(buffer: ImageBuffer, anchor: Point, size: int = PATCH_SIZE) -> PatchStats:
    """
    Sample all three channels over a square patch and scale to 0-255.

    Parameters
    ----------
    buffer : ImageBuffer
        Decoded image
    anchor : Point
        Top-left corner of the patch
    size : int, default=200
        Edge length of the square patch

    Returns
    -------
    PatchStats
        Integer channel means, each ``int(mean * 255)``

    See Also
    --------
    extract_patch_mean : Single channel mean in native range
    """
    means = [extract_patch_mean(buffer, c, anchor, size, size) for c in (RED, GREEN, BLUE)]
    # epsilon absorbs float error so an exact 8-bit mean does not drop a level
    return PatchStats(*(int(np.trunc(m * 255 + 1e-9)) for m in means))
