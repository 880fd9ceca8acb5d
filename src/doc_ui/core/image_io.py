"""
Image I/O Utilities
===================

This module provides the file-level collaborators of the workflow: listing
the photographs in a folder and decoding a photograph into a normalized
RGB pixel buffer.

Classes
-------
ImageBuffer
    Decoded image with float channel planes in [0, 1]
ImageLoadError
    Raised when a file cannot be decoded as an image

Functions
---------
list_image_files
    Non-recursive listing of .jpg/.jpeg/.png files in a folder
load_image_buffer
    Decode an image file into an ImageBuffer

Notes
-----
Images are always converted to 8-bit RGB with Pillow before normalization,
so palette, grayscale and RGBA inputs all produce three channel planes.
Intensities are divided by 255 to land in [0, 1].

See Also
--------
doc_ui.core.patch_stats : Consumes ImageBuffer
doc_ui.core.workflow : Loads one buffer per queue position
"""

from dataclasses import dataclass
from pathlib import Path
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")


class ImageLoadError(RuntimeError):
    """Raised when an image file is missing, corrupt or unsupported."""


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """
    Decoded image held by the workflow for the current queue position.

    Parameters
    ----------
    path : Path
        File the buffer was decoded from
    pixels : np.ndarray
        Float array of shape (H, W, 3) with values in [0, 1]

    Examples
    --------
    >>> buf = ImageBuffer(Path("cup.jpg"), np.zeros((10, 20, 3)))
    >>> buf.width, buf.height
    (20, 10)
    """

    path: Path
    pixels: np.ndarray

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def channel(self, index: int) -> np.ndarray:
        """Return channel plane ``index`` (0=R, 1=G, 2=B) as an (H, W) view."""
        return self.pixels[:, :, index]


def list_image_files(folder: str | Path, case_sensitive: bool = False) -> list[Path]:
    """
    List photographs in a folder, sorted by file name.

    Parameters
    ----------
    folder : str or Path
        Directory to scan (not recursive)
    case_sensitive : bool, default=False
        If True, only lowercase extensions match (``photo.JPG`` is skipped)

    Returns
    -------
    list of Path
        Files ending in .jpg, .jpeg or .png, sorted by name

    Raises
    ------
    NotADirectoryError
        If ``folder`` is not an existing directory

    Examples
    --------
    >>> from doc_ui.core.image_io import list_image_files
    >>> paths = list_image_files("field_photos")
    >>> [p.name for p in paths]
    ['cup_01.jpg', 'cup_02.JPG', 'cup_03.png']
    """
    folder_path = Path(folder)
    if not folder_path.is_dir():
        raise NotADirectoryError(str(folder_path))
    files = []
    for p in folder_path.iterdir():
        if not p.is_file():
            continue
        name = p.name if case_sensitive else p.name.lower()
        if name.endswith(IMAGE_EXTENSIONS):
            files.append(p)
    files.sort(key=lambda p: p.name)
    logger.info("Found %d image(s) in %s", len(files), folder_path)
    return files


def load_image_buffer(path: str | Path) -> ImageBuffer:
    """
    Decode an image file into a normalized RGB buffer.

    Parameters
    ----------
    path : str or Path
        Path to a PNG or JPEG file

    Returns
    -------
    ImageBuffer
        Buffer with float64 pixels of shape (H, W, 3) in [0, 1]

    Raises
    ------
    ImageLoadError
        If the file does not exist or cannot be decoded

    Notes
    -----
    Processing steps:
    1. Open with Pillow and force a full decode
    2. Convert to RGB mode
    3. Divide by 255 to normalize

    Examples
    --------
    >>> buf = load_image_buffer("cup_01.jpg")
    >>> buf.pixels.dtype, float(buf.pixels.max()) <= 1.0
    (dtype('float64'), True)
    """
    p = Path(path)
    try:
        with Image.open(p) as img:
            img.load()
            arr = np.asarray(img.convert("RGB"), dtype=np.float64)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.error("Failed to decode %s: %s", p, e)
        raise ImageLoadError(f"Could not load image {p.name}: {e}") from e
    logger.debug("Loaded %s (%dx%d)", p.name, arr.shape[1], arr.shape[0])
    return ImageBuffer(p, arr / 255.0)
