"""
Image Queue
===========

Holds the images the user is working through: either one selected
photograph (single mode) or the sorted photographs of a folder (batch
mode), together with a 1-based current position.

Position 0 means "not started". The position never exceeds the number of
images; moving past the last image is reported by ``advance`` returning
False instead.
"""

from pathlib import Path


class ImageQueue:
    """
    Ordered image paths plus current position.

    Parameters
    ----------
    paths : list of Path
        Images in processing order
    batch : bool, default=True
        False for a single selected image (no auto-advance)

    Attributes
    ----------
    index : int
        1-based current position, 0 before the first image is opened

    Examples
    --------
    >>> q = ImageQueue.from_folder([Path("a.jpg"), Path("b.jpg")])
    >>> q.index, q.current
    (0, None)
    >>> q.start(), q.current.name
    (True, 'a.jpg')
    >>> q.advance(), q.advance()
    (True, False)
    >>> q.index
    2
    """

    def __init__(self, paths, batch: bool = True):
        self.paths = [Path(p) for p in paths]
        self.batch = batch
        self.index = 0

    @classmethod
    def single(cls, path: str | Path) -> "ImageQueue":
        q = cls([path], batch=False)
        q.index = 1
        return q

    @classmethod
    def from_folder(cls, paths) -> "ImageQueue":
        return cls(paths, batch=True)

    def __len__(self):
        return len(self.paths)

    @property
    def started(self) -> bool:
        return self.index > 0

    @property
    def current(self) -> Path | None:
        if self.index == 0:
            return None
        return self.paths[self.index - 1]

    @property
    def has_next(self) -> bool:
        return self.index < len(self.paths)

    def path_at(self, index: int) -> Path:
        if not 1 <= index <= len(self.paths):
            raise IndexError(f"Queue position {index} out of range 1..{len(self.paths)}")
        return self.paths[index - 1]

    def start(self) -> bool:
        """Move to the first image. Returns False if the queue is empty."""
        if not self.paths:
            return False
        self.index = 1
        return True

    def advance(self) -> bool:
        """Move to the next image. Returns False, leaving the position, at the end."""
        if not self.has_next:
            return False
        self.index += 1
        return True

    def seek(self, index: int) -> Path:
        p = self.path_at(index)
        self.index = index
        return p

    def rewind(self):
        self.index = 0
