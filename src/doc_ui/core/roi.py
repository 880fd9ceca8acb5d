"""
ROI Capture
===========

Collects the two anchor points selected on the current image. The first
point marks the water sample, the second the white paper reference. The
order is fixed; the only correction available is clearing the pair, which
the workflow does on every image transition.
"""

from .patch_stats import Point


class ROICapture:
    """
    Holds 0, 1 or 2 anchor points for the image currently loaded.

    Parameters
    ----------
    width, height : int
        Bounds of the image the points belong to

    Examples
    --------
    >>> roi = ROICapture(640, 480)
    >>> roi.add(Point(10, 20))
    True
    >>> roi.add(Point(300, 40))
    True
    >>> roi.complete, roi.water, roi.paper
    (True, Point(x=10, y=20), Point(x=300, y=40))
    >>> roi.add(Point(1, 1))
    False
    """

    def __init__(self, width: int = 0, height: int = 0):
        self.width = width
        self.height = height
        self._points: list[Point] = []

    def __len__(self):
        return len(self._points)

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    @property
    def water(self) -> Point | None:
        return self._points[0] if self._points else None

    @property
    def paper(self) -> Point | None:
        return self._points[1] if len(self._points) > 1 else None

    @property
    def complete(self) -> bool:
        return len(self._points) == 2

    def add(self, p: Point) -> bool:
        """
        Store the next anchor point.

        Returns
        -------
        bool
            False if the pair is already complete and the point was refused

        Raises
        ------
        ValueError
            If the point lies outside ``[0, width) x [0, height)``
        """
        if self.complete:
            return False
        x, y = int(p[0]), int(p[1])
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(
                f"Point ({x}, {y}) outside image of size {self.width}x{self.height}"
            )
        self._points.append(Point(x, y))
        return True

    def clear(self, width: int | None = None, height: int | None = None):
        """Drop both points, optionally rebinding to a new image size."""
        self._points.clear()
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
