from pathlib import Path

import numpy as np
import pytest

from doc_ui.core.image_io import ImageBuffer, ImageLoadError
from doc_ui.core.workflow import WorkflowController

WATER_RGB = (10, 20, 150)
PAPER_RGB = (240, 235, 50)


def _half_split_pixels(water_rgb, paper_rgb, width=400, height=200):
    # left half water, right half paper; +0.5 keeps int(mean * 255) away from rounding edges
    px = np.empty((height, width, 3))
    px[:, : width // 2] = (np.array(water_rgb) + 0.5) / 255
    px[:, width // 2 :] = (np.array(paper_rgb) + 0.5) / 255
    return px


class FakeLoader:
    def __init__(self, pixels=None, broken=()):
        self.pixels = pixels or {}
        self.broken = set(broken)
        self.calls = []

    def __call__(self, path):
        path = Path(path)
        self.calls.append(path.name)
        if path.name in self.broken:
            raise ImageLoadError(f"Could not load image {path.name}: truncated file")
        px = self.pixels.get(path.name)
        if px is None:
            px = _half_split_pixels(WATER_RGB, PAPER_RGB)
        return ImageBuffer(path, px)


@pytest.fixture
def make_pixels():
    return _half_split_pixels


@pytest.fixture
def loader():
    return FakeLoader()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def make_controller(loader, notices):
    def _make(names=("img1.jpg", "img2.jpg", "img3.jpg"), config=None, loader_=None):
        def lister(folder, case_sensitive):
            return [Path(folder) / n for n in names]

        wf = WorkflowController(config, loader=loader_ or loader, lister=lister)
        wf.add_listener(notices.append)
        return wf

    return _make
