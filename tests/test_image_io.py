import numpy as np
import pytest
from PIL import Image

from doc_ui.core.image_io import ImageLoadError, list_image_files, load_image_buffer


@pytest.fixture
def photo_dir(tmp_path):
    for name in ["b.JPG", "a.jpg", "c.png", "d.jpeg", "notes.txt", "e.gif"]:
        (tmp_path / name).write_bytes(b"")
    sub = tmp_path / "nested"
    sub.mkdir()
    (sub / "f.jpg").write_bytes(b"")
    return tmp_path


def test_listing_is_sorted_and_case_insensitive(photo_dir):
    names = [p.name for p in list_image_files(photo_dir)]
    assert names == ["a.jpg", "b.JPG", "c.png", "d.jpeg"]


def test_case_sensitive_listing_skips_uppercase(photo_dir):
    names = [p.name for p in list_image_files(photo_dir, case_sensitive=True)]
    assert names == ["a.jpg", "c.png", "d.jpeg"]


def test_listing_missing_folder(tmp_path):
    with pytest.raises(NotADirectoryError):
        list_image_files(tmp_path / "missing")


def test_load_normalizes_to_unit_range(tmp_path):
    p = tmp_path / "cup.png"
    Image.new("RGB", (40, 30), (255, 51, 0)).save(p)
    buf = load_image_buffer(p)
    assert (buf.width, buf.height) == (40, 30)
    assert buf.pixels.shape == (30, 40, 3)
    np.testing.assert_allclose(buf.pixels[0, 0], [1.0, 0.2, 0.0])
    assert buf.name == "cup.png"


def test_load_rgba_drops_alpha(tmp_path):
    p = tmp_path / "cup.png"
    Image.new("RGBA", (8, 8), (0, 0, 255, 128)).save(p)
    buf = load_image_buffer(p)
    assert buf.pixels.shape == (8, 8, 3)
    assert buf.channel(2).max() == pytest.approx(1.0)


def test_corrupt_file_raises_load_error(tmp_path):
    p = tmp_path / "broken.jpg"
    p.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError, match="broken.jpg"):
        load_image_buffer(p)


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(ImageLoadError):
        load_image_buffer(tmp_path / "gone.png")
