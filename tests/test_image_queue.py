from pathlib import Path

import pytest

from doc_ui.core.image_queue import ImageQueue


def test_single_queue_is_positioned_on_its_image():
    q = ImageQueue.single("cup.jpg")
    assert not q.batch
    assert q.index == 1
    assert q.current == Path("cup.jpg")
    assert not q.has_next


def test_folder_queue_starts_unstarted():
    q = ImageQueue.from_folder([Path("a.jpg"), Path("b.jpg")])
    assert q.batch and q.index == 0 and q.current is None
    assert q.start()
    assert q.current.name == "a.jpg"


def test_advance_stops_at_last_image():
    q = ImageQueue.from_folder(["a.jpg", "b.jpg"])
    q.start()
    assert q.advance()
    assert not q.advance()
    assert q.index == 2


def test_empty_queue_cannot_start():
    q = ImageQueue.from_folder([])
    assert not q.start()
    assert q.index == 0


def test_seek_and_rewind():
    q = ImageQueue.from_folder(["a.jpg", "b.jpg", "c.jpg"])
    assert q.seek(3).name == "c.jpg"
    with pytest.raises(IndexError):
        q.seek(0)
    with pytest.raises(IndexError):
        q.seek(4)
    q.rewind()
    assert q.index == 0 and len(q) == 3
