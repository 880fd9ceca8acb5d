"""
Annotation Workflow
===================

This module contains the state machine that walks the user through a queue
of photographs, captures two anchor points per image, turns them into a
DOC estimate and records the result.

Classes
-------
WorkflowState
    States of the annotation session
Notice
    User-visible message emitted by the controller
WorkflowController
    Owns the queue, current image, ROI pair and ledger of one session

Notes
-----
State transitions::

    EMPTY --select image / start--> AWAITING_FIRST_POINT
    AWAITING_FIRST_POINT --click--> AWAITING_SECOND_POINT
    AWAITING_SECOND_POINT --click--> measure + record, then
        batch, next image exists  -> AWAITING_FIRST_POINT (next image)
        batch, no next image      -> QUEUE_EXHAUSTED
        single image              -> EMPTY

Every command runs to completion before the next one is accepted. Clicks
are ignored unless the controller is awaiting a point, so a click can never
be attributed to an image other than the one currently loaded.

Examples
--------
>>> from datetime import date
>>> from doc_ui.core.workflow import WorkflowController
>>> from doc_ui.core.patch_stats import Point
>>>
>>> wf = WorkflowController()
>>> wf.select_folder("field_photos")   # cup_01.jpg, cup_02.jpg, cup_03.jpg
3
>>> wf.start_analysis()
True
>>> wf.submit_point(Point(120, 340))   # water
>>> rec = wf.submit_point(Point(900, 340))   # paper, advances to image 2
>>> rec.image_name, wf.current_index
('cup_01.jpg', 2)
>>> wf.export_csv("results", day=date(2025, 6, 1)).name
'rgb_values_2025-06-01.csv'

See Also
--------
doc_ui.ui.main_window : Delivers user commands to the controller
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import logging

from .calibration import estimate_doc
from .config import AppConfig, RedoPolicy
from .image_io import ImageBuffer, ImageLoadError, list_image_files, load_image_buffer
from .image_queue import ImageQueue
from .ledger import MeasurementRecord, ResultsLedger, export_filename
from .patch_stats import Point, extract_patch_stats
from .roi import ROICapture

logger = logging.getLogger(__name__)


class WorkflowState(Enum):
    EMPTY = "empty"
    AWAITING_FIRST_POINT = "awaiting_first_point"
    AWAITING_SECOND_POINT = "awaiting_second_point"
    QUEUE_EXHAUSTED = "queue_exhausted"


@dataclass(frozen=True)
class Notice:
    level: str  # "info", "warning" or "error"
    title: str
    message: str


class WorkflowController:
    """
    Single annotation session.

    Parameters
    ----------
    config : AppConfig, optional
        Calibration, patch size, discovery and redo settings
    loader : callable, optional
        ``path -> ImageBuffer``, defaults to ``load_image_buffer``
    lister : callable, optional
        ``(folder, case_sensitive) -> list[Path]``, defaults to
        ``list_image_files``

    Attributes
    ----------
    ledger : ResultsLedger
        Records produced in this session
    queue : ImageQueue or None
        Images being worked through
    image : ImageBuffer or None
        Buffer for the current position, None when nothing is displayed
    roi : ROICapture
        Anchor points picked on ``image``
    state : WorkflowState
        Current state
    previous_index : int or None
        Position of the last measured or skipped image, target of redo
    """

    def __init__(self, config: AppConfig | None = None, loader=None, lister=None):
        self.config = config or AppConfig()
        self._load = loader or load_image_buffer
        self._list = lister or list_image_files
        self.ledger = ResultsLedger()
        self.queue: ImageQueue | None = None
        self.image: ImageBuffer | None = None
        self.roi = ROICapture()
        self.state = WorkflowState.EMPTY
        self.previous_index: int | None = None
        self._redo_record: MeasurementRecord | None = None
        self._listeners = []

    # ------------------------------------------------------------------
    # observers

    def add_listener(self, callback):
        """Register ``callback(notice)`` for user-visible notifications."""
        self._listeners.append(callback)

    def _notify(self, level: str, title: str, message: str):
        log = {"info": logger.info, "warning": logger.warning}.get(level, logger.error)
        log("%s: %s", title, message)
        notice = Notice(level, title, message)
        for cb in list(self._listeners):
            cb(notice)

    # ------------------------------------------------------------------
    # read-only views

    @property
    def current_index(self) -> int:
        return self.queue.index if self.queue is not None else 0

    @property
    def is_batch(self) -> bool:
        return self.queue is not None and self.queue.batch

    @property
    def accepts_points(self) -> bool:
        return self.state in (
            WorkflowState.AWAITING_FIRST_POINT,
            WorkflowState.AWAITING_SECOND_POINT,
        )

    # ------------------------------------------------------------------
    # internal transitions

    def _clear_image(self, state: WorkflowState):
        self.image = None
        self.roi.clear(0, 0)
        self.state = state

    def _show(self, buffer: ImageBuffer):
        self.image = buffer
        self.roi.clear(buffer.width, buffer.height)
        self.state = WorkflowState.AWAITING_FIRST_POINT

    def _open(self, index: int) -> bool:
        """Move the queue to ``index`` and load that image."""
        path = self.queue.seek(index)
        try:
            buffer = self._load(path)
        except ImageLoadError as e:
            self._clear_image(WorkflowState.EMPTY)
            self._notify("error", "Image Load Failed", f"{e}. Use 'Skip to Next Image' to continue.")
            return False
        logger.info("Opened image %d/%d: %s", index, len(self.queue), path.name)
        self._show(buffer)
        return True

    def _exhaust(self):
        self._clear_image(WorkflowState.QUEUE_EXHAUSTED)
        self._notify(
            "info",
            "No More Images",
            "You have reached the end of the folder. All images have been analyzed.",
        )

    def _advance(self):
        if self.queue.advance():
            self._open(self.queue.index)
        else:
            self._exhaust()

    # ------------------------------------------------------------------
    # commands

    def select_single_image(self, path: str | Path) -> bool:
        """
        Replace the queue with a single image and open it.

        Returns
        -------
        bool
            False if the image could not be decoded; the previous queue is
            then kept but nothing is displayed
        """
        try:
            buffer = self._load(Path(path))
        except ImageLoadError as e:
            self._clear_image(WorkflowState.EMPTY)
            self._notify("error", "Image Load Failed", str(e))
            return False
        self.queue = ImageQueue.single(path)
        self.previous_index = None
        self._redo_record = None
        logger.info("Single image selected: %s", buffer.name)
        self._show(buffer)
        return True

    def select_folder(self, path: str | Path) -> int:
        """
        Replace the queue with the photographs of a folder.

        Nothing is loaded until ``start_analysis``.

        Returns
        -------
        int
            Number of images found
        """
        try:
            paths = self._list(path, self.config.case_sensitive_extensions)
        except OSError as e:
            self._notify("error", "Folder Not Readable", f"Could not list {path}: {e}")
            return 0
        self.queue = ImageQueue.from_folder(paths)
        self.previous_index = None
        self._redo_record = None
        self._clear_image(WorkflowState.EMPTY)
        if not paths:
            self._notify("warning", "No Images Found", f"No .jpg, .jpeg or .png files in {path}.")
        return len(paths)

    def start_analysis(self) -> bool:
        """Open the first image of the folder queue."""
        if not self.is_batch or len(self.queue) == 0:
            self._notify("warning", "No Images Found", "Select a folder containing images first.")
            return False
        self.queue.start()
        return self._open(1)

    def submit_point(self, p: Point) -> MeasurementRecord | None:
        """
        Accept one click on the current image.

        Parameters
        ----------
        p : Point
            Pixel coordinate in the decoded image

        Returns
        -------
        MeasurementRecord or None
            The appended record when this click completed the pair

        Raises
        ------
        ValueError
            If ``p`` lies outside the current image; nothing changes

        Notes
        -----
        Ignored unless a point is awaited. The second point triggers, in
        order: patch extraction, DOC estimation, ledger append, recording
        the redo target, then advancing (batch) or going idle (single).
        """
        if not self.accepts_points:
            logger.debug("Point %s ignored in state %s", tuple(p), self.state.name)
            return None
        self.roi.add(p)
        if not self.roi.complete:
            self.state = WorkflowState.AWAITING_SECOND_POINT
            return None

        size = self.config.patch_size
        water = extract_patch_stats(self.image, self.roi.water, size)
        paper = extract_patch_stats(self.image, self.roi.paper, size)
        doc = estimate_doc(water.b, paper.b, self.config.calibration)
        record = MeasurementRecord(self.image.name, water, paper, doc)
        self.ledger.append(record)
        self.previous_index = self.current_index
        self._redo_record = record

        if self.is_batch:
            self._advance()
        else:
            self.state = WorkflowState.EMPTY
        return record

    def skip_to_next(self) -> bool:
        """Move to the next folder image without recording a measurement."""
        if not self.is_batch or not self.queue.started:
            logger.debug("Skip ignored: no batch analysis in progress")
            return False
        if self.state is WorkflowState.QUEUE_EXHAUSTED:
            logger.debug("Skip ignored: queue exhausted")
            return False
        self.previous_index = self.current_index
        self._redo_record = None
        logger.info("Skipped image %d", self.current_index)
        self._advance()
        return True

    def redo_last_measurement(self) -> bool:
        """
        Reopen the last measured or skipped image for a new pair of clicks.

        With ``RedoPolicy.RETRACT`` the record produced for that image is
        removed once the image has reloaded, provided it is still the last
        ledger row. With ``RedoPolicy.APPEND`` the earlier record stays and
        the new measurement adds a second row for the same image.
        """
        if self.previous_index is None or self.queue is None:
            logger.debug("Redo ignored: nothing to redo")
            return False
        logger.info("Redo requested for image %d", self.previous_index)
        if not self._open(self.previous_index):
            return False
        if (
            self.config.redo_policy == RedoPolicy.RETRACT
            and self._redo_record is not None
            and self.ledger.last is self._redo_record
        ):
            self.ledger.delete_last()
        self._redo_record = None
        self._notify("info", "Redo Measurement", "Please reselect the regions on the previous image.")
        return True

    def delete_last_line(self) -> MeasurementRecord | None:
        return self.ledger.delete_last()

    def reset(self):
        """Clear results and position; the folder's file list is kept."""
        self.ledger.reset()
        if self.queue is not None:
            self.queue.rewind()
        self.previous_index = None
        self._redo_record = None
        self._clear_image(WorkflowState.EMPTY)

    def export_csv(self, directory: str | Path, day=None) -> Path:
        """Write the ledger to ``<directory>/rgb_values_<date>.csv``."""
        return self.ledger.write_csv(Path(directory) / export_filename(day))
