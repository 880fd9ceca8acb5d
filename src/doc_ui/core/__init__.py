"""
Core Application Logic for Cup of Carbon
========================================

This module contains the logic behind the desktop application, free of any
Qt imports:

- **Workflow**: State machine walking a queue of photographs
- **Image I/O**: Folder listing and decoding into normalized RGB buffers
- **Patch statistics**: Channel means over a fixed square patch
- **Calibration**: Exponential blue-channel DOC calibration profiles
- **Ledger**: Append-only measurement records with CSV export
- **Configuration and logging**: JSON settings file, package logger

Measurement Pipeline
--------------------
1. **Water click**: Anchor of the water sample patch
2. **Paper click**: Anchor of the white reference patch
3. **Patch means**: R, G, B means over each 200x200 patch, scaled to 0-255
4. **Estimate**: ``exp(((water_B + (255 - paper_B)) - offset) / slope)``
5. **Record**: Appended to the ledger, then the next image opens

Examples
--------
>>> from doc_ui.core import WorkflowController, load_config
>>>
>>> wf = WorkflowController(load_config())
>>> wf.select_folder("field_photos")
>>> wf.start_analysis()

Modules
-------
workflow
    Session state machine and commands
image_queue
    Single image or folder queue with 1-based position
roi
    Water/paper anchor capture
patch_stats
    Patch channel means with bounds clamping
calibration
    DOC calibration profiles and estimator
ledger
    Measurement records and export
image_io
    Folder listing and image decoding
config
    JSON configuration
logs
    Logging setup

See Also
--------
doc_ui.ui : PySide6 GUI components
"""

from .calibration import CalibrationProfile, estimate_doc, get_profile
from .config import AppConfig, ConfigError, RedoPolicy, load_config
from .image_io import ImageBuffer, ImageLoadError, list_image_files, load_image_buffer
from .ledger import MeasurementRecord, ResultsLedger
from .logs import configure_logging
from .patch_stats import PatchStats, Point, extract_patch_stats
from .workflow import Notice, WorkflowController, WorkflowState

__all__ = [
    "AppConfig",
    "CalibrationProfile",
    "ConfigError",
    "ImageBuffer",
    "ImageLoadError",
    "MeasurementRecord",
    "Notice",
    "PatchStats",
    "Point",
    "RedoPolicy",
    "ResultsLedger",
    "WorkflowController",
    "WorkflowState",
    "configure_logging",
    "estimate_doc",
    "extract_patch_stats",
    "get_profile",
    "list_image_files",
    "load_config",
    "load_image_buffer",
]
