"""
Cup of Carbon: DOC Estimation from Photographs
===============================================

Cup of Carbon provides a desktop GUI for estimating dissolved organic carbon
(DOC) in a water sample from a photograph that shows both the sample and a
white paper reference. The user clicks the water, then the paper; the
application samples a fixed square patch at each click, compares the blue
channels, and converts the result into a DOC estimate with an empirical
calibration.

The application supports two workflows:

1. **Single image**: select one photograph and measure it once
2. **Folder batch**: walk through every photograph in a folder, advancing
   automatically after each measurement, with skip, redo, delete-last and
   reset commands

Results accumulate in a table that can be downloaded as
``rgb_values_<date>.csv``.

Quick Start
-----------
>>> from doc_ui.core import WorkflowController, Point
>>>
>>> wf = WorkflowController()
>>> wf.select_single_image("cup.jpg")
True
>>> wf.submit_point(Point(150, 420))  # water
>>> record = wf.submit_point(Point(900, 420))  # paper
>>> print(f"DOC = {record.estimated_doc:.3f}")

Main Modules
------------
core
    Workflow state machine, patch statistics, calibration, ledger, I/O
ui
    PySide6 GUI components

See Also
--------
README.md : Project overview and installation instructions
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
