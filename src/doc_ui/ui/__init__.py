"""
UI Components for the Cup of Carbon Application
===============================================

This module provides the PySide6 graphical user interface on top of
``doc_ui.core``:

1. **Image selection**
   - Choose a single photograph, or a folder of photographs
   - Start the folder analysis at the first image

2. **Region selection**
   - First click on the water sample, second click on the white paper
   - Patch outlines drawn over the image for both clicks
   - Automatic advance to the next photograph after each measurement

3. **Results**
   - Live results table (one row per measurement)
   - Skip, redo, delete-last-line and reset commands
   - Download as ``rgb_values_<date>.csv``

Design Philosophy
-----------------
**Guided workflow ("no wrong moves")**:
- Buttons enable/disable based on workflow state
- The canvas only accepts clicks while a point is awaited
- Every user-visible event is shown in a message box

UI Components
-------------
MainWindow
    Command buttons, instructions, results table and canvas
ImageCanvas
    Image display that maps clicks to image pixel coordinates

Examples
--------
>>> from doc_ui.ui.app import main
>>> main()

See Also
--------
doc_ui.core : Workflow state machine and measurement logic
apps.gui_app : Entry point for launching the GUI
"""

__all__ = []
