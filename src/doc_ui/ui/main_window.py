"""Main window for the Cup of Carbon application."""

import logging

from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QHBoxLayout,
    QVBoxLayout,
    QPushButton,
    QLabel,
    QFileDialog,
    QGroupBox,
    QTableWidget,
    QTableWidgetItem,
    QHeaderView,
    QMessageBox,
)
from PySide6.QtCore import Qt

from doc_ui import __version__
from doc_ui.core.ledger import COLUMNS
from doc_ui.core.patch_stats import Point
from doc_ui.core.workflow import WorkflowController, WorkflowState
from .image_canvas import ImageCanvas, buffer_to_pixmap

logger = logging.getLogger(__name__)

INSTRUCTIONS = """
<p><b>Instructions</b></p>
<ol>
<li>Select a single image, or select a folder and press
<i>Start Folder Analysis</i> to analyze multiple images.</li>
<li>For each image, click on two regions:
<ul><li>First click: the <b>Water</b> region.</li>
<li>Second click: the <b>Paper</b> region.</li></ul></li>
<li>The app automatically proceeds to the next image after analysis.</li>
<li>Use <i>Skip to Next Image</i> to bypass an image.</li>
<li>Use <i>Redo Last Measurement</i> to reselect areas for the previous image.</li>
<li>Use <i>Download Results as CSV</i> to save the results table.</li>
<li>Use <i>Delete Last Line</i> to remove the last entry from the table.</li>
</ol>
<p>Each click marks the top-left corner of a square sampling patch.</p>
"""

STATE_HINTS = {
    WorkflowState.EMPTY: "No image awaiting selection",
    WorkflowState.AWAITING_FIRST_POINT: "Click the WATER region",
    WorkflowState.AWAITING_SECOND_POINT: "Click the PAPER region",
    WorkflowState.QUEUE_EXHAUSTED: "All images analyzed",
}


class MainWindow(QMainWindow):
    """
    Main application window.

    Parameters
    ----------
    controller : WorkflowController
        Session the window drives
    parent : QWidget, optional
        Parent widget, by default None

    Attributes
    ----------
    canvas : ImageCanvas
        Image display and click capture
    table : QTableWidget
        Read-only view of the results ledger
    """

    def __init__(self, controller: WorkflowController, parent=None):
        super().__init__(parent)
        self.wf = controller
        self._shown = None
        self.wf.add_listener(self._show_notice)
        self.setWindowTitle(
            "Cup of Carbon - Estimation of Dissolved Organic Carbon (DOC) from images"
        )
        self.setMinimumSize(1200, 800)
        self._build()
        self._refresh()

    def _build(self):
        central = QWidget()
        self.setCentralWidget(central)
        L = QHBoxLayout(central)

        R = QVBoxLayout()
        title = QLabel(f"Cup of Carbon v{__version__}")
        title.setStyleSheet("font-size: 20px; font-weight: bold; margin: 6px;")
        R.addWidget(title)

        g = QGroupBox("Images")
        v = QVBoxLayout()
        h = QHBoxLayout()
        image_btn = QPushButton("Choose Image…")
        image_btn.clicked.connect(self._choose_image)
        folder_btn = QPushButton("Select Folder…")
        folder_btn.clicked.connect(self._choose_folder)
        h.addWidget(image_btn)
        h.addWidget(folder_btn)
        v.addLayout(h)
        self.source_lbl = QLabel("Nothing selected")
        self.source_lbl.setStyleSheet("color: #666;")
        self.source_lbl.setWordWrap(True)
        v.addWidget(self.source_lbl)
        g.setLayout(v)
        R.addWidget(g)

        help_lbl = QLabel(INSTRUCTIONS)
        help_lbl.setWordWrap(True)
        R.addWidget(help_lbl)

        ops = QVBoxLayout()
        self.start_btn = QPushButton("Start Folder Analysis")
        self.start_btn.clicked.connect(lambda: self._run(self.wf.start_analysis))
        self.skip_btn = QPushButton("Skip to Next Image")
        self.skip_btn.clicked.connect(lambda: self._run(self.wf.skip_to_next))
        self.redo_btn = QPushButton("Redo Last Measurement")
        self.redo_btn.clicked.connect(lambda: self._run(self.wf.redo_last_measurement))
        self.delete_btn = QPushButton("Delete Last Line")
        self.delete_btn.clicked.connect(lambda: self._run(self.wf.delete_last_line))
        self.reset_btn = QPushButton("Reset Table")
        self.reset_btn.clicked.connect(lambda: self._run(self.wf.reset))
        self.download_btn = QPushButton("Download Results as CSV")
        self.download_btn.clicked.connect(self._download)
        for b in [
            self.start_btn,
            self.skip_btn,
            self.redo_btn,
            self.delete_btn,
            self.reset_btn,
            self.download_btn,
        ]:
            ops.addWidget(b)
        R.addLayout(ops)

        self.status_lbl = QLabel("")
        self.status_lbl.setStyleSheet("font-weight: bold;")
        R.addWidget(self.status_lbl)
        cal = self.wf.config.calibration
        R.addWidget(
            QLabel(f"Calibration: {cal.name} (offset {cal.offset}, slope {cal.slope})")
        )

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.ResizeToContents
        )
        R.addWidget(self.table, 1)
        L.addLayout(R, 2)

        self.canvas = ImageCanvas(self)
        self.canvas.patch_size = self.wf.config.patch_size
        self.canvas.setMinimumSize(700, 700)
        self.canvas.clicked.connect(self._on_click)
        L.addWidget(self.canvas, 3)

    def _choose_image(self):
        f, _ = QFileDialog.getOpenFileName(
            self, "Choose a single image file", "", "Image Files (*.png *.jpg *.jpeg)"
        )
        if f:
            self._run(self.wf.select_single_image, f)

    def _choose_folder(self):
        d = QFileDialog.getExistingDirectory(self, "Choose a folder containing images")
        if d:
            self._run(self.wf.select_folder, d)

    def _download(self):
        d = QFileDialog.getExistingDirectory(self, "Save results to folder")
        if not d:
            return
        try:
            path = self.wf.export_csv(d)
        except OSError as e:
            logger.error("Export failed: %s", e)
            QMessageBox.critical(self, "Export Failed", str(e))
            return
        self.status_lbl.setText(f"Saved: {path}")

    def _on_click(self, x, y):
        self._run(self.wf.submit_point, Point(x, y))

    def _run(self, command, *args):
        # canvas stops accepting clicks until the command and refresh finish
        self.canvas.set_accepting(False)
        try:
            command(*args)
        finally:
            self._refresh()

    def _show_notice(self, notice):
        box = {
            "info": QMessageBox.information,
            "warning": QMessageBox.warning,
        }.get(notice.level, QMessageBox.critical)
        box(self, notice.title, notice.message)

    def _refresh(self):
        wf = self.wf
        img = wf.image
        if img is not self._shown:
            self.canvas.set_image(buffer_to_pixmap(img.pixels) if img is not None else None)
            self._shown = img
        self.canvas.set_points(wf.roi.points)
        self.canvas.set_accepting(wf.accepts_points)

        q = wf.queue
        if q is None:
            self.source_lbl.setText("Nothing selected")
        elif not q.batch:
            self.source_lbl.setText(f"Single image: {q.paths[0].name}")
        elif q.started and q.current is not None:
            self.source_lbl.setText(f"Image {q.index} of {len(q)}: {q.current.name}")
        else:
            self.source_lbl.setText(f"{len(q)} image(s) in folder")
        self.status_lbl.setText(STATE_HINTS[wf.state])

        self.start_btn.setEnabled(wf.is_batch and len(q) > 0)
        self.skip_btn.setEnabled(
            wf.is_batch and q.started and wf.state is not WorkflowState.QUEUE_EXHAUSTED
        )
        self.redo_btn.setEnabled(wf.previous_index is not None)
        self.delete_btn.setEnabled(len(wf.ledger) > 0)

        df = wf.ledger.export()
        self.table.setRowCount(len(df))
        for i, row in enumerate(df.itertuples(index=False)):
            for j, value in enumerate(row):
                text = f"{value:.4f}" if COLUMNS[j] == "Estimated_DOC" else str(value)
                item = QTableWidgetItem(text)
                if j > 0:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self.table.setItem(i, j, item)
        if len(df):
            self.table.scrollToBottom()
