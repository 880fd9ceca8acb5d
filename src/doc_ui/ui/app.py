"""Application entry point."""

import argparse
import sys

from PySide6.QtWidgets import QApplication

from doc_ui.core.config import load_config
from doc_ui.core.logs import configure_logging
from doc_ui.core.workflow import WorkflowController
from .main_window import MainWindow


def main(argv=None):
    """
    Launch the Cup of Carbon GUI application.

    Parameters
    ----------
    argv : list of str, optional
        Command line, defaults to ``sys.argv``

    Returns
    -------
    int
        Exit code (0 for success)
    """
    argv = sys.argv if argv is None else argv
    parser = argparse.ArgumentParser(prog="cupofcarbon")
    parser.add_argument("--config", help="JSON settings file (overrides $DOC_UI_CONFIG)")
    args, qt_args = parser.parse_known_args(argv[1:])

    config = load_config(args.config)
    logger = configure_logging(config.log_level, config.log_file)
    logger.info("Starting Cup of Carbon (calibration %s)", config.calibration.name)

    app = QApplication([argv[0], *qt_args])
    app.setApplicationName("Cup of Carbon")
    app.setOrganizationName("University of Glasgow")
    app.setStyle("Fusion")

    window = MainWindow(WorkflowController(config))
    window.show()

    return app.exec()
