# Sphinx configuration for the Cup of Carbon API docs.
# Build with: sphinx-build -b html docs docs/_build/html

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from doc_ui import __version__  # noqa: E402

project = "Cup of Carbon"
author = "Cup of Carbon Team"
copyright = "2025, Cup of Carbon Team"
release = __version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
]

exclude_patterns = ["_build"]

html_theme = "pydata_sphinx_theme"
html_theme_options = {"logo": {"text": "Cup of Carbon"}}

# core modules use numpy-style docstrings
napoleon_google_docstring = False
napoleon_numpy_docstring = True

autodoc_default_options = {"members": True, "member-order": "bysource"}
autodoc_typehints = "description"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "pandas": ("https://pandas.pydata.org/docs/", None),
}
