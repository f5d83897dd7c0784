import os
import sys

# Put project root on sys.path so autoapi/doctest can import the package
sys.path.insert(0, os.path.abspath("../.."))

project = "sineprec"
author = "sineprec developers"

extensions = [
    "autoapi.extension",
    "sphinx.ext.doctest",
    "sphinx.ext.napoleon",
    "myst_nb",
    "sphinx_copybutton",
]
templates_path = []
exclude_patterns = []

nb_execution_mode = "off"

html_theme = "sphinx_book_theme"
html_theme_options = {
    "path_to_docs": "docs/source",
}

myst_enable_extensions = [
    "deflist",
    "colon_fence",
]

master_doc = "index"

# ---------------------------------------------------------------------------
# sphinx-autoapi: API reference for the `sineprec` package
# ---------------------------------------------------------------------------
autoapi_type = "python"
autoapi_dirs = ["../../sineprec"]

autoapi_ignore = [
    "**/docs/**",
    "**/tests/**",
    "**/.venv/**",
    "**/__pycache__/**",
]

autodoc_typehints = "description"

autoapi_options = [
    "members",
    "undoc-members",
    "show-inheritance",
    "show-module-summary",
]

autoapi_python_class_content = "both"
