"""Sphinx configuration for SheetGen documentation.

sphinx-autoapi generates the API reference straight from the package
docstrings; there are no hand-written .rst files for modules.
"""

import logging
import sys
import tomllib
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))


def get_version_from_pyproject() -> str:
    """Read version from pyproject.toml to maintain single source of truth."""
    pyproject_path = project_root / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


# -- Project information -----------------------------------------------------
project = "SheetGen"
copyright = "2026, SheetGen contributors"
author = "SheetGen contributors"
release = get_version_from_pyproject()
version = release

# -- General configuration ---------------------------------------------------
extensions = [
    "autoapi.extension",
    "sphinx.ext.napoleon",  # Google-style docstrings
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx_autodoc_typehints",
    "myst_parser",  # Markdown pages (README, DESIGN)
]

# -- AutoAPI configuration ---------------------------------------------------
autoapi_type = "python"
autoapi_dirs = [
    str(project_root / "src" / "sheetgen"),
]
autoapi_options = [
    "members",
    "undoc-members",
    "show-inheritance",
    "show-module-summary",
]
autoapi_ignore = [
    "*/__pycache__/*",
    "*/__main__.py",
]
autoapi_add_toctree_entry = True
autoapi_keep_files = False
autoapi_member_order = "bysource"
autoapi_python_class_content = "both"

# -- Napoleon settings for Google-style docstrings --------------------------
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_use_param = True
napoleon_use_rtype = True
napoleon_attr_annotations = True

# -- Autodoc typehints settings ----------------------------------------------
autodoc_typehints = "description"
autodoc_typehints_description_target = "documented"

# -- Intersphinx mapping -----------------------------------------------------
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}

# -- Source file configuration -----------------------------------------------
exclude_patterns = []
source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

# -- HTML output options -----------------------------------------------------
html_theme = "sphinx_rtd_theme"
html_theme_options = {
    "navigation_depth": 4,
    "collapse_navigation": False,
}

myst_heading_anchors = 3

suppress_warnings = [
    "myst.header",
]


# -- Custom warning filter for dataclass duplicate warnings -----------------
class FilterDuplicateObjectWarnings(logging.Filter):
    """
    Filter to suppress 'duplicate object description' warnings for dataclass attributes.

    With autoapi_python_class_content = "both", dataclass attributes are
    documented from both the class docstring and the generated __init__.
    """

    def filter(self, record):
        is_duplicate_warning = (
            "duplicate object description of %s, other instance in %s, use :no-index: for one of them"
            in record.msg
        )
        return not is_duplicate_warning


def setup(app):
    """Sphinx setup hook to register custom warning filter."""
    logger = logging.getLogger("sphinx")
    logger.addFilter(FilterDuplicateObjectWarnings())
