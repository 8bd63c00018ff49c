# Sphinx configuration for the itc-optics API reference.
import os
import sys

# autodoc imports itcoptics straight from the checkout
sys.path.insert(0, os.path.abspath(".."))

from itcoptics import __version__  # noqa: E402

# -- Project information -----------------------------------------------------
project = 'itc-optics'
copyright = '2026, itc-optics Contributors'
author = 'itc-optics Contributors'
version = __version__
release = __version__

# -- General configuration ---------------------------------------------------
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.intersphinx',
    'sphinx.ext.viewcode',
    'myst_parser',  # DESIGN.md and the other Markdown notes
]

templates_path = ['_templates']
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# Calibration arrays and interpolators link to the upstream docs
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable', None),
    'scipy': ('https://docs.scipy.org/doc/scipy', None),
    'pandas': ('https://pandas.pydata.org/docs', None),
}

# -- Options for HTML output -------------------------------------------------
html_theme = 'sphinx_rtd_theme'
html_static_path = ['_static']

# -- Extension configuration -------------------------------------------------
napoleon_numpy_docstring = True
napoleon_google_docstring = False
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'

# MyST Parser settings
myst_enable_extensions = [
    "colon_fence",
    "deflist",
]
