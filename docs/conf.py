# Sphinx configuration for the unitalg docs.
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

# -- Project information -----------------------------------------------------

project = 'unitalg'
copyright = '2025, Parneet Sidhu'
author = 'Parneet Sidhu'
html_title = 'unitalg'

# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.viewcode',
    'sphinx_copybutton',
    "myst_parser",
]

autodoc_member_order = "bysource"
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

html_theme_options = {
    "sidebar_hide_name": False,
    "navigation_with_keys": True,
    "top_of_page_buttons": ["view"],
    "light_css_variables": {
        "color-brand-primary": "#2e7d32",
        "color-brand-content": "#1b5e20",
    },
    "dark_css_variables": {
        "color-brand-primary": "#81c784",
        "color-brand-content": "#a5d6a7",
    },
}

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}
