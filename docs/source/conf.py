import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath("../../src"))

project = "PySATL Fusion"
copyright = f"{datetime.now().year}, PySATL project"
author = "PySATL Fusion contributors"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx_rtd_theme",
    "sphinx_autodoc_typehints",
    "sphinx_copybutton",
    "sphinx.ext.autosummary",
]
autosummary_generate = True
templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Napoleon (NumPy style docstrings) --
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = True
napoleon_include_private_with_doc = False
napoleon_use_admonition_for_notes = True
napoleon_use_param = True
napoleon_use_rtype = True
napoleon_preprocess_types = True

# -- Autodocumentation settings --
autodoc_default_options = {
    "member-order": "bysource",
    "special-members": "__init__",
    "undoc-members": True,
    "exclude-members": "__weakref__",
    "show-inheritance": True,
}

autodoc_typehints = "description"
autodoc_typehints_format = "short"

# -- Intersphinx --
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
}

# -- HTML --
html_theme = "sphinx_rtd_theme"
html_theme_options = {
    "collapse_navigation": False,
    "sticky_navigation": True,
    "navigation_depth": 4,
}

# -- Compile --
copybutton_prompt_text = r">>> |\.\.\. |\$ "
copybutton_prompt_is_regexp = True

suppress_warnings = [
    "ref.misc",
]

# forward references
autodoc_type_aliases = {
    "NodeId": "pysatl_fusion.types.NodeId",
    "NodeKind": "pysatl_fusion.types.NodeKind",
    "PeakReference": "pysatl_fusion.types.PeakReference",
    "Parametrization": "pysatl_fusion.distributions.parametrizations.Parametrization",
    "GaussianDistribution": "pysatl_fusion.distributions.distribution.GaussianDistribution",
    "PointSample": "pysatl_fusion.distributions.sampling.PointSample",
    "DistributionGraph": "pysatl_fusion.graph.graph.DistributionGraph",
    "FusionConfig": "pysatl_fusion.config.FusionConfig",
}

nitpicky = False
