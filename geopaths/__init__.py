"""
GeoPaths - interactive authoring of named geographic paths.
"""

__version__ = "0.1.0"
