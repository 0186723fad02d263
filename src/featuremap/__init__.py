"""
Featuremap: column transformer feature resolution.

This package resolves fitted column transformer definitions into
ordered lists of feature descriptors, creating raw input fields on demand
and delegating to sub-transformers for derived features.
"""

from importlib.metadata import version

__version__ = version("featuremap")

__all__ = ["__version__"]
