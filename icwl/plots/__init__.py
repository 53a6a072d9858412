# icwl/plots/__init__.py

from .generate_plots import generate_plots

__all__ = [
    "generate_plots"
]
