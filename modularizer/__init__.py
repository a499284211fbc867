"""modularizer -- interactive Angular module scaffolding."""

__version__ = "1.0.0"
