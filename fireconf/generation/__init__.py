"""Configuration artifact generation for FIRECONF."""

from fireconf.generation.bundle import BundleGenerator
from fireconf.generation.templates import BUNDLE, REQUIRED_VARIABLES

__all__ = [
    "BUNDLE",
    "BundleGenerator",
    "REQUIRED_VARIABLES",
]
