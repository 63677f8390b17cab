"""FIRECONF - Provision Firebase backend configuration for Flutter apps.

This package provides a Python CLI application that resolves a Firebase
project and a set of target platforms, then generates configuration
artifacts for them.
"""

__version__ = "0.3.0"
SCRIPT_NAME = "FIRECONF"
DESKTOP_SUPPORT_PACKAGE = "firebase_core_desktop"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
    "DESKTOP_SUPPORT_PACKAGE",
]
