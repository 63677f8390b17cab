"""Entry point for running fireconf as a module.

This allows running the application with:
    python -m fireconf create [OPTIONS]
"""

from fireconf.cli import app

if __name__ == "__main__":
    app()
