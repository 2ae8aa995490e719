"""Entry point for running quire as a module.

Usage:
    python -m quire [command] [options]

Example:
    python -m quire build --root my-site
    python -m quire render src/index.html
"""

from quire.cli import app

if __name__ == "__main__":
    app()
