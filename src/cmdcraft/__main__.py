"""Allow running cmdcraft as a module: ``python -m cmdcraft``."""

from cmdcraft.cli import app

if __name__ == "__main__":
    app()
