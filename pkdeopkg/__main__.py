"""
Entry point for running pkdeopkg as a module: python -m pkdeopkg
"""

from pkdeopkg.cli.commands import app

if __name__ == "__main__":
    app()
