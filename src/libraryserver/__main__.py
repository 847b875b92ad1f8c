"""Main entry point for the libraryserver package."""

from libraryserver.cli import app


if __name__ == "__main__":
    app()
