# depgrep/main.py
"""Main entry point for the depgrep CLI application."""

from depgrep.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="depgrep")

if __name__ == '__main__':
    entrypoint()
