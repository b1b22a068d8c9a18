"""Main entry point for `python -m colorsensor`."""

from colorsensor.cli.main import cli

if __name__ == "__main__":
    cli()
