"""Main function for vibrapy."""

from vibrapy.core import cli


def run_main() -> None:
    """Main entry point to vibrapy."""
    cli.app()


if __name__ == "__main__":
    cli.app()
