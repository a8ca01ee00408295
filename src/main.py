"""Entry point for the Class Documentation Generator.

Delegates to the Click command group; configuration and logging are
set up by the group itself.
"""

from src.cli.commands import classdoc


def main() -> None:
    """Launch the CLI."""
    classdoc()


if __name__ == "__main__":
    main()
