"""CLI entry point for health-tracker."""

import click

from . import __version__
from .commands import backup, goals, init, journal, profile, programs, serve, trends
from .config import get_settings
from .log import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="health-tracker")
def main():
    """health-tracker: personal health and training journal.

    Log body measurements, daily habits and workouts, follow a training
    program, and track goals over time. All data stays on this machine.

    Example usage:

        # Initialize the database
        health-tracker init

        # Record today's numbers
        health-tracker journal daily --weight 80 --protein 150

        # See how it's going
        health-tracker trends series weight
        health-tracker goals list
    """
    configure_logging(get_settings().log_level)


main.add_command(init)
main.add_command(journal)
main.add_command(programs)
main.add_command(goals)
main.add_command(profile)
main.add_command(trends)
main.add_command(backup)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
