"""
dataverifier CLI - Verify records against declarative profiles.

Commands:
    dataverifier check      Verify a JSON/YAML record against a profile
    dataverifier filters    List built-in filter names
    dataverifier show       Summarise frozen results
"""

from typing import Optional

import click

from dataverifier.config import get_config
from dataverifier.log import configure_logging

from .verify import check, filters, show


@click.group()
@click.version_option(package_name="data-verifier")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Override DATAVERIFIER_LOG_LEVEL",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"]),
    default=None,
    help="Override DATAVERIFIER_LOG_FORMAT",
)
def main(log_level: Optional[str], log_format: Optional[str]):
    """dataverifier - Profile-driven record verification."""
    config = get_config()
    configure_logging(log_level or config.log_level, log_format or config.log_format)


main.add_command(check)
main.add_command(filters)
main.add_command(show)


if __name__ == "__main__":
    main()
