"""TradeTrack CLI main entry point."""

from pathlib import Path
from typing import Optional

import click
import yaml

from tradetrack import __version__
from tradetrack.cli.commands import (
    compound_command,
    consistency_command,
    kelly_command,
    position_size_command,
    risk_reward_command,
    sharpe_command,
)
from tradetrack.system import LoggerFactory, reload_system_config


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (default: $TRADETRACK_CONFIG or config/tradetrack.yaml)",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override logging level (DEBUG shows which estimation methods were tried)",
)
def main(config_file: Optional[Path], log_level: Optional[str]):
    """TradeTrack - Trading performance and risk calculators"""
    try:
        system_config = reload_system_config(config_file)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    if log_level:
        system_config.logging.level = log_level.upper()
    LoggerFactory.configure(system_config.logging.to_logger_config())


# Register commands
main.add_command(sharpe_command)
main.add_command(consistency_command)
main.add_command(kelly_command)
main.add_command(compound_command)
main.add_command(position_size_command)
main.add_command(risk_reward_command)


if __name__ == "__main__":
    main()
