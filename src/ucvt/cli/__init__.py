"""CLI module for ucvt."""

import logging
from pathlib import Path

import click

from ucvt.cli.exit_codes import ExitCode
from ucvt.config import get_config
from ucvt.config.logging_factory import build_logging_config
from ucvt.exceptions import ConfigError
from ucvt.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="ucvt")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.ucvt/config.toml or UCVT_CONFIG_PATH).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """ucvt - UTF-8 conversion and case-insensitive comparison tools."""
    try:
        config = get_config(config_path, strict=config_path is not None)
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except (ConfigError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.CONFIG_ERROR)

    configure_logging(logging_config)
    logger.debug("Loaded configuration: %s", config)
    ctx.obj = config


def _register_commands() -> None:
    from ucvt.cli.compare import compare_command
    from ucvt.cli.convert import convert_command
    from ucvt.cli.fold import fold_command
    from ucvt.cli.gen_table import gen_table_command

    main.add_command(compare_command)
    main.add_command(convert_command)
    main.add_command(fold_command)
    main.add_command(gen_table_command)


_register_commands()
