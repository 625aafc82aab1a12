"""CLI module for playfit."""

import logging
from pathlib import Path

import click

from playfit import __version__
from playfit.config import ConfigError, ConfigSource, load_config
from playfit.logging import configure_logging

from .exit_codes import ExitCode
from .output import error_exit

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="playfit")
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
    help="Write logs to this file.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--log-stderr",
    is_flag=True,
    default=False,
    help="Also log to stderr when --log-file is set.",
)
@click.option(
    "--policy-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML policy file (overrides PLAYFIT_POLICY_FILE).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    log_stderr: bool,
    policy_file: Path | None,
) -> None:
    """playfit - Make media files play on a target device."""
    ctx.ensure_object(dict)

    cli_source = ConfigSource(
        logging_level=log_level,
        logging_file=log_file,
        logging_format="json" if log_json else None,
        logging_include_stderr=log_stderr or None,
    )
    try:
        config = load_config(policy_file=policy_file, cli_source=cli_source)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    configure_logging(config.logging)
    logger.debug(
        "playfit %s starting: policy_file=%s, log_level=%s",
        __version__,
        config.policy_file,
        config.logging.level,
    )

    # Preserve a config passed in by tests
    ctx.obj.setdefault("config", config)


# Defer import to avoid circular dependency
def _register_commands():
    from playfit.cli.encode import dry_command, start_command
    from playfit.cli.info import info_command

    main.add_command(info_command)
    main.add_command(start_command)
    main.add_command(dry_command)


_register_commands()
