"""CLI info command for playfit."""

import logging
import sys
from pathlib import Path

import click

from playfit.cli.common import check_source, check_tools, get_config, probe_source
from playfit.cli.exit_codes import ExitCode
from playfit.policy import build_report, format_human, format_json

logger = logging.getLogger(__name__)


@click.command("info")
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def info_command(ctx: click.Context, source: Path, output_format: str) -> None:
    """Show what must be converted for SOURCE to play on the device.

    Exits 0 when the file is fully compatible and 3 when any conversion is
    needed. With ``--format json`` errors are reported as JSON as well.
    """
    config = get_config(ctx)
    json_output = output_format == "json"
    tools = check_tools(ctx, ["ffprobe"], json_output)
    source = check_source(source, json_output)

    facts = probe_source(ctx, source, tools["ffprobe"], json_output)
    report = build_report(config.policy, facts)

    if json_output:
        click.echo(format_json(report))
    else:
        click.echo(format_human(report))

    logger.info(
        "Report for %s: all_copy=%s",
        source,
        report.all_copy,
        extra={"source": str(source), "all_copy": report.all_copy},
    )
    sys.exit(ExitCode.SUCCESS if report.all_copy else ExitCode.CONVERSION_NEEDED)
