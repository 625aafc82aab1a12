"""CLI start and dry commands for playfit.

Both commands probe the source, decide, plan and resolve the destination the
same way; ``start`` runs the encoder, ``dry`` prints the command lines.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from playfit.cli.common import check_source, check_tools, get_config, probe_source
from playfit.cli.exit_codes import ExitCode
from playfit.cli.output import error_exit
from playfit.cli.paths import (
    DestinationContainerError,
    DestinationExistsError,
    resolve_destination,
)
from playfit.executor import EncodeExecutor, EncodePlan, build_plan
from playfit.policy import build_report
from playfit.tools import find_tool

logger = logging.getLogger(__name__)


def exit_status(returncode: int) -> int:
    """Map an encoder return code to a process exit status.

    A process killed by signal N reports -N; shells report that as 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def _prepare(
    ctx: click.Context, source: Path, destination: Path, tool_names: list[str]
) -> tuple[dict[str, Path], EncodePlan, Path, Path]:
    """Run every check and build the plan.

    Returns:
        Tuple of (tool paths, plan, source, resolved destination).
    """
    config = get_config(ctx)
    tools = check_tools(ctx, tool_names)
    source = check_source(source)

    facts = probe_source(ctx, source, tools["ffprobe"])
    report = build_report(config.policy, facts)
    plan = build_plan(report, config.policy)

    try:
        output = resolve_destination(destination, source, plan.container)
    except (DestinationContainerError, DestinationExistsError) as e:
        error_exit(str(e), ExitCode.INPUT_ERROR)

    return tools, plan, source, output


@click.command("start")
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
@click.pass_context
def start_command(ctx: click.Context, source: Path, destination: Path) -> None:
    """Convert SOURCE so it plays on the device.

    DESTINATION is an existing directory or an output file whose extension
    is the output container. Existing files are never overwritten. Exits
    with the encoder's exit code on failure (128 + N if it was killed by
    signal N).
    """
    tools, plan, source, output = _prepare(
        ctx, source, destination, ["ffprobe", "ffmpeg"]
    )

    executor = EncodeExecutor(ffmpeg_path=tools["ffmpeg"], encoder=ctx.obj.get("encoder"))
    result = executor.execute(plan, source, output)

    if not result.success:
        error_exit(
            f"Encoding failed with exit code {result.exit_code}",
            exit_status(result.exit_code),
        )

    click.echo(f"Wrote {output}")
    sys.exit(ExitCode.SUCCESS)


@click.command("dry")
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
@click.pass_context
def dry_command(ctx: click.Context, source: Path, destination: Path) -> None:
    """Print the encoder command(s) for SOURCE without running them."""
    tools, plan, source, output = _prepare(ctx, source, destination, ["ffprobe"])

    # ffmpeg is not required for a dry run; fall back to the bare name
    ffmpeg_path = find_tool("ffmpeg", get_config(ctx).tools.ffmpeg) or Path("ffmpeg")

    executor = EncodeExecutor(ffmpeg_path=ffmpeg_path, dry_run=True)
    result = executor.execute(plan, source, output)

    for line in result.render_commands():
        click.echo(line)
