"""Encode executor.

Runs an EncodePlan against the encoder: an optional first (analysis) pass
followed by the pass that writes the destination. The executor tracks its
progress as an EncodeState and never retries; the encoder's exit code is
returned unchanged.
"""

from __future__ import annotations

import logging
import shlex
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .command import build_first_pass_command, build_second_pass_command
from .ffmpeg import Encoder, FFmpegEncoder
from .plan import EncodePlan

logger = logging.getLogger(__name__)


class EncodeState(Enum):
    """Progress of one encode invocation."""

    IDLE = "idle"
    FIRST_PASS = "first_pass"
    SECOND_PASS = "second_pass"
    DONE = "done"
    FAILED = "failed"


ENCODE_STATE_TRANSITIONS: dict[EncodeState, set[EncodeState]] = {
    EncodeState.IDLE: {EncodeState.FIRST_PASS, EncodeState.SECOND_PASS},
    EncodeState.FIRST_PASS: {EncodeState.SECOND_PASS, EncodeState.FAILED},
    EncodeState.SECOND_PASS: {EncodeState.DONE, EncodeState.FAILED},
    EncodeState.DONE: set(),
    EncodeState.FAILED: set(),
}


class InvalidEncodeTransitionError(Exception):
    """Raised when an encode state transition is not allowed."""

    def __init__(self, current: EncodeState, target: EncodeState) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Invalid encode transition: {current.value} -> {target.value}"
        )


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of an encode invocation."""

    success: bool
    exit_code: int
    state: EncodeState
    commands: tuple[tuple[str, ...], ...] = field(default_factory=tuple)
    """Commands run (or, in dry mode, that would be run), in order."""

    def render_commands(self) -> list[str]:
        """Commands as shell-quoted lines."""
        return [shlex.join(cmd) for cmd in self.commands]


def remove_pass_logs(plan: EncodePlan) -> None:
    """Remove the pass-log files named by the plan.

    Missing files are ignored; other errors are logged and do not propagate.
    """
    for log_file in plan.pass_log_files:
        try:
            log_file.unlink()
            logger.debug("Removed pass log file: %s", log_file)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning("Could not remove pass log file %s: %s", log_file, e)


class EncodeExecutor:
    """Sequences the encoder passes for a plan.

    Example:
        executor = EncodeExecutor(ffmpeg_path=Path("/usr/bin/ffmpeg"))
        result = executor.execute(plan, source, destination)
        if not result.success:
            sys.exit(result.exit_code)
    """

    def __init__(
        self,
        ffmpeg_path: Path,
        encoder: Encoder | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the executor.

        Args:
            ffmpeg_path: Path to the ffmpeg binary used in commands.
            encoder: Runs commands (default: FFmpegEncoder).
            dry_run: If True, only render the commands.
        """
        self.ffmpeg_path = ffmpeg_path
        self.encoder = encoder if encoder is not None else FFmpegEncoder()
        self.dry_run = dry_run
        self._state = EncodeState.IDLE

    @property
    def state(self) -> EncodeState:
        return self._state

    def _transition(self, target: EncodeState) -> None:
        if target not in ENCODE_STATE_TRANSITIONS[self._state]:
            raise InvalidEncodeTransitionError(self._state, target)
        logger.debug("Encode state: %s -> %s", self._state.value, target.value)
        self._state = target

    def build_commands(
        self, plan: EncodePlan, source: Path, destination: Path
    ) -> list[list[str]]:
        """All commands for the plan in execution order."""
        commands = []
        if plan.two_pass:
            commands.append(build_first_pass_command(plan, self.ffmpeg_path, source))
        commands.append(
            build_second_pass_command(plan, self.ffmpeg_path, source, destination)
        )
        return commands

    def execute(
        self, plan: EncodePlan, source: Path, destination: Path
    ) -> EncodeResult:
        """Run the plan.

        Args:
            plan: Encode plan.
            source: Source media file.
            destination: Output file; written only by the last pass.

        Returns:
            EncodeResult. On failure, exit_code is the encoder's exit code.
        """
        self._state = EncodeState.IDLE
        commands = self.build_commands(plan, source, destination)

        if self.dry_run:
            return EncodeResult(
                success=True,
                exit_code=0,
                state=self._state,
                commands=tuple(tuple(cmd) for cmd in commands),
            )

        if plan.two_pass:
            try:
                return self._execute_two_pass(plan, commands[0], commands[1])
            finally:
                remove_pass_logs(plan)
        return self._execute_single_pass(commands[0])

    def _run_pass(self, label: str, cmd: list[str]) -> int:
        logger.info(
            "Starting %s: %s",
            label,
            cmd[-1],
            extra={"command": shlex.join(cmd), "pass": label},
        )
        start = time.monotonic()
        rc = self.encoder.run(cmd)
        logger.info(
            "%s finished with exit code %d",
            label,
            rc,
            extra={"exit_code": rc, "elapsed_seconds": round(time.monotonic() - start, 3)},
        )
        return rc

    def _execute_single_pass(self, cmd: list[str]) -> EncodeResult:
        self._transition(EncodeState.SECOND_PASS)
        return self._finish(self._run_pass("encode", cmd), ran=[cmd])

    def _execute_two_pass(
        self, plan: EncodePlan, cmd1: list[str], cmd2: list[str]
    ) -> EncodeResult:
        """Run both passes; the caller removes the pass logs afterwards."""
        self._transition(EncodeState.FIRST_PASS)
        rc1 = self._run_pass("pass 1", cmd1)
        if rc1 != 0:
            logger.error(
                "First pass failed with exit code %d, skipping second pass",
                rc1,
                extra={"pass_log_prefix": plan.pass_log_prefix},
            )
            self._transition(EncodeState.FAILED)
            return EncodeResult(
                success=False,
                exit_code=rc1,
                state=self._state,
                commands=(tuple(cmd1),),
            )

        self._transition(EncodeState.SECOND_PASS)
        return self._finish(self._run_pass("pass 2", cmd2), ran=[cmd1, cmd2])

    def _finish(self, rc: int, ran: list[list[str]]) -> EncodeResult:
        commands = tuple(tuple(cmd) for cmd in ran)
        if rc != 0:
            logger.error("Encode failed with exit code %d", rc)
            self._transition(EncodeState.FAILED)
            return EncodeResult(
                success=False, exit_code=rc, state=self._state, commands=commands
            )
        self._transition(EncodeState.DONE)
        return EncodeResult(
            success=True, exit_code=0, state=self._state, commands=commands
        )
