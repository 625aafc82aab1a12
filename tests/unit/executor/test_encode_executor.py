"""Tests for the encode executor state machine."""

import logging
from pathlib import Path
from types import MappingProxyType

import pytest

from playfit.executor.executor import (
    ENCODE_STATE_TRANSITIONS,
    EncodeExecutor,
    EncodeState,
    InvalidEncodeTransitionError,
    remove_pass_logs,
)
from playfit.executor.plan import EncodePlan

FFMPEG = Path("/usr/bin/ffmpeg")


class FakeEncoder:
    """Encoder double that records calls and imitates ffmpeg's side effects.

    Each call pops the next exit code. A first pass writes the pass logs; a
    successful final pass writes the output file.
    """

    def __init__(self, *exit_codes: int) -> None:
        self.exit_codes = list(exit_codes)
        self.calls: list[list[str]] = []

    def run(self, args: list[str]) -> int:
        self.calls.append(args)
        if "-passlogfile" in args and args[args.index("-pass") + 1] == "1":
            prefix = args[args.index("-passlogfile") + 1]
            Path(prefix + "-0.log").write_text("stats")
            Path(prefix + "-0.log.mbtree").write_text("tree")
        rc = self.exit_codes.pop(0)
        if rc == 0 and args[-1] != "/dev/null":
            Path(args[-1]).write_text("media")
        return rc


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "in.mp4"
    path.write_text("source")
    return path


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    return tmp_path / "out.mkv"


@pytest.fixture
def two_pass_plan(tmp_path: Path) -> EncodePlan:
    return EncodePlan(
        container="mkv",
        video_codec="h264",
        target_bitrate="5184k",
        pass_count=2,
        audio_overrides=MappingProxyType({1: "aac"}),
        pass_log_prefix=str(tmp_path / "playfit-1-2pass"),
    )


@pytest.fixture
def copy_plan() -> EncodePlan:
    return EncodePlan(container="mkv")


def _logs_exist(plan: EncodePlan) -> list[bool]:
    return [p.exists() for p in plan.pass_log_files]


class TestTwoPass:
    """Two-pass sequencing and cleanup."""

    def test_success(
        self, two_pass_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """Both passes run in order and the logs are removed."""
        encoder = FakeEncoder(0, 0)
        executor = EncodeExecutor(FFMPEG, encoder=encoder)

        result = executor.execute(two_pass_plan, source, destination)

        assert result.success
        assert result.exit_code == 0
        assert result.state == EncodeState.DONE
        assert executor.state == EncodeState.DONE
        assert len(encoder.calls) == 2
        assert encoder.calls[0][encoder.calls[0].index("-pass") + 1] == "1"
        assert encoder.calls[1][encoder.calls[1].index("-pass") + 1] == "2"
        assert destination.exists()
        assert _logs_exist(two_pass_plan) == [False, False]

    def test_first_pass_failure(
        self, two_pass_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """A failed first pass removes the logs and skips the second pass."""
        encoder = FakeEncoder(1)
        executor = EncodeExecutor(FFMPEG, encoder=encoder)

        result = executor.execute(two_pass_plan, source, destination)

        assert not result.success
        assert result.exit_code == 1
        assert result.state == EncodeState.FAILED
        assert len(encoder.calls) == 1
        assert len(result.commands) == 1
        assert _logs_exist(two_pass_plan) == [False, False]
        assert not destination.exists()

    def test_exit_code_propagated_verbatim(
        self, two_pass_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """The encoder's exit code is returned unchanged."""
        executor = EncodeExecutor(FFMPEG, encoder=FakeEncoder(187))
        assert executor.execute(two_pass_plan, source, destination).exit_code == 187

    def test_second_pass_failure(
        self, two_pass_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """A failed second pass still removes the logs."""
        encoder = FakeEncoder(0, 69)
        executor = EncodeExecutor(FFMPEG, encoder=encoder)

        result = executor.execute(two_pass_plan, source, destination)

        assert not result.success
        assert result.exit_code == 69
        assert result.state == EncodeState.FAILED
        assert len(encoder.calls) == 2
        assert _logs_exist(two_pass_plan) == [False, False]

    def test_cleanup_on_encoder_exception(
        self, two_pass_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """Logs are removed even when the encoder raises."""

        class ExplodingEncoder(FakeEncoder):
            def run(self, args: list[str]) -> int:
                super().run(args)
                raise KeyboardInterrupt

        executor = EncodeExecutor(FFMPEG, encoder=ExplodingEncoder(0))
        with pytest.raises(KeyboardInterrupt):
            executor.execute(two_pass_plan, source, destination)

        assert _logs_exist(two_pass_plan) == [False, False]


class TestSinglePass:
    """Single-pass execution."""

    def test_success(
        self, copy_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """A single-pass plan runs one command that writes the destination."""
        encoder = FakeEncoder(0)
        executor = EncodeExecutor(FFMPEG, encoder=encoder)

        result = executor.execute(copy_plan, source, destination)

        assert result.success
        assert result.state == EncodeState.DONE
        assert len(encoder.calls) == 1
        assert encoder.calls[0][-1] == str(destination)
        assert destination.exists()

    def test_failure(
        self, copy_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """A failed single pass reports the exit code."""
        executor = EncodeExecutor(FFMPEG, encoder=FakeEncoder(2))

        result = executor.execute(copy_plan, source, destination)

        assert not result.success
        assert result.exit_code == 2
        assert result.state == EncodeState.FAILED


class TestDryRun:
    """Dry-run rendering."""

    def test_renders_both_passes(
        self, two_pass_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """Dry mode renders the command lines without running them."""
        encoder = FakeEncoder()
        executor = EncodeExecutor(FFMPEG, encoder=encoder, dry_run=True)

        result = executor.execute(two_pass_plan, source, destination)

        assert result.success
        assert result.exit_code == 0
        assert encoder.calls == []
        assert not destination.exists()
        lines = result.render_commands()
        assert len(lines) == 2
        assert lines[0].startswith("/usr/bin/ffmpeg -hide_banner -nostdin -y -i ")
        assert "-pass 1" in lines[0]
        assert lines[1].endswith(str(destination))

    def test_single_pass_renders_one_line(
        self, copy_plan: EncodePlan, source: Path, destination: Path
    ) -> None:
        """Only the final command is rendered for single-pass plans."""
        executor = EncodeExecutor(FFMPEG, encoder=FakeEncoder(), dry_run=True)
        assert len(executor.execute(copy_plan, source, destination).commands) == 1

    def test_quotes_paths(self, copy_plan: EncodePlan, tmp_path: Path) -> None:
        """Paths with spaces are shell-quoted."""
        executor = EncodeExecutor(FFMPEG, dry_run=True)
        result = executor.execute(
            copy_plan, tmp_path / "my movie.avi", tmp_path / "out file.mkv"
        )
        assert f"'{tmp_path / 'out file.mkv'}'" in result.render_commands()[0]


class TestStateMachine:
    """Tests for state transitions."""

    def test_initial_state(self) -> None:
        assert EncodeExecutor(FFMPEG).state == EncodeState.IDLE

    def test_terminal_states(self) -> None:
        """DONE and FAILED have no outgoing transitions."""
        assert ENCODE_STATE_TRANSITIONS[EncodeState.DONE] == set()
        assert ENCODE_STATE_TRANSITIONS[EncodeState.FAILED] == set()

    def test_idle_cannot_fail_directly(self) -> None:
        """FAILED is only reachable from a pass."""
        executor = EncodeExecutor(FFMPEG)
        with pytest.raises(InvalidEncodeTransitionError, match="idle -> failed"):
            executor._transition(EncodeState.FAILED)

    def test_executor_reusable(
        self, copy_plan: EncodePlan, source: Path, tmp_path: Path
    ) -> None:
        """Each execute starts from IDLE."""
        executor = EncodeExecutor(FFMPEG, encoder=FakeEncoder(0, 0))
        executor.execute(copy_plan, source, tmp_path / "a.mkv")
        result = executor.execute(copy_plan, source, tmp_path / "b.mkv")
        assert result.state == EncodeState.DONE


class TestRemovePassLogs:
    """Tests for remove_pass_logs."""

    def test_missing_files_ignored(self, two_pass_plan: EncodePlan) -> None:
        """Removing logs that were never written is not an error."""
        remove_pass_logs(two_pass_plan)

    def test_unremovable_file_logged(
        self,
        two_pass_plan: EncodePlan,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """An OSError other than a missing file is logged as a warning."""
        log_file = two_pass_plan.pass_log_files[0]
        log_file.mkdir()

        with caplog.at_level(logging.WARNING):
            remove_pass_logs(two_pass_plan)

        assert "Could not remove pass log file" in caplog.text
