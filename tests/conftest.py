"""Pytest configuration and shared fixtures for videotools tests.

``FakeProcessManager`` stands in for ffmpeg: it records every command and
writes a small file to the command's output unless told to fail.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Optional

# Add project root to sys.path so `videotools` is importable
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from videotools.executor.command_builder import FFMPEGCommand
from videotools.executor.process_manager import ProcessResult
from videotools.operations import VideoTools
from videotools.temp_artifacts import TempArtifactManager


class FakeProcessManager:
    """Records commands and simulates ffmpeg writing its output."""

    def __init__(self, fail_when: Optional[Callable[[FFMPEGCommand], bool]] = None,
                 output_bytes: bytes = b"fake media"):
        self.commands: list[FFMPEGCommand] = []
        self.fail_when = fail_when or (lambda cmd: False)
        self.output_bytes = output_bytes

    @property
    def calls(self) -> list[list[str]]:
        return [cmd.to_args() for cmd in self.commands]

    def execute(self, command: FFMPEGCommand, timeout=None) -> ProcessResult:
        self.commands.append(command)
        output = command.outputs[0] if command.outputs else None

        if self.fail_when(command):
            if output:
                # ffmpeg often leaves a truncated file behind on failure
                Path(output).write_bytes(b"partial")
            return ProcessResult(
                success=False,
                return_code=1,
                stdout="",
                stderr="Error while decoding stream #0:0",
                command=command.to_string(),
                output_path=output,
                error_message="Error while decoding stream #0:0",
            )

        if output:
            Path(output).write_bytes(self.output_bytes)
        return ProcessResult(
            success=True,
            return_code=0,
            stdout="",
            stderr="",
            command=command.to_string(),
            output_path=output,
        )


@pytest.fixture
def temp_dir(tmp_path):
    """Isolated temp directory handed to TempArtifactManager."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def fake_pm():
    return FakeProcessManager()


@pytest.fixture
def tools(fake_pm, temp_dir):
    return VideoTools(
        process_manager=fake_pm,
        temp_manager=TempArtifactManager(temp_dir),
    )


@pytest.fixture
def video_file(tmp_path):
    path = tmp_path / "input.mp4"
    path.write_bytes(b"fake video data")
    return path


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(b"fake png data")
    return path


@pytest.fixture
def make_tools(temp_dir):
    """Build a VideoTools around a FakeProcessManager configured per test."""
    def _make(**fake_kwargs):
        pm = FakeProcessManager(**fake_kwargs)
        return VideoTools(process_manager=pm, temp_manager=TempArtifactManager(temp_dir)), pm
    return _make
